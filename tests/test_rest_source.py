"""Tests for the Local REST API document source using a mocked transport."""

import httpx
import pytest

from vault_query import (
    DocumentFetchError,
    DocumentNotFoundError,
    NotAccessibleError,
    RestDocumentSource,
    text_search,
    walk,
)
from vault_query.constants import NOTE_JSON_MEDIA_TYPE

BASE_URL = "https://127.0.0.1:27124"

LISTINGS = {
    "/vault/": ["Daily/", "README.md", "Projects/"],
    "/vault/Daily/": ["Daily/2025-10-27.md"],
    "/vault/Projects/": ["Projects/Tech/", "Projects/plan.md"],
    "/vault/Projects/Tech/": ["Projects/Tech/server.md"],
}

NOTES = {
    "/vault/README.md": {
        "content": "Welcome to the vault. Start with the plan.",
        "frontmatter": {"status": "active"},
        "tags": ["meta"],
        "stat": {"ctime": 1709251200000, "mtime": 1709294400000, "size": 42},
    },
    "/vault/Daily/2025-10-27.md": {"content": "Reviewed the plan today.", "frontmatter": {}, "tags": []},
    "/vault/Projects/plan.md": {"content": "The plan. The plan again.", "frontmatter": None, "tags": None},
    "/vault/Projects/Tech/server.md": {"content": "Server notes", "frontmatter": {}, "tags": ["project/tech"]},
}


def vault_handler(request: httpx.Request) -> httpx.Response:
    if request.headers.get("Authorization") != "Bearer secret":
        return httpx.Response(401, json={"message": "Unauthorized"})

    path = request.url.path
    if path in LISTINGS:
        return httpx.Response(200, json={"files": LISTINGS[path]})
    if path in NOTES:
        assert request.headers["Accept"] == NOTE_JSON_MEDIA_TYPE
        return httpx.Response(200, json=NOTES[path])
    return httpx.Response(404, json={"message": "Not Found"})


def make_rest_source(handler=vault_handler, api_key="secret"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    return RestDocumentSource(BASE_URL, api_key, client=client)


class TestListChildren:
    @pytest.mark.asyncio
    async def test_root_listing(self):
        source = make_rest_source()

        children = await source.list_children("")

        assert [(child.name, child.is_container) for child in children] == [
            ("Daily", True),
            ("README.md", False),
            ("Projects", True),
        ]

    @pytest.mark.asyncio
    async def test_prefixed_entries_are_reduced_to_leaf_names(self):
        source = make_rest_source()

        children = await source.list_children("Projects")

        assert [child.name for child in children] == ["Tech", "plan.md"]

    @pytest.mark.asyncio
    async def test_folder_names_are_url_encoded(self):
        seen = []

        def handler(request):
            seen.append(request.url.raw_path)
            return httpx.Response(200, json={"files": []})

        source = make_rest_source(handler)
        await source.list_children("My Notes")

        assert seen == [b"/vault/My%20Notes/"]

    @pytest.mark.asyncio
    async def test_missing_folder(self):
        with pytest.raises(NotAccessibleError, match="not found"):
            await make_rest_source().list_children("Nope")

    @pytest.mark.asyncio
    async def test_bad_api_key(self):
        with pytest.raises(NotAccessibleError, match="authentication"):
            await make_rest_source(api_key="wrong").list_children("")

    @pytest.mark.asyncio
    async def test_malformed_payload(self):
        source = make_rest_source(lambda request: httpx.Response(200, json={"unexpected": True}))

        with pytest.raises(NotAccessibleError, match="Unexpected"):
            await source.list_children("")

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(NotAccessibleError):
            await make_rest_source(handler).list_children("")


class TestFetchDocument:
    @pytest.mark.asyncio
    async def test_fetch_note(self):
        document = await make_rest_source().fetch_document("README.md")

        assert document.path == "README.md"
        assert document.content.startswith("Welcome")
        assert document.frontmatter == {"status": "active"}
        assert document.tags == ("meta",)
        assert document.modified == "2024-03-01"

    @pytest.mark.asyncio
    async def test_null_fields_become_empty(self):
        document = await make_rest_source().fetch_document("Projects/plan.md")

        assert document.frontmatter == {}
        assert document.tags == ()
        assert document.modified is None

    @pytest.mark.asyncio
    async def test_missing_note(self):
        with pytest.raises(DocumentNotFoundError):
            await make_rest_source().fetch_document("missing.md")

    @pytest.mark.asyncio
    async def test_server_error(self):
        source = make_rest_source(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(DocumentFetchError, match="500"):
            await source.fetch_document("README.md")

    @pytest.mark.asyncio
    async def test_non_json_payload(self):
        source = make_rest_source(lambda request: httpx.Response(200, text="# not json"))

        with pytest.raises(DocumentFetchError, match="non-JSON"):
            await source.fetch_document("README.md")

    @pytest.mark.asyncio
    async def test_timeout_is_a_fetch_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(DocumentFetchError):
            await make_rest_source(handler).fetch_document("README.md")


class TestQueriesOverRest:
    @pytest.mark.asyncio
    async def test_walk(self):
        refs = await walk(make_rest_source())

        assert [ref.path for ref in refs] == [
            "Daily/2025-10-27.md",
            "README.md",
            "Projects/Tech/server.md",
            "Projects/plan.md",
        ]

    @pytest.mark.asyncio
    async def test_text_search(self):
        result = await text_search(make_rest_source(), "plan", context_chars=0)

        assert [(item["path"], item["score"]) for item in result["results"]] == [
            ("Projects/plan.md", 2),
            ("Daily/2025-10-27.md", 1),
            ("README.md", 1),
        ]


class TestClientLifecycle:
    @pytest.mark.asyncio
    async def test_injected_client_is_not_closed(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(vault_handler), base_url=BASE_URL)

        async with RestDocumentSource(BASE_URL, "secret", client=client):
            pass

        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_is_closed(self):
        source = RestDocumentSource(BASE_URL, "secret")

        async with source:
            pass

        assert source._client.is_closed
