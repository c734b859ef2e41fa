"""Document source for the Obsidian Local REST API plugin."""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from vault_query.constants import NOTE_JSON_MEDIA_TYPE, REST_TIMEOUT_SECONDS
from vault_query.data_models import ChildEntry, Document, modified_date
from vault_query.errors import DocumentFetchError, DocumentNotFoundError, NotAccessibleError

logger = logging.getLogger(__name__)


def _describe_status(response: httpx.Response) -> str:
    if response.status_code in (401, 403):
        return "authentication failed, check the API key"
    if response.status_code == 404:
        return "resource not found"
    return f"Obsidian returned error {response.status_code}: {response.text}"


class RestDocumentSource:
    """Read vault listings and notes through the Local REST API.

    The source owns an :class:`httpx.AsyncClient` unless one is injected; use it
    as an async context manager (or call :meth:`aclose`) to release it.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        verify: bool = True,
        timeout: float = REST_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            verify=verify,
            timeout=timeout,
        )
        self._headers = {"Authorization": f"Bearer {api_key}"}

    async def __aenter__(self) -> RestDocumentSource:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, endpoint: str, accept: str) -> httpx.Response:
        return await self._client.get(endpoint, headers={**self._headers, "Accept": accept})

    async def list_children(self, container_path: str) -> list[ChildEntry]:
        folder = container_path.strip("/")
        endpoint = f"/vault/{quote(folder)}/" if folder else "/vault/"

        try:
            response = await self._get(endpoint, "application/json")
        except httpx.HTTPError as exc:
            raise NotAccessibleError(f"Cannot list folder '{folder or '/'}': {exc}") from exc

        if response.is_error:
            raise NotAccessibleError(
                f"Cannot list folder '{folder or '/'}': {_describe_status(response)}"
            )

        try:
            files = response.json()["files"]
        except (ValueError, KeyError, TypeError) as exc:
            raise NotAccessibleError(
                f"Unexpected listing payload for folder '{folder or '/'}'"
            ) from exc

        children: list[ChildEntry] = []
        for raw in files:
            is_container = raw.endswith("/")
            # Listings may echo the folder prefix; keep only the leaf name
            name = raw.rstrip("/").rsplit("/", 1)[-1]
            if name:
                children.append(ChildEntry(name, is_container))
        return children

    async def fetch_document(self, path: str) -> Document:
        endpoint = f"/vault/{quote(path.strip('/'))}"

        try:
            response = await self._get(endpoint, NOTE_JSON_MEDIA_TYPE)
        except httpx.HTTPError as exc:
            raise DocumentFetchError(f"Cannot fetch note '{path}': {exc}") from exc

        if response.status_code == 404:
            raise DocumentNotFoundError(f"Note '{path}' not found.")
        if response.is_error:
            raise DocumentFetchError(f"Cannot fetch note '{path}': {_describe_status(response)}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise DocumentFetchError(f"Note '{path}' returned a non-JSON payload") from exc

        frontmatter = payload.get("frontmatter") or {}
        if not isinstance(frontmatter, dict):
            frontmatter = {}

        stat = payload.get("stat") or {}
        mtime = stat.get("mtime") if isinstance(stat, dict) else None

        return Document(
            path=path,
            content=payload.get("content") or "",
            frontmatter=frontmatter,
            tags=tuple(str(tag) for tag in payload.get("tags") or ()),
            # Local REST API reports mtime in milliseconds
            modified=modified_date(mtime / 1000) if isinstance(mtime, (int, float)) else None,
        )
