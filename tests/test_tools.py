"""End-to-end tests for the MCP tool functions against an on-disk vault."""

from types import SimpleNamespace

import pytest

from vault_query import NotAccessibleError, SectionNotFoundError, mcp
from vault_query.models import (
    BatchReadInput,
    ExtractSectionInput,
    FrontmatterSearchInput,
    ListNotesInput,
    ListVaultsInput,
    PaginateItemsInput,
    ReadNoteInput,
    SetActiveVaultInput,
    TagSearchInput,
    TextSearchInput,
    TruncateTextInput,
    VaultStatsInput,
)
from vault_query.tools.content_tools import extract_note_section, paginate_items, truncate_text
from vault_query.tools.note_tools import (
    batch_read_vault_notes,
    get_vault_stats,
    list_vault_notes,
    read_vault_note,
)
from vault_query.tools.search_tools import (
    search_vault_frontmatter,
    search_vault_tags,
    search_vault_text,
)
from vault_query.tools.vault_tools import list_vaults, set_active_vault


@pytest.mark.asyncio
async def test_all_tools_registered():
    names = {tool.name for tool in await mcp.list_tools()}

    assert names == {
        "search_vault_text",
        "search_vault_tags",
        "search_vault_frontmatter",
        "read_vault_note",
        "list_vault_notes",
        "batch_read_vault_notes",
        "get_vault_stats",
        "truncate_text",
        "paginate_items",
        "extract_note_section",
        "list_vaults",
        "set_active_vault",
    }


class TestSearchTools:
    @pytest.mark.asyncio
    async def test_text(self, active_config):
        result = await search_vault_text(TextSearchInput(query="gradient", context_chars=10))

        assert result["vault"] == "personal"
        assert [item["path"] for item in result["results"]] == ["ml-basics.md", "research.md"]

    @pytest.mark.asyncio
    async def test_text_in_folder(self, active_config):
        result = await search_vault_text(TextSearchInput(query="tests", folder="projects"))

        assert [item["path"] for item in result["results"]] == ["projects/mcp-server.md"]

    @pytest.mark.asyncio
    async def test_missing_folder_is_an_error(self, active_config):
        with pytest.raises(NotAccessibleError):
            await search_vault_text(TextSearchInput(query="x", folder="nowhere"))

    @pytest.mark.asyncio
    async def test_tags(self, active_config):
        result = await search_vault_tags(TagSearchInput(tags=["#mcp", "python"], match_all=True))

        assert result["match_mode"] == "all"
        assert [item["path"] for item in result["results"]] == ["projects/mcp-server.md"]

    @pytest.mark.asyncio
    async def test_frontmatter(self, active_config):
        result = await search_vault_frontmatter(FrontmatterSearchInput(field="status", value="draft"))

        assert result["results"] == [{"path": "ml-basics.md", "value": "draft"}]

    @pytest.mark.asyncio
    async def test_unknown_vault(self, active_config):
        with pytest.raises(ValueError, match="Unknown vault"):
            await search_vault_text(TextSearchInput(query="x", vault="nope"))


class TestNoteTools:
    @pytest.mark.asyncio
    async def test_read_section(self, active_config):
        result = await read_vault_note(ReadNoteInput(path="projects/mcp-server", section="Notes"))

        assert result["content"] == "Nothing yet."
        assert result["vault"] == "personal"

    @pytest.mark.asyncio
    async def test_read_missing_section(self, active_config):
        with pytest.raises(SectionNotFoundError):
            await read_vault_note(ReadNoteInput(path="research", section="Nope"))

    @pytest.mark.asyncio
    async def test_list(self, active_config):
        result = await list_vault_notes(ListNotesInput(recursive=True, per_page=3))

        assert result["total"] == 4
        assert result["has_more"] is True

    @pytest.mark.asyncio
    async def test_batch(self, active_config):
        result = await batch_read_vault_notes(BatchReadInput(paths=["research", "missing"]))

        assert result["success_count"] == 1
        assert result["error_count"] == 1

    @pytest.mark.asyncio
    async def test_stats(self, active_config):
        result = await get_vault_stats(VaultStatsInput())

        assert result["vault"] == "personal"
        assert result["folder"] == "/"
        assert (result["total_files"], result["total_notes"], result["folders"]) == (5, 4, 1)
        assert "machine-learning" in result["tags"]

    @pytest.mark.asyncio
    async def test_stats_missing_folder(self, active_config):
        with pytest.raises(NotAccessibleError):
            await get_vault_stats(VaultStatsInput(folder="nowhere"))


class TestContentTools:
    @pytest.mark.asyncio
    async def test_truncate(self):
        result = await truncate_text(TruncateTextInput(content="abcdefghij", max_chars=4, suffix="~"))

        assert result == {"content": "abc~", "truncated": True}

    @pytest.mark.asyncio
    async def test_paginate(self):
        result = await paginate_items(PaginateItemsInput(items=list(range(1, 11)), page=2, per_page=3))

        assert result["items"] == [4, 5, 6]
        assert result["has_more"] is True

    @pytest.mark.asyncio
    async def test_extract_found(self):
        result = await extract_note_section(ExtractSectionInput(content="# A\ntext\n# B\n", heading="# a"))

        assert result == {"heading": "a", "found": True, "content": "text"}

    @pytest.mark.asyncio
    async def test_extract_missing(self):
        result = await extract_note_section(ExtractSectionInput(content="# A\n", heading="B"))

        assert result["found"] is False
        assert result["content"] is None


class TestVaultTools:
    @pytest.mark.asyncio
    async def test_list_vaults(self, active_config):
        result = await list_vaults(ListVaultsInput())

        assert result["default"] == "personal"
        assert result["active"] is None
        assert [vault["name"] for vault in result["vaults"]] == ["personal", "work"]

    @pytest.mark.asyncio
    async def test_set_active_vault_changes_session_default(self, active_config):
        ctx = SimpleNamespace(session=object())

        result = await set_active_vault(SetActiveVaultInput(vault="work"), ctx)
        listing = await list_vaults(ListVaultsInput(), ctx)

        assert result == {"vault": "work", "source": "rest", "status": "active"}
        assert listing["active"] == "work"

    @pytest.mark.asyncio
    async def test_rest_vault_requires_api_key(self, active_config, monkeypatch):
        monkeypatch.delenv("WORK_VAULT_KEY", raising=False)

        with pytest.raises(ValueError, match="WORK_VAULT_KEY"):
            await search_vault_text(TextSearchInput(query="x", vault="work"))


@pytest.mark.asyncio
async def test_read_only_tools_are_annotated():
    tools = {tool.name: tool for tool in await mcp.list_tools()}

    for name, tool in tools.items():
        if name == "set_active_vault":
            continue
        assert tool.annotations is not None, name
        assert tool.annotations.readOnlyHint is True, name
        assert tool.annotations.openWorldHint is False, name
        assert tool.annotations.title, name
