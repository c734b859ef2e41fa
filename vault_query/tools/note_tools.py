"""Read-only note tools.

This module provides MCP tool wrappers for note retrieval:
- read_vault_note: Read one note (or one section) within a character budget
- list_vault_notes: Paginated folder listing
- batch_read_vault_notes: Read several notes in one call
- get_vault_stats: Counts and a tag sample for a vault or folder

All tools delegate to core operations in vault_query.core.note_operations.
"""
from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import Context

from vault_query.server import mcp
from vault_query.session import resolve_vault
from vault_query.models import ReadNoteInput, ListNotesInput, BatchReadInput, VaultStatsInput
from vault_query.core.sources import open_source
from vault_query.core.note_operations import read_note, list_notes, batch_read, vault_stats

logger = logging.getLogger(__name__)


@mcp.tool(
    annotations={
        "title": "Read Note",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def read_vault_note(
    input: ReadNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Read a note's content, frontmatter, and tags (bounded by max_chars).

    Long content is cut at a word boundary and marked with
    '... [truncated]'. Pass section to read only the text under one heading
    (up to the next heading of the same or higher level).

    Args:
        input (ReadNoteInput): Validated input containing:
            - path (str): Note path relative to the vault root
            - max_chars (int): Character budget (default 5000)
            - section (str, optional): Heading text without # markers
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "path": str,
            "content": str,
            "truncated": bool,
            "frontmatter": dict,
            "tags": [str]
        }

    Examples:
        - Use when: Reading a note found via search_vault_text()
        - Use section=...: Only one part of a long note is needed

    Error Handling:
        - Note not found → Error with note path
        - Section not found → Error with heading name
    """
    metadata = resolve_vault(input.vault, ctx)
    async with open_source(metadata) as source:
        result = await read_note(source, input.path, max_chars=input.max_chars, section=input.section)
    return {"vault": metadata.name, **result}


@mcp.tool(
    annotations={
        "title": "List Notes",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def list_vault_notes(
    input: ListNotesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List notes in a folder, one page at a time.

    Args:
        input (ListNotesInput): Validated input containing:
            - folder (str): Folder relative to vault root (default '/')
            - page (int): Page number, 1-indexed
            - per_page (int): Notes per page (default 20)
            - recursive (bool): Include subfolders (default False)
            - include_summary (bool): Add title, tags, and modified date per note
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "folder": str,
            "items": [{"path": str, "title"?: str, "tags"?: [str], "modified"?: str}],
            "page": int,
            "per_page": int,
            "total": int,
            "has_more": bool
        }

    Error Handling:
        - Folder not accessible → Error with folder path
        - Page past the end → Returns {"items": [], "has_more": false}
    """
    metadata = resolve_vault(input.vault, ctx)
    async with open_source(metadata) as source:
        result = await list_notes(
            source,
            folder=input.folder,
            page=input.page,
            per_page=input.per_page,
            recursive=input.recursive,
            include_summary=input.include_summary,
        )
    return {"vault": metadata.name, **result}


@mcp.tool(
    annotations={
        "title": "Batch Read Notes",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def batch_read_vault_notes(
    input: BatchReadInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Read multiple notes in a single call (each bounded by max_chars_per_note).

    Args:
        input (BatchReadInput): Validated input containing:
            - paths (list[str]): Note paths relative to the vault root
            - max_chars_per_note (int): Character budget per note (default 1000)
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "notes": [{"path": str, "content": str, "truncated": bool} | {"path": str, "error": str}],
            "success_count": int,
            "error_count": int
        }

    Error Handling:
        - Missing or unreadable notes → Reported per note, other notes still returned
    """
    metadata = resolve_vault(input.vault, ctx)
    async with open_source(metadata) as source:
        result = await batch_read(source, input.paths, max_chars_per_note=input.max_chars_per_note)

    logger.info(
        "Batch read in vault '%s': %d succeeded, %d failed",
        metadata.name,
        result["success_count"],
        result["error_count"],
    )
    return {"vault": metadata.name, **result}


@mcp.tool(
    annotations={
        "title": "Get Vault Stats",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def get_vault_stats(
    input: VaultStatsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Summarize a vault in one call: file, note, and folder counts plus tags (token-efficient).

    Counts cover every file and folder below the chosen folder. Tags are
    sampled from the first 50 notes and capped at 50 unique tags, so the tag
    list is an overview, not an inventory.

    Args:
        input (VaultStatsInput): Validated input containing:
            - folder (str): Folder to summarize (default: whole vault)
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "folder": str,
            "total_files": int,
            "total_notes": int,
            "folders": int,
            "tags": [str]
        }

    Examples:
        - Use when: Getting oriented in an unfamiliar vault
        - Workflow: get_vault_stats() → search_vault_tags() with a sampled tag

    Error Handling:
        - Folder not accessible → Error with folder path
        - Unreadable notes → Left out of the tag sample
    """
    metadata = resolve_vault(input.vault, ctx)
    async with open_source(metadata) as source:
        result = await vault_stats(source, input.folder)

    logger.info(
        "Vault stats for '%s' under '%s': %d files, %d notes, %d folders",
        metadata.name,
        result["folder"],
        result["total_files"],
        result["total_notes"],
        result["folders"],
    )
    return {"vault": metadata.name, **result}
