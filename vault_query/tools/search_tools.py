"""Search tools for vault query operations.

This module contains all MCP tool wrappers for search operations:
- search_vault_text: Full-text search with context snippets
- search_vault_tags: Hierarchical tag search with AND/OR semantics
- search_vault_frontmatter: Frontmatter field search (equals/contains/exists)
"""
from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import Context

from vault_query.server import mcp
from vault_query.session import resolve_vault
from vault_query.models import (
    TextSearchInput,
    TagSearchInput,
    FrontmatterSearchInput,
)
from vault_query.core.sources import open_source
from vault_query.core.search_operations import text_search, tag_search
from vault_query.core.frontmatter_operations import frontmatter_search

logger = logging.getLogger(__name__)

# ==============================================================================
# SEARCH TOOLS
# ==============================================================================


@mcp.tool(
    annotations={
        "title": "Search Note Text",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def search_vault_text(
    input: TextSearchInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Search note contents and return contextual snippets (token-efficient).

    Case-insensitive substring search inside every note. Returns up to
    max_matches_per_document snippets per note (context_chars on each side
    of the match), notes ordered by match count.

    Args:
        input (TextSearchInput): Validated input containing:
            - query (str): Search text (case-insensitive)
            - context_chars (int): Context on each side of a match (default 100)
            - max_results (int): Maximum notes returned (default 10)
            - max_matches_per_document (int): Snippets per note (default 3)
            - max_documents (int): Stop after this many matching notes (default 50)
            - folder (str): Folder to search (default: whole vault)
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "query": str,
            "results": [
                {
                    "path": str,
                    "score": int,
                    "matches": [{"match": str, "context": str, "offset": int}]
                }
            ],
            "total": int
        }

    Examples:
        - Use when: Searching for concepts/topics in notes
        - Workflow: search_vault_text() → review snippets → read_vault_note()
        - Don't use: Filtering by tag → Use search_vault_tags()

    Error Handling:
        - ValidationError: Invalid limits or vault name
        - No matches → Returns {"results": [], "total": 0}
        - Unreadable notes → Skipped, search continues
        - Unlistable folder → Error, no partial results
    """
    metadata = resolve_vault(input.vault, ctx)
    async with open_source(metadata) as source:
        result = await text_search(
            source,
            input.query,
            context_chars=input.context_chars,
            max_results=input.max_results,
            root=input.folder,
            max_matches_per_document=input.max_matches_per_document,
            max_documents=input.max_documents,
        )

    logger.info(
        "Text search in vault '%s' for query '%s' matched %d notes",
        metadata.name,
        input.query,
        result["total"],
    )
    return {"vault": metadata.name, **result}


@mcp.tool(
    annotations={
        "title": "Search Notes by Tag",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def search_vault_tags(
    input: TagSearchInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Search notes by tags, including nested tags (token-efficient).

    A tag matches itself and its descendants: 'project' matches 'project'
    and 'project/alpha' but not 'projects'. Tags from frontmatter and inline
    #tags are both considered. Leading '#' is optional and matching is
    case-insensitive.

    Args:
        input (TagSearchInput): Validated input containing:
            - tags (list[str]): Tags to search for
            - match_all (bool): When True require all tags; when False match any tag
            - max_results (int): Maximum notes returned (default 10)
            - folder (str): Folder to search (default: whole vault)
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "tags": [str],
            "match_mode": "all" | "any",
            "results": [{"path": str, "tags": [str]}],
            "total": int
        }

    Examples:
        - Use when: "Find notes tagged with machine-learning"
        - Use when: "Show notes tagged both obsidian and mcp" (match_all=True)
        - Don't use: Full text search → Use search_vault_text()

    Error Handling:
        - ValidationError: Empty tags list or tags containing only empty strings
        - Unreadable notes → Skipped, search continues
    """
    metadata = resolve_vault(input.vault, ctx)
    async with open_source(metadata) as source:
        result = await tag_search(
            source,
            input.tags,
            match_all=input.match_all,
            max_results=input.max_results,
            root=input.folder,
        )

    logger.info(
        "Tag search in vault '%s' for tags %s (%s mode) found %d matches",
        metadata.name,
        input.tags,
        result["match_mode"],
        result["total"],
    )
    return {"vault": metadata.name, **result}


@mcp.tool(
    annotations={
        "title": "Search Notes by Frontmatter",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def search_vault_frontmatter(
    input: FrontmatterSearchInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Search notes by a frontmatter field value.

    Operators:
        - equals: field value equals value; compared loosely, so 1 equals "1"
        - contains: case-insensitive substring match against a string field,
          any list item, or any mapping value
        - exists: field is present (null, false, and "" count as present)

    Args:
        input (FrontmatterSearchInput): Validated input containing:
            - field (str): Frontmatter field name
            - value (any): Value to compare (ignored for exists)
            - operator (str): equals | contains | exists (default equals)
            - max_results (int): Maximum notes returned (default 10)
            - folder (str): Folder to search (default: whole vault)
            - vault (str, optional): Vault name (omit to use active vault)

    Returns:
        {
            "vault": str,
            "field": str,
            "operator": str,
            "results": [{"path": str, "value": any}],
            "total": int
        }

    Examples:
        - Use when: "Find all draft notes" → field="status", value="draft"
        - Use when: "Notes listing python in their topics" → operator="contains"
        - Use when: "Notes with an author set" → operator="exists"

    Error Handling:
        - ValidationError: Empty field or unknown operator
        - Notes without the field → Not matched (never an error)
    """
    metadata = resolve_vault(input.vault, ctx)
    async with open_source(metadata) as source:
        result = await frontmatter_search(
            source,
            input.field,
            value=input.value,
            operator=input.operator,
            max_results=input.max_results,
            root=input.folder,
        )

    logger.info(
        "Frontmatter search in vault '%s' (%s %s %r) found %d matches",
        metadata.name,
        input.field,
        input.operator,
        input.value,
        result["total"],
    )
    return {"vault": metadata.name, **result}
