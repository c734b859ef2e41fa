"""Response shaping tools.

These tools operate on caller-supplied data and never touch a vault:
- truncate_text: Bound text to a character budget at a word boundary
- paginate_items: Return one page of a list
- extract_note_section: Pull the text under a markdown heading
"""
from __future__ import annotations

from typing import Any

from vault_query.server import mcp
from vault_query.models import TruncateTextInput, PaginateItemsInput, ExtractSectionInput
from vault_query.core.content_operations import truncate_content, paginate, extract_section


@mcp.tool(
    annotations={
        "title": "Truncate Text",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def truncate_text(input: TruncateTextInput) -> dict[str, Any]:
    """Truncate text to max_chars, preferring a word boundary.

    Returns:
        {"content": str, "truncated": bool}; content is unchanged when it already fits.
    """
    return truncate_content(input.content, input.max_chars, suffix=input.suffix).as_payload()


@mcp.tool(
    annotations={
        "title": "Paginate Items",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def paginate_items(input: PaginateItemsInput) -> dict[str, Any]:
    """Return one 1-indexed page of a list.

    Returns:
        {"items": list, "page": int, "per_page": int, "total": int, "has_more": bool}
    """
    return paginate(input.items, input.page, input.per_page).as_payload()


@mcp.tool(
    annotations={
        "title": "Extract Note Section",
        "readOnlyHint": True,
        "openWorldHint": False,
    }
)
async def extract_note_section(input: ExtractSectionInput) -> dict[str, Any]:
    """Extract the text under a markdown heading.

    The section ends at the next heading of the same or higher level; nested
    sub-headings are included.

    Returns:
        {"heading": str, "found": bool, "content": str | None}
    """
    section = extract_section(input.content, input.heading)
    return {
        "heading": input.heading,
        "found": section is not None,
        "content": section,
    }
