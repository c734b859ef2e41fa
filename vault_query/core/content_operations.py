"""Response shaping: truncation, pagination, and heading-based section extraction."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any, Optional, TypeVar

from vault_query.constants import DEFAULT_PER_PAGE, TRUNCATION_SUFFIX, WORD_BOUNDARY_RATIO
from vault_query.data_models import Document, Page, TruncatedContent

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Pattern for matching markdown headings (H1-H6)
HEADING_PATTERN = re.compile(r"^(?P<hashes>#{1,6})[ \t]+(?P<title>.*?)[ \t]*$", re.MULTILINE)
H1_PATTERN = re.compile(r"^#[ \t]+(?P<title>.+?)[ \t]*$", re.MULTILINE)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _normalize_heading_key(value: str) -> str:
    """Normalize heading text for case-insensitive comparisons."""
    return value.strip().lower()


def _parse_headings(text: str) -> list[dict[str, Any]]:
    """Return a list of markdown headings with positional metadata.

    Args:
        text: Full markdown document contents.

    Returns:
        A list of dictionaries describing each heading: its level, original title,
        a normalized lookup key, and the offsets of the heading line (``end`` points
        just past the line, before its newline).
    """
    return [
        {
            "level": len(match.group("hashes")),
            "title": match.group("title"),
            "normalized": _normalize_heading_key(match.group("title")),
            "start": match.start(),
            "end": match.end(),
        }
        for match in HEADING_PATTERN.finditer(text)
    ]


def _last_whitespace(text: str) -> int:
    """Index of the last whitespace character in ``text``, or ``-1``."""
    for index in range(len(text) - 1, -1, -1):
        if text[index].isspace():
            return index
    return -1


# ==============================================================================
# SHAPING OPERATIONS
# ==============================================================================


def truncate_content(
    content: str,
    max_chars: int,
    suffix: str = TRUNCATION_SUFFIX,
) -> TruncatedContent:
    """Bound ``content`` to ``max_chars`` characters, preferring a word boundary.

    Content that already fits is returned unchanged. Otherwise the text is cut to
    leave room for ``suffix``; the cut moves back to the last whitespace in that
    prefix when the whitespace sits at or beyond 80% of ``max_chars``, and falls
    on the exact character limit (mid-word) otherwise. When the budget is smaller
    than the suffix itself, the content is hard-cut to ``max_chars`` without one.

    Args:
        content: Text to shape.
        max_chars: Character budget for the returned text.
        suffix: Marker appended to truncated text.

    Returns:
        A :class:`TruncatedContent`; ``len(result.content) <= max_chars`` whenever
        ``result.truncated`` is true.

    Raises:
        ValueError: If ``max_chars`` is negative.
    """
    if max_chars < 0:
        raise ValueError("max_chars must be zero or greater.")

    if len(content) <= max_chars:
        return TruncatedContent(content=content, truncated=False)

    if max_chars < len(suffix):
        return TruncatedContent(content=content[:max_chars], truncated=True)

    prefix = content[: max_chars - len(suffix)]
    boundary = _last_whitespace(prefix)
    if boundary >= max_chars * WORD_BOUNDARY_RATIO:
        prefix = prefix[:boundary]

    return TruncatedContent(content=prefix + suffix, truncated=True)


def paginate(items: Sequence[T], page: int = 1, per_page: int = DEFAULT_PER_PAGE) -> Page:
    """Return the 1-indexed ``page`` of ``items``.

    A page past the end yields no items and ``has_more=False``.

    Raises:
        ValueError: If ``page`` or ``per_page`` is smaller than 1.
    """
    if page < 1:
        raise ValueError("page must be 1 or greater.")
    if per_page < 1:
        raise ValueError("per_page must be 1 or greater.")

    start = (page - 1) * per_page
    end = start + per_page
    return Page(
        items=list(items[start:end]),
        page=page,
        per_page=per_page,
        total=len(items),
        has_more=end < len(items),
    )


def extract_section(content: str, heading: str) -> Optional[str]:
    """Return the body of the section introduced by ``heading``.

    The section runs from the line after the first heading whose text equals
    ``heading`` (case-insensitive) up to the next heading of equal or shallower
    depth, or the end of the content. Deeper sub-headings are part of the section.

    Args:
        content: Markdown text.
        heading: Heading text without ``#`` markers.

    Returns:
        The stripped section text, or ``None`` when no heading matches.
    """
    headings = _parse_headings(content)
    target = _normalize_heading_key(heading)

    for index, info in enumerate(headings):
        if info["normalized"] != target:
            continue
        section_end = len(content)
        for subsequent in headings[index + 1 :]:
            if subsequent["level"] <= info["level"]:
                section_end = subsequent["start"]
                break
        return content[info["end"] : section_end].strip()

    return None


def summarize_note(document: Document) -> dict[str, Any]:
    """Token-light summary of a note: path, title, tags, and modification date.

    The title comes from the ``title`` frontmatter field, falling back to the first
    H1 heading of the body. ``modified`` is ``None`` when the source has no date.
    """
    title = document.frontmatter.get("title")
    if not isinstance(title, str) or not title.strip():
        match = H1_PATTERN.search(document.content)
        title = match.group("title") if match else None

    return {
        "path": document.path,
        "title": title,
        "tags": list(document.tags),
        "modified": document.modified,
    }
