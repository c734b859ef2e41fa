"""Read-only note operations: single read, folder listing, batch read, and vault stats."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Optional

from vault_query.constants import (
    DEFAULT_MAX_CHARS,
    DEFAULT_MAX_CHARS_PER_NOTE,
    DEFAULT_PER_PAGE,
    STATS_MAX_TAGS,
    STATS_TAG_SAMPLE_NOTES,
)
from vault_query.core.content_operations import (
    extract_section,
    paginate,
    summarize_note,
    truncate_content,
)
from vault_query.core.search_operations import note_refs
from vault_query.core.sources import CachingDocumentSource, DocumentSource
from vault_query.core.walker import join_path, normalize_path, walk
from vault_query.data_models import DocumentRef, VaultStats
from vault_query.errors import DocumentFetchError, SectionNotFoundError

logger = logging.getLogger(__name__)


async def read_note(
    source: DocumentSource,
    path: str,
    max_chars: int = DEFAULT_MAX_CHARS,
    section: Optional[str] = None,
) -> dict[str, Any]:
    """Read one note, optionally narrowed to a section, within a character budget.

    Args:
        source: Document source.
        path: Vault-relative note path (including the ``.md`` extension).
        max_chars: Character budget for the returned content.
        section: Optional heading whose section should be returned instead of the
            whole body.

    Returns:
        ``{"path", "content", "truncated", "frontmatter", "tags"}``.

    Raises:
        DocumentNotFoundError: If the note does not exist.
        DocumentFetchError: If the note cannot be read.
        SectionNotFoundError: If ``section`` is given but no heading matches.
    """
    document = await source.fetch_document(path)
    content = document.content

    if section:
        extracted = extract_section(content, section)
        if extracted is None:
            raise SectionNotFoundError(
                f"Section '{section}' not found in '{path}'. Check the heading name and try again."
            )
        content = extracted

    shaped = truncate_content(content, max_chars)
    return {
        "path": document.path,
        "content": shaped.content,
        "truncated": shaped.truncated,
        "frontmatter": document.frontmatter,
        "tags": list(document.tags),
    }


async def list_notes(
    source: DocumentSource,
    folder: str = "/",
    page: int = 1,
    per_page: int = DEFAULT_PER_PAGE,
    recursive: bool = False,
    include_summary: bool = False,
) -> dict[str, Any]:
    """List notes in a folder, one page at a time.

    Args:
        source: Document source.
        folder: Folder to list (``"/"`` for the vault root).
        page: 1-indexed page number.
        per_page: Notes per page.
        recursive: When ``True`` include notes in subfolders (depth-first order).
        include_summary: When ``True`` fetch each note on the page and include its
            title and tags. Notes that cannot be fetched keep a path-only entry.

    Returns:
        A page payload ``{"folder", "items", "page", "per_page", "total", "has_more"}``.

    Raises:
        NotAccessibleError: If the folder (or, when recursive, a subfolder) cannot
            be listed.
        ValueError: If ``page`` or ``per_page`` is smaller than 1.
    """
    folder_path = normalize_path(folder)
    if recursive:
        refs = note_refs(await walk(source, folder_path))
    else:
        children = await source.list_children(folder_path)
        refs = note_refs(
            DocumentRef.from_path(join_path(folder_path, child.name))
            for child in children
            if not child.is_container
        )

    result = paginate(refs, page, per_page)
    items: list[dict[str, Any]] = []
    for ref in result.items:
        if not include_summary:
            items.append({"path": ref.path})
            continue
        try:
            items.append(summarize_note(await source.fetch_document(ref.path)))
        except DocumentFetchError as exc:
            logger.debug("Listing '%s' without summary: %s", ref.path, exc)
            items.append({"path": ref.path})

    payload = result.as_payload()
    payload["items"] = items
    payload["folder"] = folder_path or "/"
    return payload


async def batch_read(
    source: DocumentSource,
    paths: Sequence[str],
    max_chars_per_note: int = DEFAULT_MAX_CHARS_PER_NOTE,
) -> dict[str, Any]:
    """Read several notes in one call, truncating each to ``max_chars_per_note``.

    Failures are reported per note and never abort the batch. Repeated paths are
    fetched once.

    Returns:
        ``{"notes", "success_count", "error_count"}`` where each note is either
        ``{"path", "content", "truncated"}`` or ``{"path", "error"}``.
    """
    cached = CachingDocumentSource(source)
    notes: list[dict[str, Any]] = []
    success_count = 0
    error_count = 0

    for path in paths:
        try:
            document = await cached.fetch_document(path)
        except DocumentFetchError as exc:
            notes.append({"path": path, "error": str(exc)})
            error_count += 1
            continue

        shaped = truncate_content(document.content, max_chars_per_note)
        notes.append({"path": path, **shaped.as_payload()})
        success_count += 1

    return {
        "notes": notes,
        "success_count": success_count,
        "error_count": error_count,
    }


async def vault_stats(
    source: DocumentSource,
    root: str = "/",
    sample_notes: int = STATS_TAG_SAMPLE_NOTES,
    max_tags: int = STATS_MAX_TAGS,
) -> dict[str, Any]:
    """Cheap overview of a vault subtree: file, note, and folder counts plus tags.

    Tags are sampled from the first ``sample_notes`` notes in traversal order and
    reported once each in first-seen order, at most ``max_tags`` of them. Notes
    that cannot be fetched are left out of the sample.

    Returns:
        ``{"folder", "total_files", "total_notes", "folders", "tags"}``.

    Raises:
        NotAccessibleError: If part of the subtree cannot be listed.
    """
    root_path = normalize_path(root)
    refs = await walk(source, root_path, include_containers=True)
    files = [ref for ref in refs if not ref.is_container]
    notes = note_refs(files)

    tags: list[str] = []
    seen: set[str] = set()
    for ref in notes[:sample_notes]:
        try:
            document = await source.fetch_document(ref.path)
        except DocumentFetchError as exc:
            logger.debug("Leaving '%s' out of the tag sample: %s", ref.path, exc)
            continue
        for tag in document.tags:
            if tag not in seen:
                seen.add(tag)
                tags.append(tag)

    stats = VaultStats(
        total_files=len(files),
        total_notes=len(notes),
        folders=len(refs) - len(files),
        tags=tuple(tags[:max_tags]),
    )
    return {"folder": root_path or "/", **stats.as_payload()}
