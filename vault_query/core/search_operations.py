"""Full-text and tag search over documents enumerated from a vault."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from typing import Any

from vault_query.constants import (
    DEFAULT_CONTEXT_CHARS,
    DEFAULT_MAX_RESULTS,
    MAX_MATCHES_PER_DOCUMENT,
    MAX_MATCHING_DOCUMENTS,
    NOTE_EXTENSION,
)
from vault_query.core.sources import DocumentSource
from vault_query.core.walker import walk
from vault_query.data_models import DocumentRef, MatchWindow, SearchResult, TagMatch
from vault_query.errors import DocumentFetchError

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def note_refs(refs: Iterable[DocumentRef]) -> list[DocumentRef]:
    """Keep only markdown notes from a walker result."""
    return [ref for ref in refs if not ref.is_container and ref.extension == NOTE_EXTENSION]


def find_matches(
    path: str,
    content: str,
    query: str,
    context_chars: int,
    max_matches: int = MAX_MATCHES_PER_DOCUMENT,
) -> list[MatchWindow]:
    """Locate up to ``max_matches`` case-insensitive occurrences of ``query``.

    Occurrences do not overlap: each search resumes right after the previous match.
    Context windows extend ``context_chars`` characters on both sides of the match,
    clamped to the content bounds.
    """
    if not query or not content or max_matches < 1:
        return []

    windows: list[MatchWindow] = []
    for match in re.finditer(re.escape(query), content, re.IGNORECASE):
        start = max(0, match.start() - context_chars)
        end = min(len(content), match.end() + context_chars)
        windows.append(
            MatchWindow(
                document_path=path,
                match=match.group(0),
                context=content[start:end],
                offset=match.start(),
            )
        )
        if len(windows) >= max_matches:
            break
    return windows


def normalize_tag(tag: str) -> str:
    """Strip surrounding whitespace and one leading ``#``; case is preserved."""
    cleaned = tag.strip()
    return cleaned[1:] if cleaned.startswith("#") else cleaned


def tag_matches(query_tag: str, document_tag: str) -> bool:
    """True when ``document_tag`` equals ``query_tag`` or is a hierarchical descendant.

    Both arguments are expected to be normalized; comparison is case-insensitive.

    Examples:
        >>> tag_matches("project", "Project/Alpha")
        True
        >>> tag_matches("proj", "project")
        False
    """
    query_key = query_tag.lower()
    document_key = document_tag.lower()
    return document_key == query_key or document_key.startswith(query_key + "/")


# ==============================================================================
# MATCHERS
# ==============================================================================


async def search_documents(
    source: DocumentSource,
    refs: Sequence[DocumentRef],
    query: str,
    context_chars: int = DEFAULT_CONTEXT_CHARS,
    max_matches_per_document: int = MAX_MATCHES_PER_DOCUMENT,
    max_documents: int = MAX_MATCHING_DOCUMENTS,
) -> list[SearchResult]:
    """Scan documents in traversal order for ``query``.

    Scanning stops once ``max_documents`` documents have produced a match; documents
    without matches, and documents that cannot be fetched, do not count towards that
    cap. Results are ordered by descending score with ties kept in traversal order.

    Args:
        source: Document source used to fetch bodies.
        refs: Documents to scan, in traversal order.
        query: Case-insensitive substring to look for.
        context_chars: Characters of context on each side of a match.
        max_matches_per_document: Maximum matches retained (and scored) per document.
        max_documents: Maximum number of matching documents to collect.

    Returns:
        Ordered :class:`SearchResult` list; empty for an empty query or corpus.
    """
    if not query:
        return []

    results: list[SearchResult] = []
    for ref in refs:
        if len(results) >= max_documents:
            break

        try:
            document = await source.fetch_document(ref.path)
        except DocumentFetchError as exc:
            logger.debug("Skipping '%s' during text search: %s", ref.path, exc)
            continue

        windows = find_matches(ref.path, document.content, query, context_chars, max_matches_per_document)
        if windows:
            results.append(SearchResult(path=ref.path, matches=tuple(windows)))

    results.sort(key=lambda result: result.score, reverse=True)
    return results


async def match_tags(
    source: DocumentSource,
    refs: Sequence[DocumentRef],
    tags: Sequence[str],
    match_all: bool = False,
) -> list[TagMatch]:
    """Filter documents by hierarchical tags.

    With ``match_all`` every query tag needs at least one matching document tag
    (AND); otherwise a single matching query tag suffices (OR). Documents that
    cannot be fetched are skipped. Traversal order is preserved.
    """
    query_tags = [normalize_tag(tag) for tag in tags]
    query_tags = [tag for tag in query_tags if tag]
    combine = all if match_all else any

    matches: list[TagMatch] = []
    for ref in refs:
        try:
            document = await source.fetch_document(ref.path)
        except DocumentFetchError as exc:
            logger.debug("Skipping '%s' during tag search: %s", ref.path, exc)
            continue

        document_tags = tuple(tag for tag in (normalize_tag(tag) for tag in document.tags) if tag)
        if combine(
            any(tag_matches(query_tag, document_tag) for document_tag in document_tags)
            for query_tag in query_tags
        ):
            matches.append(TagMatch(path=ref.path, tags=document_tags))

    return matches


# ==============================================================================
# QUERY OPERATIONS
# ==============================================================================


async def text_search(
    source: DocumentSource,
    query: str,
    context_chars: int = DEFAULT_CONTEXT_CHARS,
    max_results: int = DEFAULT_MAX_RESULTS,
    *,
    root: str = "/",
    max_matches_per_document: int = MAX_MATCHES_PER_DOCUMENT,
    max_documents: int = MAX_MATCHING_DOCUMENTS,
) -> dict[str, Any]:
    """Full-text search across every note under ``root``.

    Returns:
        ``{"query", "results", "total"}`` where ``results`` holds at most
        ``max_results`` result payloads and ``total`` counts every matching note
        collected before the ``max_documents`` cap.

    Raises:
        NotAccessibleError: If part of the vault cannot be listed.
    """
    if not query:
        return {"query": query, "results": [], "total": 0}

    refs = note_refs(await walk(source, root))
    results = await search_documents(
        source,
        refs,
        query,
        context_chars,
        max_matches_per_document=max_matches_per_document,
        max_documents=max_documents,
    )
    return {
        "query": query,
        "results": [result.as_payload() for result in results[:max_results]],
        "total": len(results),
    }


async def tag_search(
    source: DocumentSource,
    tags: Sequence[str],
    match_all: bool = False,
    max_results: int = DEFAULT_MAX_RESULTS,
    *,
    root: str = "/",
) -> dict[str, Any]:
    """Find notes carrying the given tags or their hierarchical descendants.

    Returns:
        ``{"tags", "match_mode", "results", "total"}``.

    Raises:
        ValueError: If no non-empty tag is supplied.
        NotAccessibleError: If part of the vault cannot be listed.
    """
    if not tags or not any(normalize_tag(tag) for tag in tags):
        raise ValueError("Must specify at least one non-empty tag.")

    refs = note_refs(await walk(source, root))
    matches = await match_tags(source, refs, tags, match_all)
    return {
        "tags": list(tags),
        "match_mode": "all" if match_all else "any",
        "results": [match.as_payload() for match in matches[:max_results]],
        "total": len(matches),
    }
