"""Document sources: the boundary between the query engine and vault storage."""

from __future__ import annotations

import logging
import re
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Protocol, runtime_checkable

import frontmatter
import yaml

from vault_query.config import resolve_api_key
from vault_query.core.rest_source import RestDocumentSource
from vault_query.data_models import ChildEntry, Document, VaultMetadata, modified_date
from vault_query.errors import DocumentFetchError, DocumentNotFoundError, NotAccessibleError

logger = logging.getLogger(__name__)

# Obsidian inline tags: "#tag" or "#parent/child", not preceded by a word character
INLINE_TAG_PATTERN = re.compile(r"(?<![\w#&/])#([\w/-]+)")
FENCED_CODE_PATTERN = re.compile(r"^(```|~~~).*?^\1", re.MULTILINE | re.DOTALL)
TAG_SPLIT_PATTERN = re.compile(r"[,\s]+")


@runtime_checkable
class DocumentSource(Protocol):
    """Read-only access to a vault's container tree and documents.

    Implementations must tolerate concurrent, idempotent reads; the query engine
    performs no locking or deduplication of its own.

    Sources may also provide ``async container_identity(container_path)``
    returning a stable identity for a container; the walker uses it to recognise
    links back to the folder it started from.
    """

    async def list_children(self, container_path: str) -> list[ChildEntry]:
        """List the direct children of a container.

        Raises:
            NotAccessibleError: If the container cannot be enumerated.
        """
        ...

    async def fetch_document(self, path: str) -> Document:
        """Fetch a document body with its frontmatter and tags.

        Raises:
            DocumentNotFoundError: If the document does not exist.
            DocumentFetchError: If it exists but cannot be read or parsed.
        """
        ...


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter metadata and note body from raw text.

    Args:
        text: Raw markdown text, possibly containing a frontmatter block.

    Returns:
        A tuple of ``(metadata, content)`` where ``metadata`` is the parsed YAML
        dictionary (empty when no frontmatter is present) and ``content`` is the
        markdown body without the frontmatter block.

    Raises:
        ValueError: If the frontmatter block exists but cannot be parsed as YAML.
    """
    if not text:
        return {}, ""

    try:
        post = frontmatter.loads(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Frontmatter contains invalid YAML: {exc}") from exc

    metadata = {str(key): _normalize_value(value) for key, value in (post.metadata or {}).items()}
    content = post.content if post.content is not None else ""
    return metadata, content


def _normalize_value(value: Any) -> Any:
    """Coerce a parsed YAML value into the plain JSON-compatible value set."""
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(key): _normalize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_normalize_value(item) for item in value]
    return str(value)


def _frontmatter_tags(metadata: Mapping[str, Any]) -> list[str]:
    raw = metadata.get("tags")
    if isinstance(raw, str):
        return [tag for tag in TAG_SPLIT_PATTERN.split(raw) if tag]
    if isinstance(raw, list):
        return [str(tag).strip() for tag in raw if tag is not None and str(tag).strip()]
    return []


def _inline_tags(body: str) -> list[str]:
    """Collect ``#tags`` written in the note body, ignoring fenced code blocks."""
    stripped = FENCED_CODE_PATTERN.sub("", body)
    tags = []
    for match in INLINE_TAG_PATTERN.finditer(stripped):
        tag = match.group(1).rstrip("/")
        # Obsidian requires at least one non-numeric character
        if tag and not tag.replace("/", "").isdigit():
            tags.append(tag)
    return tags


def collect_tags(metadata: Mapping[str, Any], body: str) -> tuple[str, ...]:
    """Merge frontmatter and inline tags, de-duplicated case-insensitively."""
    seen: set[str] = set()
    tags: list[str] = []
    for tag in _frontmatter_tags(metadata) + _inline_tags(body):
        key = tag.lstrip("#").lower()
        if key and key not in seen:
            seen.add(key)
            tags.append(tag)
    return tuple(tags)


# ==============================================================================
# SOURCES
# ==============================================================================


class FilesystemDocumentSource:
    """Document source backed by a vault directory on the local filesystem.

    Entries whose resolved location falls outside the vault root (for example a
    symlink to a folder elsewhere on disk) are left out of listings.
    """

    def __init__(self, root: Path) -> None:
        self.root = root.expanduser().resolve(strict=False)

    def _resolve(self, relative: str) -> Path:
        """Resolve a vault-relative path, refusing anything outside the root."""
        candidate = (self.root / relative.strip("/")).resolve(strict=False)
        if not candidate.is_relative_to(self.root):
            raise ValueError(f"Path '{relative}' escapes the vault root.")
        return candidate

    def _inside_root(self, entry: Path) -> bool:
        try:
            return entry.resolve(strict=False).is_relative_to(self.root)
        except (OSError, RuntimeError):
            return False

    async def container_identity(self, container_path: str) -> Optional[tuple[int, int]]:
        """Device/inode pair of a folder, or ``None`` when it cannot be stat'ed."""
        try:
            stat = self._resolve(container_path).stat()
        except (OSError, ValueError):
            return None
        return (stat.st_dev, stat.st_ino)

    async def list_children(self, container_path: str) -> list[ChildEntry]:
        try:
            directory = self._resolve(container_path)
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except (OSError, ValueError) as exc:
            raise NotAccessibleError(f"Cannot list folder '{container_path or '/'}': {exc}") from exc

        children: list[ChildEntry] = []
        for entry in entries:
            if entry.name.startswith("."):
                continue
            if not self._inside_root(entry):
                logger.debug("Skipping '%s': resolves outside the vault root", entry)
                continue
            if entry.is_dir():
                stat = entry.stat()
                children.append(ChildEntry(entry.name, True, identity=(stat.st_dev, stat.st_ino)))
            else:
                children.append(ChildEntry(entry.name, False))
        return children

    async def fetch_document(self, path: str) -> Document:
        try:
            note_path = self._resolve(path)
        except ValueError as exc:
            raise DocumentNotFoundError(str(exc)) from exc

        if not note_path.is_file():
            raise DocumentNotFoundError(f"Note '{path}' not found.")

        try:
            text = note_path.read_text(encoding="utf-8")
            mtime = note_path.stat().st_mtime
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentFetchError(f"Cannot read note '{path}': {exc}") from exc

        try:
            metadata, body = _parse_frontmatter(text)
        except ValueError as exc:
            raise DocumentFetchError(f"Note '{path}': {exc}") from exc

        return Document(
            path=path,
            content=body,
            frontmatter=metadata,
            tags=collect_tags(metadata, body),
            modified=modified_date(mtime),
        )


class CachingDocumentSource:
    """Per-query decorator that memoizes successful document fetches by path.

    Meant to live for a single query; it never invalidates entries.
    """

    def __init__(self, inner: DocumentSource) -> None:
        self.inner = inner
        self._documents: dict[str, Document] = {}

    async def container_identity(self, container_path: str) -> Optional[Any]:
        identify = getattr(self.inner, "container_identity", None)
        return await identify(container_path) if identify is not None else None

    async def list_children(self, container_path: str) -> list[ChildEntry]:
        return await self.inner.list_children(container_path)

    async def fetch_document(self, path: str) -> Document:
        cached = self._documents.get(path)
        if cached is not None:
            return cached
        document = await self.inner.fetch_document(path)
        self._documents[path] = document
        return document


@asynccontextmanager
async def open_source(vault: VaultMetadata) -> AsyncIterator[DocumentSource]:
    """Open the document source for a configured vault.

    Raises:
        NotAccessibleError: If a filesystem vault directory does not exist.
        ValueError: If a REST vault has no API key configured.
    """
    if vault.path is not None:
        if not vault.path.is_dir():
            raise NotAccessibleError(f"Vault '{vault.name}' is not accessible at {vault.path}")
        yield FilesystemDocumentSource(vault.path)
        return

    async with RestDocumentSource(
        vault.url,
        resolve_api_key(vault),
        verify=vault.verify_tls,
    ) as source:
        yield source
