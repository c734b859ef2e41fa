"""Data models for vault configuration, documents, and query results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Optional


# ==============================================================================
# VAULT CONFIGURATION
# ==============================================================================


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized metadata describing a configured vault.

    Exactly one of ``path`` (local directory) or ``url`` (Local REST API base URL)
    is set; :attr:`source_kind` reports which.
    """

    name: str
    description: str
    path: Optional[Path] = None
    url: Optional[str] = None
    api_key_env: Optional[str] = None
    verify_tls: bool = True

    @property
    def source_kind(self) -> str:
        return "filesystem" if self.path is not None else "rest"

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        payload: dict[str, Any] = {
            "name": self.name,
            "description": self.description,
            "source": self.source_kind,
        }
        if self.path is not None:
            payload["path"] = str(self.path)
            payload["exists"] = self.path.is_dir()
        else:
            payload["url"] = self.url
        return payload


class VaultConfiguration:
    """Holds vault metadata and default resolution helpers.

    Loaded once per process from vaults.yaml.
    Provides vault lookup by name and payload serialization for MCP responses.
    """

    def __init__(self, default_vault: str, vaults: dict[str, VaultMetadata]) -> None:
        self.default_vault = default_vault
        self.vaults = vaults

    def get(self, name: str) -> VaultMetadata:
        """Get vault metadata by name.

        Args:
            name: The name of the vault to retrieve.

        Returns:
            VaultMetadata for the requested vault.

        Raises:
            ValueError: If the vault name is not found in configuration.
        """
        try:
            return self.vaults[name]
        except KeyError as exc:
            available = ", ".join(sorted(self.vaults))
            raise ValueError(f"Unknown vault '{name}'. Available vaults: {available}") from exc

    def as_payload(self) -> dict[str, Any]:
        """Return serializable configuration payload.

        Returns:
            Dictionary with default vault name and list of vault metadata.
        """
        return {
            "default": self.default_vault,
            "vaults": [vault.as_payload() for vault in self.vaults.values()],
        }


# ==============================================================================
# DOCUMENTS
# ==============================================================================


@dataclass(frozen=True)
class ChildEntry:
    """One entry of a container listing as reported by a document source."""

    name: str
    is_container: bool
    # Stable container identity (e.g. device/inode) when the source can provide one
    identity: Optional[Any] = None


@dataclass(frozen=True)
class DocumentRef:
    """Reference to a document reachable from the vault root."""

    path: str
    is_container: bool
    extension: str

    @classmethod
    def from_path(cls, path: str, is_container: bool = False) -> DocumentRef:
        leaf = path.rsplit("/", 1)[-1]
        extension = ""
        if not is_container and "." in leaf:
            extension = leaf.rsplit(".", 1)[1]
        return cls(path=path, is_container=is_container, extension=extension)

    def as_payload(self) -> dict[str, Any]:
        return {"path": self.path, "extension": self.extension}


@dataclass(frozen=True)
class Document:
    """A fetched document: body text plus frontmatter and tags."""

    path: str
    content: str
    frontmatter: dict[str, Any] = field(default_factory=dict)
    tags: tuple[str, ...] = ()
    # Last modification date (UTC, YYYY-MM-DD) when the source knows it
    modified: Optional[str] = None


def modified_date(timestamp: float) -> str:
    """Format a POSIX timestamp (seconds) as a UTC calendar date."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).date().isoformat()


# ==============================================================================
# QUERY RESULTS
# ==============================================================================


@dataclass(frozen=True)
class MatchWindow:
    """One text match with its surrounding context."""

    document_path: str
    match: str
    context: str
    offset: int

    def as_payload(self) -> dict[str, Any]:
        return {"match": self.match, "context": self.context, "offset": self.offset}


@dataclass(frozen=True)
class SearchResult:
    """All retained matches for one document."""

    path: str
    matches: tuple[MatchWindow, ...]

    @property
    def score(self) -> int:
        return len(self.matches)

    def as_payload(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "score": self.score,
            "matches": [window.as_payload() for window in self.matches],
        }


@dataclass(frozen=True)
class TagMatch:
    path: str
    tags: tuple[str, ...]

    def as_payload(self) -> dict[str, Any]:
        return {"path": self.path, "tags": list(self.tags)}


class PredicateOperator(str, Enum):
    """Comparison operators supported by frontmatter search."""

    EQUALS = "equals"
    CONTAINS = "contains"
    EXISTS = "exists"


@dataclass(frozen=True)
class Predicate:
    """A ``field``/``operator``/``value`` triple over note frontmatter."""

    field: str
    operator: PredicateOperator
    value: Any = None


@dataclass(frozen=True)
class FrontmatterMatch:
    path: str
    value: Any

    def as_payload(self) -> dict[str, Any]:
        return {"path": self.path, "value": self.value}


@dataclass(frozen=True)
class Page:
    """One page of a larger result list."""

    items: list[Any]
    page: int
    per_page: int
    total: int
    has_more: bool

    def as_payload(self) -> dict[str, Any]:
        return {
            "items": self.items,
            "page": self.page,
            "per_page": self.per_page,
            "total": self.total,
            "has_more": self.has_more,
        }


@dataclass(frozen=True)
class TruncatedContent:
    content: str
    truncated: bool

    def as_payload(self) -> dict[str, Any]:
        return {"content": self.content, "truncated": self.truncated}


@dataclass(frozen=True)
class VaultStats:
    """Counts over a vault subtree plus a sample of its tags."""

    total_files: int
    total_notes: int
    folders: int
    tags: tuple[str, ...]

    def as_payload(self) -> dict[str, Any]:
        return {
            "total_files": self.total_files,
            "total_notes": self.total_notes,
            "folders": self.folders,
            "tags": list(self.tags),
        }
