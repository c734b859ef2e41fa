"""Shared fixtures: an in-memory document source and an on-disk sample vault."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

import pytest

from vault_query import ChildEntry, Document, FilesystemDocumentSource
from vault_query.config import get_vault_configuration
from vault_query.constants import CONFIG_ENV_VAR
from vault_query.errors import DocumentFetchError, DocumentNotFoundError, NotAccessibleError


class InMemoryDocumentSource:
    """Document source over a ``{path: note}`` mapping.

    Folders are implied by the paths; listing order follows insertion order.
    ``broken`` paths are listed but fail to fetch; ``unlistable`` folders fail to list.
    """

    def __init__(
        self,
        notes: dict[str, Any],
        broken: Iterable[str] = (),
        unlistable: Iterable[str] = (),
    ) -> None:
        self.documents: dict[str, Document] = {}
        for path, note in notes.items():
            if isinstance(note, str):
                note = {"content": note}
            self.documents[path] = Document(
                path=path,
                content=note.get("content", ""),
                frontmatter=note.get("frontmatter", {}),
                tags=tuple(note.get("tags", ())),
                modified=note.get("modified"),
            )
        self.broken = set(broken)
        self.unlistable = set(unlistable)
        self.fetch_calls: list[str] = []
        self.list_calls: list[str] = []

    async def list_children(self, container_path: str) -> list[ChildEntry]:
        self.list_calls.append(container_path)
        if container_path in self.unlistable:
            raise NotAccessibleError(f"Cannot list folder '{container_path}'")

        prefix = f"{container_path}/" if container_path else ""
        children: dict[str, bool] = {}
        for path in self.documents:
            if not path.startswith(prefix):
                continue
            name, separator, _ = path[len(prefix):].partition("/")
            children.setdefault(name, bool(separator))

        if container_path and not children:
            raise NotAccessibleError(f"Folder '{container_path}' does not exist")
        return [ChildEntry(name, is_container) for name, is_container in children.items()]

    async def fetch_document(self, path: str) -> Document:
        self.fetch_calls.append(path)
        if path in self.broken:
            raise DocumentFetchError(f"Note '{path}' is not readable")
        try:
            return self.documents[path]
        except KeyError:
            raise DocumentNotFoundError(f"Note '{path}' not found.") from None


@pytest.fixture
def make_source():
    """Factory for :class:`InMemoryDocumentSource` instances."""
    return InMemoryDocumentSource


@pytest.fixture
def vault_dir(tmp_path: Path) -> Path:
    """Create an on-disk vault with tagged notes, nested folders, and noise."""
    vault_path = tmp_path / "test_vault"
    vault_path.mkdir()

    (vault_path / "ml-basics.md").write_text(
        "---\n"
        "tags: [machine-learning, ai, tutorial]\n"
        "title: ML Basics\n"
        "status: draft\n"
        "priority: 1\n"
        "---\n"
        "# Machine Learning Basics\n"
        "Introduction to ML concepts. Gradient descent is covered later.\n",
        encoding="utf-8",
    )
    (vault_path / "research.md").write_text(
        "---\n"
        "tags: research\n"
        "author: Test Author\n"
        "created: 2025-10-27\n"
        "---\n"
        "# Research Notes\n"
        "Some research content about gradient descent and #project/alpha work.\n",
        encoding="utf-8",
    )
    (vault_path / "no-frontmatter.md").write_text(
        "# Regular Note\nNo frontmatter here, only an inline #idea.\n",
        encoding="utf-8",
    )

    projects = vault_path / "projects"
    projects.mkdir()
    (projects / "mcp-server.md").write_text(
        "---\n"
        "tags: [obsidian, mcp, python]\n"
        "status: active\n"
        "---\n"
        "# MCP Server Project\n"
        "## Tasks\n"
        "- write tests\n"
        "### Later\n"
        "- ship it\n"
        "## Notes\n"
        "Nothing yet.\n",
        encoding="utf-8",
    )
    (projects / "diagram.png").write_bytes(b"\x89PNG\r\n")

    hidden = vault_path / ".obsidian"
    hidden.mkdir()
    (hidden / "workspace.md").write_text("gradient descent", encoding="utf-8")

    return vault_path


@pytest.fixture
def fs_source(vault_dir: Path) -> FilesystemDocumentSource:
    return FilesystemDocumentSource(vault_dir)


@pytest.fixture
def config_file(tmp_path: Path, vault_dir: Path) -> Path:
    """Vault registry with one filesystem vault and one REST vault."""
    config_path = tmp_path / "vaults.yaml"
    config_path.write_text(
        f"""
default: personal
vaults:
  personal:
    path: {vault_dir}
    description: Local notes
  work:
    url: https://127.0.0.1:27124/
    api_key_env: WORK_VAULT_KEY
    verify_tls: false
""",
        encoding="utf-8",
    )
    return config_path


@pytest.fixture
def active_config(config_file: Path, monkeypatch: pytest.MonkeyPatch):
    """Point the process-wide configuration at ``config_file`` with no active vaults."""
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
    monkeypatch.setattr("vault_query.session._ACTIVE_VAULTS", {})
    get_vault_configuration.cache_clear()
    yield get_vault_configuration()
    get_vault_configuration.cache_clear()
