"""Vault traversal: enumerate every document reachable from a container."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from vault_query.core.sources import DocumentSource
from vault_query.data_models import ChildEntry, DocumentRef

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """Normalize a container path: no leading or trailing separators, root is ``""``.

    Examples:
        >>> normalize_path("/")
        ''
        >>> normalize_path("/Projects/Tech/")
        'Projects/Tech'
    """
    return "/".join(part for part in path.split("/") if part)


def join_path(parent: str, name: str) -> str:
    """Join a normalized parent path and a child name with a single separator."""
    name = name.strip("/")
    return f"{parent}/{name}" if parent else name


async def walk(
    source: DocumentSource,
    root: str = "/",
    include_containers: bool = False,
) -> list[DocumentRef]:
    """Enumerate all documents below ``root`` in depth-first listing order.

    Containers are expanded but, unless ``include_containers`` is set, never
    returned. Traversal uses an explicit stack of pending listings, so nesting
    depth is not limited by the interpreter's recursion limit, and each container
    identity (the root's included, when the source can report it) is expanded at
    most once, so a source that reports cyclic structure still terminates.

    Args:
        source: Document source to enumerate.
        root: Container path to start from (``"/"`` for the vault root).
        include_containers: Also emit a ref for every expanded container, in the
            position where it was listed.

    Returns:
        Ordered list of :class:`DocumentRef` for every non-container entry, plus
        the expanded containers when ``include_containers`` is set.

    Raises:
        NotAccessibleError: If any container cannot be listed. The walk aborts and
            no partial result is returned.
    """
    root_path = normalize_path(root)
    visited: set[Any] = {root_path}
    identify = getattr(source, "container_identity", None)
    if identify is not None:
        root_identity = await identify(root_path)
        if root_identity is not None:
            visited.add(root_identity)
    refs: list[DocumentRef] = []

    stack: list[tuple[str, Iterator[ChildEntry]]] = [
        (root_path, iter(await source.list_children(root_path)))
    ]

    while stack:
        parent, children = stack[-1]
        entry = next(children, None)
        if entry is None:
            stack.pop()
            continue

        child_path = join_path(parent, entry.name)
        if not entry.is_container:
            refs.append(DocumentRef.from_path(child_path))
            continue

        identity = entry.identity if entry.identity is not None else child_path
        if identity in visited:
            logger.warning("Skipping folder '%s': already visited (cyclic structure)", child_path)
            continue
        visited.add(identity)
        if include_containers:
            refs.append(DocumentRef.from_path(child_path, is_container=True))
        stack.append((child_path, iter(await source.list_children(child_path))))

    logger.debug("Walked %d entries under '%s'", len(refs), root_path or "/")
    return refs
