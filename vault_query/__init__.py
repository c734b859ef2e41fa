"""Vault Query MCP Server

Index-free text, tag, and frontmatter search over Obsidian vaults, with
size-bounded responses, via Model Context Protocol.
"""

from vault_query.data_models import (
    ChildEntry,
    Document,
    DocumentRef,
    FrontmatterMatch,
    MatchWindow,
    Page,
    Predicate,
    PredicateOperator,
    SearchResult,
    TagMatch,
    TruncatedContent,
    VaultConfiguration,
    VaultMetadata,
    VaultStats,
)
from vault_query.errors import (
    DocumentFetchError,
    DocumentNotFoundError,
    NotAccessibleError,
    SectionNotFoundError,
    VaultQueryError,
)
from vault_query.core.sources import (
    CachingDocumentSource,
    DocumentSource,
    FilesystemDocumentSource,
    open_source,
)
from vault_query.core.rest_source import RestDocumentSource
from vault_query.core.walker import walk
from vault_query.core.search_operations import (
    match_tags,
    search_documents,
    tag_search,
    text_search,
)
from vault_query.core.frontmatter_operations import (
    evaluate_documents,
    evaluate_predicate,
    frontmatter_search,
)
from vault_query.core.content_operations import extract_section, paginate, truncate_content
from vault_query.core.note_operations import batch_read, list_notes, read_note, vault_stats
from vault_query.server import mcp, run_server

# Import tools to register them with the MCP server
from vault_query import tools  # noqa: F401

__version__ = "0.1.0"
__all__ = [
    "ChildEntry",
    "Document",
    "DocumentRef",
    "FrontmatterMatch",
    "MatchWindow",
    "Page",
    "Predicate",
    "PredicateOperator",
    "SearchResult",
    "TagMatch",
    "TruncatedContent",
    "VaultConfiguration",
    "VaultMetadata",
    "VaultStats",
    "DocumentFetchError",
    "DocumentNotFoundError",
    "NotAccessibleError",
    "SectionNotFoundError",
    "VaultQueryError",
    "CachingDocumentSource",
    "DocumentSource",
    "FilesystemDocumentSource",
    "RestDocumentSource",
    "open_source",
    "walk",
    "match_tags",
    "search_documents",
    "tag_search",
    "text_search",
    "evaluate_documents",
    "evaluate_predicate",
    "frontmatter_search",
    "extract_section",
    "paginate",
    "truncate_content",
    "batch_read",
    "list_notes",
    "read_note",
    "vault_stats",
    "mcp",
    "run_server",
]
