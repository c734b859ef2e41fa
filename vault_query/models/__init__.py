"""Pydantic input models for MCP tool validation.

Each model is the input schema for one MCP tool, with field-level validation,
type checking, and descriptive error messages. FastMCP derives the tool's JSON
schema from these models.

Architecture:
- base: Base models (BaseVaultInput, BaseNotePathInput) and path validators
- search_models: Text, tag, and frontmatter search inputs
- note_models: Read-only note retrieval inputs
- content_models: Truncation, pagination, and section extraction inputs
- vault_models: Vault management inputs

Usage:
    from vault_query.models import TextSearchInput, TagSearchInput
    from vault_query.models import ReadNoteInput, ListVaultsInput
"""

from .base import BaseVaultInput, BaseNotePathInput
from .search_models import (
    TextSearchInput,
    TagSearchInput,
    FrontmatterSearchInput,
)
from .note_models import (
    ReadNoteInput,
    ListNotesInput,
    BatchReadInput,
    VaultStatsInput,
)
from .content_models import (
    TruncateTextInput,
    PaginateItemsInput,
    ExtractSectionInput,
)
from .vault_models import (
    ListVaultsInput,
    SetActiveVaultInput,
)

__all__ = [
    # Base models
    "BaseVaultInput",
    "BaseNotePathInput",
    # Search models
    "TextSearchInput",
    "TagSearchInput",
    "FrontmatterSearchInput",
    # Note models
    "ReadNoteInput",
    "ListNotesInput",
    "BatchReadInput",
    "VaultStatsInput",
    # Content shaping models
    "TruncateTextInput",
    "PaginateItemsInput",
    "ExtractSectionInput",
    # Vault models
    "ListVaultsInput",
    "SetActiveVaultInput",
]
