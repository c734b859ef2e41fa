"""Pydantic input models for search operations.

This module defines input models for the three vault search tools:
- Full-text search with context snippets
- Hierarchical tag search (AND/OR)
- Frontmatter field search (equals/contains/exists)
"""

from __future__ import annotations

from typing import Any, Literal
from pydantic import Field, field_validator

from vault_query.constants import (
    DEFAULT_CONTEXT_CHARS,
    DEFAULT_MAX_RESULTS,
    MAX_MATCHES_PER_DOCUMENT,
    MAX_MATCHING_DOCUMENTS,
)

from .base import BaseVaultInput, clean_folder_path


class BaseSearchInput(BaseVaultInput):
    """Fields shared by every search tool."""

    folder: str = Field(
        "/",
        description=(
            "Folder to search, relative to the vault root. "
            "Default: '/' (entire vault)."
        )
    )

    max_results: int = Field(
        DEFAULT_MAX_RESULTS,
        ge=1,
        le=500,
        description="Maximum results to return. 'total' still reports every match."
    )

    @field_validator('folder', mode='before')
    @classmethod
    def validate_folder(cls, v: Any) -> str:
        """Normalize the folder path and reject traversal."""
        return clean_folder_path(v)


class TextSearchInput(BaseSearchInput):
    """Input model for search_vault_text tool.

    Case-insensitive substring search inside note bodies, returning bounded
    context snippets per match.

    Examples:
        >>> TextSearchInput(query="machine learning")
        >>> TextSearchInput(query="API design", context_chars=50, max_results=5)
    """

    query: str = Field(
        description=(
            "Search text (case-insensitive substring). "
            "An empty query returns no results. "
            "Examples: 'machine learning', 'API design'"
        )
    )

    context_chars: int = Field(
        DEFAULT_CONTEXT_CHARS,
        ge=0,
        le=2_000,
        description="Characters of context on each side of a match."
    )

    max_matches_per_document: int = Field(
        MAX_MATCHES_PER_DOCUMENT,
        ge=1,
        le=50,
        description="Maximum snippets (and score) per note."
    )

    max_documents: int = Field(
        MAX_MATCHING_DOCUMENTS,
        ge=1,
        le=1_000,
        description="Stop scanning after this many notes have matched."
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"query": "machine learning", "vault": None},
                {"query": "API design", "context_chars": 50, "max_results": 5, "vault": "work"}
            ]
        }


class TagSearchInput(BaseSearchInput):
    """Input model for search_vault_tags tool.

    Matches tags and their hierarchical descendants ('project' matches
    'project/alpha'). Supports AND/OR semantics.

    Examples:
        >>> TagSearchInput(tags=["machine-learning"])
        >>> TagSearchInput(tags=["obsidian", "#mcp"], match_all=True)
    """

    tags: list[str] = Field(
        min_length=1,
        description=(
            "Tags to search for (case-insensitive, leading '#' optional). "
            "Examples: ['machine-learning'], ['project/alpha', 'urgent']"
        )
    )

    match_all: bool = Field(
        False,
        description=(
            "If True, require all tags (AND logic). "
            "If False, match any tag (OR logic). "
            "Default: False"
        )
    )

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        """Validate tags list is not empty and contains valid tags."""
        cleaned_tags = [tag.strip() for tag in v if tag.strip() and tag.strip() != "#"]

        if not cleaned_tags:
            raise ValueError(
                "Tags list cannot contain only empty strings. "
                "Provide valid tag names."
            )

        return cleaned_tags

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"tags": ["machine-learning"], "match_all": False, "vault": None},
                {"tags": ["obsidian", "mcp"], "match_all": True, "vault": "personal"}
            ]
        }


class FrontmatterSearchInput(BaseSearchInput):
    """Input model for search_vault_frontmatter tool.

    Filters notes by one frontmatter field. ``equals`` compares loosely
    (numeric 1 equals string "1"), ``contains`` is a case-insensitive
    substring test over strings, list items or mapping values, and
    ``exists`` checks that the field is present at all.

    Examples:
        >>> FrontmatterSearchInput(field="status", value="draft")
        >>> FrontmatterSearchInput(field="tags", value="python", operator="contains")
        >>> FrontmatterSearchInput(field="author", operator="exists")
    """

    field: str = Field(
        min_length=1,
        description="Frontmatter field name. Examples: 'status', 'tags', 'author'"
    )

    value: Any = Field(
        None,
        description="Value to compare against (string, number, boolean, ...). Ignored for 'exists'."
    )

    operator: Literal["equals", "contains", "exists"] = Field(
        "equals",
        description="Comparison operator: 'equals' (default), 'contains', or 'exists'."
    )

    @field_validator('field')
    @classmethod
    def validate_field(cls, v: str) -> str:
        """Validate field name is not blank."""
        if not v.strip():
            raise ValueError("Frontmatter field name cannot be empty.")
        return v.strip()

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"field": "status", "value": "draft", "operator": "equals"},
                {"field": "tags", "value": "python", "operator": "contains"},
                {"field": "author", "operator": "exists"}
            ]
        }
