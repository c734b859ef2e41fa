"""Pydantic input models for read-only note operations.

This module defines input models for note retrieval tools:
- Read a single note (optionally one section) within a character budget
- List notes in a folder with pagination
- Read several notes in one call
- Summarize a vault with counts and a tag sample
"""

from __future__ import annotations

from typing import Any, Optional
from pydantic import Field, field_validator

from vault_query.constants import DEFAULT_MAX_CHARS, DEFAULT_MAX_CHARS_PER_NOTE, DEFAULT_PER_PAGE

from .base import BaseNotePathInput, BaseVaultInput, clean_folder_path, clean_note_path


class ReadNoteInput(BaseNotePathInput):
    """Input model for read_vault_note tool.

    Examples:
        >>> ReadNoteInput(path="Projects/Roadmap.md")
        >>> ReadNoteInput(path="Projects/Roadmap", section="Milestones", max_chars=2000)
    """

    max_chars: int = Field(
        DEFAULT_MAX_CHARS,
        ge=1,
        description="Maximum characters of content to return (truncated at a word boundary)."
    )

    section: Optional[str] = Field(
        None,
        description=(
            "Heading text (case-insensitive, without # markers) whose section "
            "should be returned instead of the whole note."
        )
    )

    @field_validator('section')
    @classmethod
    def validate_section(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace and accidental leading # markers."""
        if v is None:
            return None

        cleaned = v.strip()
        while cleaned.startswith("#"):
            cleaned = cleaned[1:].strip()

        if not cleaned:
            raise ValueError(
                "Section heading cannot be empty. "
                "Provide the heading text (e.g., 'Tasks', 'Summary') or omit the parameter."
            )

        return cleaned

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Projects/Roadmap.md", "vault": None},
                {"path": "Projects/Roadmap.md", "section": "Milestones", "max_chars": 2000}
            ]
        }


class ListNotesInput(BaseVaultInput):
    """Input model for list_vault_notes tool.

    Examples:
        >>> ListNotesInput()
        >>> ListNotesInput(folder="Projects", recursive=True, page=2)
    """

    folder: str = Field(
        "/",
        description="Folder relative to the vault root. Default: '/' (vault root)."
    )

    page: int = Field(1, ge=1, description="Page number (1-indexed).")

    per_page: int = Field(
        DEFAULT_PER_PAGE,
        ge=1,
        le=500,
        description="Notes per page."
    )

    recursive: bool = Field(
        False,
        description="If True, include notes in subfolders. Default: False (direct children only)"
    )

    include_summary: bool = Field(
        False,
        description=(
            "If True, include title and tags for each note on the page. "
            "Increases token cost."
        )
    )

    @field_validator('folder', mode='before')
    @classmethod
    def validate_folder(cls, v: Any) -> str:
        """Normalize the folder path and reject traversal."""
        return clean_folder_path(v)

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"folder": "/", "page": 1, "per_page": 20},
                {"folder": "Projects", "recursive": True, "include_summary": True}
            ]
        }


class BatchReadInput(BaseVaultInput):
    """Input model for batch_read_vault_notes tool.

    Examples:
        >>> BatchReadInput(paths=["a.md", "Projects/b.md"], max_chars_per_note=500)
    """

    paths: list[str] = Field(
        min_length=1,
        max_length=100,
        description="Note paths relative to the vault root."
    )

    max_chars_per_note: int = Field(
        DEFAULT_MAX_CHARS_PER_NOTE,
        ge=1,
        description="Maximum characters returned per note."
    )

    @field_validator('paths')
    @classmethod
    def validate_paths(cls, v: list[str]) -> list[str]:
        """Validate every note path."""
        return [clean_note_path(path) for path in v]

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"paths": ["Inbox.md", "Projects/Roadmap.md"], "max_chars_per_note": 1000}
            ]
        }


class VaultStatsInput(BaseVaultInput):
    """Input model for get_vault_stats tool.

    Examples:
        >>> VaultStatsInput()
        >>> VaultStatsInput(folder="Projects")
    """

    folder: str = Field(
        "/",
        description="Folder to summarize, relative to the vault root. Default: '/' (entire vault)."
    )

    @field_validator('folder', mode='before')
    @classmethod
    def validate_folder(cls, v: Any) -> str:
        """Normalize the folder path and reject traversal."""
        return clean_folder_path(v)

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"vault": None},
                {"folder": "Projects", "vault": "work"}
            ]
        }
