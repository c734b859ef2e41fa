"""Base Pydantic models for MCP tool input validation.

This module defines base models that provide common validation patterns
for vault-scoped operations. Other input models inherit from these bases.

Base Models:
- BaseVaultInput: Optional vault selection shared by every vault-scoped tool
- BaseNotePathInput: Adds note path validation for single-note operations
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator


def clean_note_path(value: str) -> str:
    """Validate and normalize a vault-relative note path.

    Enforces:
    - Non-empty path
    - No path traversal segments (``.``, ``..``)
    - Relative path only (no leading ``/``)
    - ``.md`` extension (appended when missing)

    Raises:
        ValueError: If the path is empty, absolute, or contains traversal segments.
    """
    cleaned = value.strip()

    if not cleaned:
        raise ValueError(
            "Note path cannot be empty. "
            "Provide a vault-relative path like 'Daily Notes/2025-10-27.md'."
        )

    if cleaned.startswith("/"):
        raise ValueError(
            "Note path must be relative to the vault root. "
            "Do not start with '/'. "
            f"Invalid path: '{cleaned}'"
        )

    parts = cleaned.split("/")
    if any(part in {".", ".."} for part in parts):
        raise ValueError(
            "Note path cannot contain '.' or '..' path segments. "
            f"Invalid path: '{cleaned}'"
        )

    if not cleaned.lower().endswith(".md"):
        cleaned = f"{cleaned}.md"

    return cleaned


class BaseVaultInput(BaseModel):
    """Base model for operations that run against a configured vault."""

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault name (omit to use active vault). "
            "Use list_vaults() to discover available vaults."
        )
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        """Validate vault name format.

        Args:
            v: The vault name to validate

        Returns:
            The validated vault name or None

        Raises:
            ValueError: If vault name is empty string
        """
        if v is not None and not v.strip():
            raise ValueError(
                "Vault name cannot be empty. "
                "Either omit the vault parameter to use the active vault, "
                "or provide a valid vault name from list_vaults()."
            )

        return v.strip() if v else None


class BaseNotePathInput(BaseVaultInput):
    """Base model for single-note operations."""

    path: str = Field(
        min_length=1,
        description=(
            "Note path relative to the vault root. "
            "Examples: 'Daily Notes/2025-10-27.md', 'Projects/New Project.md'. "
            "The .md extension is added when omitted."
        ),
        examples=["Daily Notes/2025-10-27.md", "Projects/Roadmap.md", "README.md"]
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate the note path for safety and format."""
        return clean_note_path(v)


def clean_folder_path(value: Optional[str]) -> str:
    """Validate a vault-relative folder path; ``None`` or ``"/"`` mean the vault root.

    Raises:
        ValueError: If the path contains traversal segments.
    """
    if value is None:
        return "/"

    cleaned = value.strip().strip("/")
    if not cleaned:
        return "/"

    parts = cleaned.split("/")
    if any(part in {".", ".."} for part in parts):
        raise ValueError(
            "Folder path cannot contain '.' or '..' path segments. "
            "These are not allowed for security reasons. "
            f"Invalid path: '{cleaned}'"
        )

    return cleaned
