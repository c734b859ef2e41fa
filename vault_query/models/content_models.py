"""Pydantic input models for response shaping operations.

These tools work on caller-supplied data and need no vault:
- Truncate text to a character budget
- Paginate a list
- Extract a markdown section by heading
"""

from __future__ import annotations

from typing import Any
from pydantic import BaseModel, Field, field_validator

from vault_query.constants import DEFAULT_PER_PAGE, TRUNCATION_SUFFIX


class TruncateTextInput(BaseModel):
    """Input model for truncate_text tool.

    Examples:
        >>> TruncateTextInput(content="long text ...", max_chars=200)
    """

    content: str = Field(description="Text to truncate.")

    max_chars: int = Field(
        ge=0,
        description="Character budget, suffix included."
    )

    suffix: str = Field(
        TRUNCATION_SUFFIX,
        description="Marker appended when the text is cut."
    )


class PaginateItemsInput(BaseModel):
    """Input model for paginate_items tool.

    Examples:
        >>> PaginateItemsInput(items=[1, 2, 3, 4], page=2, per_page=3)
    """

    items: list[Any] = Field(description="Items to paginate, in order.")

    page: int = Field(1, ge=1, description="Page number (1-indexed).")

    per_page: int = Field(DEFAULT_PER_PAGE, ge=1, description="Items per page.")


class ExtractSectionInput(BaseModel):
    """Input model for extract_note_section tool.

    Examples:
        >>> ExtractSectionInput(content="# A\\ntext\\n# B", heading="A")
    """

    content: str = Field(description="Markdown text.")

    heading: str = Field(
        min_length=1,
        description=(
            "Heading text to match (case-insensitive, without # markers). "
            "Examples: 'Tasks', 'Meeting Notes'"
        )
    )

    @field_validator('heading')
    @classmethod
    def validate_heading(cls, v: str) -> str:
        """Strip whitespace and leading # markers; heading must not be empty."""
        cleaned = v.strip()
        while cleaned.startswith("#"):
            cleaned = cleaned[1:].strip()

        if not cleaned:
            raise ValueError(
                "Heading cannot be empty. "
                "Provide the heading text you want to find (without # markers)."
            )

        return cleaned
