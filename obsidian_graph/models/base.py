"""Base Pydantic models for MCP tool argument validation.

Every tool validates its argument bundle against one of these shapes before any
filesystem access happens.

Base Models:
- BaseNotePathInput: A single vault-relative note path
- BaseNoteContentInput: A note path plus a markdown body
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


def field_description(model: type[BaseModel], name: str) -> str:
    """Return the description of field ``name`` so tool signatures can reuse it."""
    return model.model_fields[name].description or ""


def reject_blank_path(value: str) -> str:
    """Shared check for path-like fields.

    The value is returned unchanged; sandboxing and extension checks happen in
    the core operations.
    """
    if not value.strip():
        raise ValueError(
            "Note path cannot be empty. "
            "Provide a path relative to the vault root like 'Projects/Plan.md'."
        )
    return value


class BaseNotePathInput(BaseModel):
    """Base model for operations that target one note.

    The path is relative to the primary vault root. Hidden segments and paths
    that escape the vault are rejected later by the sandbox.
    """

    path: str = Field(
        description=(
            "Note path relative to the vault root, including the .md extension. "
            "Examples: 'Daily Notes/2025-10-27.md', 'Projects/Plan.md'."
        ),
        examples=["Daily Notes/2025-10-27.md", "Projects/Plan.md", "README.md"]
    )

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Reject empty or whitespace-only paths."""
        return reject_blank_path(v)


class BaseNoteContentInput(BaseNotePathInput):
    """Base model for operations that write markdown into a note."""

    content: str = Field(
        description=(
            "Markdown content. Written exactly as given; "
            "may be empty."
        )
    )
