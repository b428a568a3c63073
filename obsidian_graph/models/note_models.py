"""Pydantic input models for single-note operations.

This module defines input models for:
- Reading several notes at once
- Writing and appending note content
- Extracting links and metadata from one note
- Creating a wiki link between two notes
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .base import BaseNoteContentInput, BaseNotePathInput, reject_blank_path


class ReadNotesInput(BaseModel):
    """Input model for read_notes tool.

    Reads several notes in one call. A failure on one path is reported inline
    and does not stop the others.

    Examples:
        >>> ReadNotesInput(paths=["Projects/Plan.md", "Inbox.md"])
    """

    paths: list[str] = Field(
        description=(
            "Note paths relative to the vault root. "
            "Reading too many at once may produce a very large result."
        ),
        examples=[["Projects/Plan.md", "Inbox.md"]]
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"paths": ["Projects/Plan.md", "Inbox.md"]}
            ]
        }


class WriteNoteInput(BaseNoteContentInput):
    """Input model for write_note tool.

    Creates the note or overwrites it completely. Writing the same content
    twice leaves exactly that content.

    Examples:
        >>> WriteNoteInput(path="Projects/Plan.md", content="# Plan")
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Projects/Plan.md", "content": "# Plan\n\n- Step 1"}
            ]
        }


class AppendNoteInput(BaseNoteContentInput):
    """Input model for append_note tool.

    Appends to the end of the note, separated by a newline when the note
    already has content. Creates the note when it does not exist.

    Examples:
        >>> AppendNoteInput(path="Daily Log.md", content="- 3:00 PM: Meeting")
    """

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"path": "Daily Log.md", "content": "- 3:00 PM: Meeting"}
            ]
        }


class ExtractLinksInput(BaseNotePathInput):
    """Input model for extract_links tool."""


class ExtractMetadataInput(BaseNotePathInput):
    """Input model for extract_metadata tool."""


class CreateLinkInput(BaseModel):
    """Input model for create_link tool.

    Appends ``[[target]]`` or ``[[target|linkText]]`` to the end of the source
    note. The target is a note name and does not have to exist.

    Examples:
        >>> CreateLinkInput(fromPath="Inbox.md", toPath="Projects/Plan.md")
        >>> CreateLinkInput(fromPath="Inbox.md", toPath="Plan", linkText="the plan")
    """

    from_path: str = Field(
        alias="fromPath",
        description="Source note path relative to the vault root.",
        examples=["Inbox.md"]
    )

    to_path: str = Field(
        alias="toPath",
        description=(
            "Target note name or path. A trailing .md is dropped from the link."
        ),
        examples=["Projects/Plan.md", "Plan"]
    )

    link_text: Optional[str] = Field(
        None,
        alias="linkText",
        description="Optional alias shown instead of the target name."
    )

    @field_validator('from_path', 'to_path')
    @classmethod
    def validate_paths(cls, v: str) -> str:
        """Reject empty or whitespace-only paths."""
        return reject_blank_path(v)

    class Config:
        """Pydantic model configuration."""
        populate_by_name = True
        json_schema_extra = {
            "examples": [
                {"fromPath": "Inbox.md", "toPath": "Projects/Plan.md"},
                {"fromPath": "Inbox.md", "toPath": "Plan", "linkText": "the plan"}
            ]
        }
