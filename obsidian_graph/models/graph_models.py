"""Pydantic input models for whole-vault queries.

This module defines input models for:
- Searching notes by filename
- Finding backlinks to a note
- Searching notes by tag
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .base import BaseNotePathInput


class SearchNotesInput(BaseModel):
    """Input model for search_notes tool.

    Case-insensitive filename search. ``*`` in the query matches any run of
    characters; other regular-expression syntax is honoured when valid.

    Examples:
        >>> SearchNotesInput(query="meeting")
        >>> SearchNotesInput(query="2025-*-01")
    """

    query: str = Field(
        description=(
            "Part of a note filename, or a pattern where * matches anything. "
            "Examples: 'meeting', '2025-*-01'"
        )
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"query": "meeting"},
                {"query": "2025-*-01"}
            ]
        }


class FindBacklinksInput(BaseNotePathInput):
    """Input model for find_backlinks tool.

    Examples:
        >>> FindBacklinksInput(path="Projects/Plan.md")
    """


class SearchByTagsInput(BaseModel):
    """Input model for search_by_tags tool.

    Tags may be given with or without the leading ``#``. Both inline ``#tags``
    and the frontmatter ``tags`` field are searched.

    Examples:
        >>> SearchByTagsInput(tags=["project"])
        >>> SearchByTagsInput(tags=["#project", "active"], matchAll=True)
    """

    tags: list[str] = Field(
        description="Tags to search for. Examples: ['project'], ['#project', 'active']"
    )

    match_all: bool = Field(
        False,
        alias="matchAll",
        description=(
            "If True, require all tags (AND). "
            "If False, match any tag (OR)."
        )
    )

    class Config:
        """Pydantic model configuration."""
        populate_by_name = True
        json_schema_extra = {
            "examples": [
                {"tags": ["project"]},
                {"tags": ["#project", "active"], "matchAll": True}
            ]
        }
