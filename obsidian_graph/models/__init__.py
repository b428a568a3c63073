"""Pydantic input models for MCP tool validation.

Each model is the argument shape of one tool. Wire names that are not valid
snake_case (``matchAll``, ``fromPath``) are field aliases.

Architecture:
- base: Base models for single-note path and content arguments
- note_models: Input models for reads, writes and link creation
- graph_models: Input models for whole-vault queries
"""

from .base import BaseNotePathInput, BaseNoteContentInput, field_description
from .note_models import (
    ReadNotesInput,
    WriteNoteInput,
    AppendNoteInput,
    ExtractLinksInput,
    ExtractMetadataInput,
    CreateLinkInput,
)
from .graph_models import (
    SearchNotesInput,
    FindBacklinksInput,
    SearchByTagsInput,
)

__all__ = [
    # Base models
    "BaseNotePathInput",
    "BaseNoteContentInput",
    "field_description",
    # Note models
    "ReadNotesInput",
    "WriteNoteInput",
    "AppendNoteInput",
    "ExtractLinksInput",
    "ExtractMetadataInput",
    "CreateLinkInput",
    # Graph models
    "SearchNotesInput",
    "FindBacklinksInput",
    "SearchByTagsInput",
]
