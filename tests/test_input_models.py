"""Tests for Pydantic input models.

This test suite validates the argument shapes of the MCP tools, ensuring that:
- Valid inputs are accepted unchanged
- Blank paths and missing fields raise ValidationError
- Wire names such as matchAll and fromPath are honoured as aliases
- Schema generation exposes the wire names
"""

import pytest
from pydantic import ValidationError

from obsidian_graph.models import (
    AppendNoteInput,
    BaseNotePathInput,
    CreateLinkInput,
    ReadNotesInput,
    SearchByTagsInput,
    SearchNotesInput,
    WriteNoteInput,
)


class TestBaseNotePathInput:
    """Test suite for BaseNotePathInput model validation."""

    def test_valid_nested_path(self):
        """Test that nested paths with folders are accepted."""
        model = BaseNotePathInput(path="Daily Notes/2025-10-27.md")
        assert model.path == "Daily Notes/2025-10-27.md"

    def test_path_is_not_normalized(self):
        """Test that the path is passed through untouched for the sandbox to judge."""
        model = BaseNotePathInput(path="../outside.md")
        assert model.path == "../outside.md"

    def test_empty_path_raises_error(self):
        """Test that empty paths raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            BaseNotePathInput(path="")

        assert "cannot be empty" in str(exc_info.value)

    def test_whitespace_path_raises_error(self):
        """Test that whitespace-only paths raise ValidationError."""
        with pytest.raises(ValidationError):
            BaseNotePathInput(path="   ")

    def test_non_string_path_raises_error(self):
        """Test that a number is not coerced into a path."""
        with pytest.raises(ValidationError):
            BaseNotePathInput(path=42)


class TestContentModels:
    """Test suite for write and append inputs."""

    def test_write_accepts_empty_content(self):
        """Test that an empty body is a valid note."""
        model = WriteNoteInput(path="Empty.md", content="")
        assert model.content == ""

    def test_missing_content_raises_error(self):
        """Test that content is required."""
        with pytest.raises(ValidationError):
            AppendNoteInput(path="Log.md")


class TestReadNotesInput:
    """Test suite for ReadNotesInput model validation."""

    def test_list_of_paths(self):
        model = ReadNotesInput(paths=["A.md", "B.md"])
        assert model.paths == ["A.md", "B.md"]

    def test_single_string_is_rejected(self):
        """Test that a bare string is not accepted in place of a list."""
        with pytest.raises(ValidationError):
            ReadNotesInput(paths="A.md")


class TestSearchByTagsInput:
    """Test suite for SearchByTagsInput model validation."""

    def test_match_all_defaults_to_false(self):
        model = SearchByTagsInput(tags=["project"])
        assert model.match_all is False

    def test_match_all_by_alias(self):
        """Test that the wire name matchAll populates match_all."""
        model = SearchByTagsInput.model_validate({"tags": ["a"], "matchAll": True})
        assert model.match_all is True

    def test_match_all_by_field_name(self):
        model = SearchByTagsInput(tags=["a"], match_all=True)
        assert model.match_all is True

    def test_missing_tags_raises_error(self):
        with pytest.raises(ValidationError):
            SearchByTagsInput.model_validate({"matchAll": True})

    def test_schema_uses_wire_name(self):
        """Test that the generated JSON schema exposes matchAll."""
        schema = SearchByTagsInput.model_json_schema(by_alias=True)
        assert "matchAll" in schema["properties"]
        assert schema["required"] == ["tags"]


class TestCreateLinkInput:
    """Test suite for CreateLinkInput model validation."""

    def test_wire_names(self):
        model = CreateLinkInput.model_validate(
            {"fromPath": "Inbox.md", "toPath": "Plan", "linkText": "the plan"}
        )
        assert model.from_path == "Inbox.md"
        assert model.to_path == "Plan"
        assert model.link_text == "the plan"

    def test_link_text_is_optional(self):
        model = CreateLinkInput.model_validate({"fromPath": "Inbox.md", "toPath": "Plan"})
        assert model.link_text is None

    def test_blank_target_raises_error(self):
        with pytest.raises(ValidationError):
            CreateLinkInput.model_validate({"fromPath": "Inbox.md", "toPath": " "})


def test_search_query_is_required():
    with pytest.raises(ValidationError):
        SearchNotesInput.model_validate({})
