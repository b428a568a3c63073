"""Named-operation dispatch: validate arguments, run the operation, format text.

``call_tool`` is the single seam between the MCP transport and the core
operations. It never raises: argument-shape problems, sandbox denials and I/O
failures all come back as a :class:`ToolResult` flagged as an error.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from mcp.types import CallToolResult, TextContent
from pydantic import BaseModel, ValidationError

from obsidian_graph.constants import NOTE_SEPARATOR, SEARCH_LIMIT
from obsidian_graph.core import graph_operations, note_operations
from obsidian_graph.data_models import VaultConfiguration
from obsidian_graph.models import (
    AppendNoteInput,
    CreateLinkInput,
    ExtractLinksInput,
    ExtractMetadataInput,
    FindBacklinksInput,
    ReadNotesInput,
    SearchByTagsInput,
    SearchNotesInput,
    WriteNoteInput,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    """Textual tool result with an error flag."""

    text: str
    is_error: bool = False

    def to_call_tool_result(self) -> CallToolResult:
        """Convert to the MCP wire result, carrying the error flag as ``isError``."""
        return CallToolResult(content=[TextContent(type="text", text=self.text)], isError=self.is_error)


# ==============================================================================
# OPERATION HANDLERS
# ==============================================================================


def _read_notes(configuration: VaultConfiguration, args: ReadNotesInput) -> str:
    blocks = []
    for result in note_operations.read_notes(configuration, args.paths):
        if result.ok:
            blocks.append(f"{result.path}:\n{result.content}\n")
        else:
            blocks.append(f"{result.path}: Error - {result.error}")
    return NOTE_SEPARATOR.join(blocks)


def _search_notes(configuration: VaultConfiguration, args: SearchNotesInput) -> str:
    result = graph_operations.search_notes(configuration, args.query, limit=SEARCH_LIMIT)
    text = "\n".join(result.paths) if result.paths else "No matches found"
    if result.overflow:
        text += f"\n\n... {result.overflow} more results not shown."
    return text


def _write_note(configuration: VaultConfiguration, args: WriteNoteInput) -> str:
    note_operations.write_note(configuration, args.path, args.content)
    return f"Successfully wrote note to {args.path}"


def _append_note(configuration: VaultConfiguration, args: AppendNoteInput) -> str:
    note_operations.append_note(configuration, args.path, args.content)
    return f"Successfully appended to note at {args.path}"


def _extract_links(configuration: VaultConfiguration, args: ExtractLinksInput) -> str:
    links = note_operations.read_note_links(configuration, args.path)
    return json.dumps(links.as_payload(), indent=2)


def _find_backlinks(configuration: VaultConfiguration, args: FindBacklinksInput) -> str:
    backlinks = graph_operations.find_backlinks(configuration, args.path)
    if not backlinks:
        return "No backlinks found"
    return f"Found {len(backlinks)} backlinks:\n" + "\n".join(backlinks)


def _extract_metadata(configuration: VaultConfiguration, args: ExtractMetadataInput) -> str:
    metadata = note_operations.read_note_metadata(configuration, args.path)
    return json.dumps(metadata.as_payload(), indent=2)


def _search_by_tags(configuration: VaultConfiguration, args: SearchByTagsInput) -> str:
    matches = graph_operations.search_by_tags(configuration, args.tags, match_all=args.match_all)
    tag_list = ", ".join(graph_operations.normalize_tags(args.tags))
    if not matches:
        return f"No notes found with tags {tag_list}"
    return f"Found {len(matches)} notes with tags {tag_list}:\n" + "\n".join(matches)


def _create_link(configuration: VaultConfiguration, args: CreateLinkInput) -> str:
    note_operations.create_link(configuration, args.from_path, args.to_path, args.link_text)
    return f"Successfully created link from {args.from_path} to {args.to_path}"


@dataclass(frozen=True)
class ToolSpec:
    """A dispatchable operation: its argument shape, handler and description."""

    input_model: type[BaseModel]
    handler: Callable[[VaultConfiguration, Any], str]
    description: str


TOOLS: dict[str, ToolSpec] = {
    "read_notes": ToolSpec(
        ReadNotesInput,
        _read_notes,
        "Read the contents of multiple notes. Each note's content is returned with its "
        "path as a reference. Failed reads for individual notes won't stop "
        "the entire operation. Reading too many at once may result in an error.",
    ),
    "search_notes": ToolSpec(
        SearchNotesInput,
        _search_notes,
        "Searches for a note by its name. The search is case-insensitive and matches "
        "partial names. Queries can also be a valid regex. Returns paths of the notes "
        "that match the query.",
    ),
    "write_note": ToolSpec(
        WriteNoteInput,
        _write_note,
        "Write content to a note file. Creates the file if it doesn't exist, or overwrites "
        "if it does. The path should be relative to the vault root and end with .md extension. "
        "Parent directories will be created if needed.",
    ),
    "append_note": ToolSpec(
        AppendNoteInput,
        _append_note,
        "Append content to an existing note file. Creates the file if it doesn't exist. "
        "The path should be relative to the vault root and end with .md extension. "
        "Content is added with a newline separator if the file has existing content.",
    ),
    "extract_links": ToolSpec(
        ExtractLinksInput,
        _extract_links,
        "Extract all wiki links ([[note]]) and markdown links from a note. Returns both "
        "types of links found in the note content.",
    ),
    "find_backlinks": ToolSpec(
        FindBacklinksInput,
        _find_backlinks,
        "Find all notes that link to a specific note. Searches every note in the vault "
        "for wiki links and markdown links pointing to the specified note.",
    ),
    "extract_metadata": ToolSpec(
        ExtractMetadataInput,
        _extract_metadata,
        "Extract frontmatter, inline fields (key:: value), and tags from a note.",
    ),
    "search_by_tags": ToolSpec(
        SearchByTagsInput,
        _search_by_tags,
        "Search for notes containing specific tags. Can match all tags (AND) or any tag (OR). "
        "Tags can be specified with or without the # prefix. Searches both inline tags and "
        "frontmatter tags.",
    ),
    "create_link": ToolSpec(
        CreateLinkInput,
        _create_link,
        "Create a wiki link from one note to another. Adds [[target]] or [[target|linkText]] "
        "at the end of the source note.",
    ),
}


# ==============================================================================
# DISPATCH
# ==============================================================================


def call_tool(
    configuration: VaultConfiguration,
    name: str,
    arguments: Optional[dict[str, Any]] = None,
) -> ToolResult:
    """Validate ``arguments`` for tool ``name`` and run it.

    Args:
        configuration: Vault roots the operation works against.
        name: Tool name, one of :data:`TOOLS`.
        arguments: Raw argument bundle from the client.

    Returns:
        A :class:`ToolResult`. Failures carry ``is_error=True`` and a message
        prefixed with ``Error:``.
    """
    try:
        spec = TOOLS.get(name)
        if spec is None:
            raise ValueError(f"Unknown tool: {name}")

        try:
            parsed = spec.input_model.model_validate(arguments or {})
        except ValidationError as exc:
            raise ValueError(f"Invalid arguments for {name}: {exc}") from exc

        return ToolResult(spec.handler(configuration, parsed))
    except (OSError, ValueError) as exc:
        logger.warning("Tool '%s' failed: %s", name, exc)
        return ToolResult(f"Error: {exc}", is_error=True)
