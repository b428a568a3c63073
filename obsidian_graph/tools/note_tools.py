"""Note reading and editing MCP tools.

This module provides MCP tool wrappers for:
- read_notes: Read several notes at once
- write_note: Create or overwrite a note
- append_note: Append to a note
- extract_links: List wiki and markdown links in a note
- extract_metadata: Frontmatter, inline fields and tags of a note
- create_link: Append a wiki link to a note

All tools delegate to obsidian_graph.dispatch.call_tool, which validates the
arguments and turns failures into error-flagged results. Parameter
descriptions come from the input models so clients see the same help text.
"""
from typing import Annotated, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from obsidian_graph.data_models import VaultConfiguration
from obsidian_graph.dispatch import TOOLS, call_tool
from obsidian_graph.models import (
    BaseNoteContentInput,
    BaseNotePathInput,
    CreateLinkInput,
    ReadNotesInput,
    field_description,
)

NotePath = Annotated[str, Field(description=field_description(BaseNotePathInput, "path"))]
NoteContent = Annotated[str, Field(description=field_description(BaseNoteContentInput, "content"))]


def register_note_tools(mcp: FastMCP, configuration: VaultConfiguration) -> None:
    """Bind the single-note tools to ``mcp``."""

    # ==========================================================================
    # READ OPERATIONS
    # ==========================================================================

    @mcp.tool(name="read_notes", description=TOOLS["read_notes"].description)
    async def read_notes(
        paths: Annotated[list[str], Field(description=field_description(ReadNotesInput, "paths"))],
    ) -> CallToolResult:
        return call_tool(configuration, "read_notes", {"paths": paths}).to_call_tool_result()

    @mcp.tool(name="extract_links", description=TOOLS["extract_links"].description)
    async def extract_links(path: NotePath) -> CallToolResult:
        return call_tool(configuration, "extract_links", {"path": path}).to_call_tool_result()

    @mcp.tool(name="extract_metadata", description=TOOLS["extract_metadata"].description)
    async def extract_metadata(path: NotePath) -> CallToolResult:
        return call_tool(configuration, "extract_metadata", {"path": path}).to_call_tool_result()

    # ==========================================================================
    # WRITE OPERATIONS
    # ==========================================================================

    @mcp.tool(name="write_note", description=TOOLS["write_note"].description)
    async def write_note(path: NotePath, content: NoteContent) -> CallToolResult:
        arguments = {"path": path, "content": content}
        return call_tool(configuration, "write_note", arguments).to_call_tool_result()

    @mcp.tool(name="append_note", description=TOOLS["append_note"].description)
    async def append_note(path: NotePath, content: NoteContent) -> CallToolResult:
        arguments = {"path": path, "content": content}
        return call_tool(configuration, "append_note", arguments).to_call_tool_result()

    # Parameter names mirror the wire names clients send.
    @mcp.tool(name="create_link", description=TOOLS["create_link"].description)
    async def create_link(
        fromPath: Annotated[str, Field(description=field_description(CreateLinkInput, "from_path"))],  # noqa: N803
        toPath: Annotated[str, Field(description=field_description(CreateLinkInput, "to_path"))],  # noqa: N803
        linkText: Annotated[  # noqa: N803
            Optional[str], Field(description=field_description(CreateLinkInput, "link_text"))
        ] = None,
    ) -> CallToolResult:
        arguments = {"fromPath": fromPath, "toPath": toPath}
        if linkText is not None:
            arguments["linkText"] = linkText
        return call_tool(configuration, "create_link", arguments).to_call_tool_result()
