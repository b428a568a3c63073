"""Whole-vault query MCP tools.

This module contains MCP tool wrappers for:
- search_notes: Find notes by filename
- find_backlinks: Find notes linking to a note
- search_by_tags: Find notes by inline or frontmatter tags
"""
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from obsidian_graph.data_models import VaultConfiguration
from obsidian_graph.dispatch import TOOLS, call_tool
from obsidian_graph.models import (
    FindBacklinksInput,
    SearchByTagsInput,
    SearchNotesInput,
    field_description,
)


def register_graph_tools(mcp: FastMCP, configuration: VaultConfiguration) -> None:
    """Bind the whole-vault query tools to ``mcp``."""

    @mcp.tool(name="search_notes", description=TOOLS["search_notes"].description)
    async def search_notes(
        query: Annotated[str, Field(description=field_description(SearchNotesInput, "query"))],
    ) -> CallToolResult:
        return call_tool(configuration, "search_notes", {"query": query}).to_call_tool_result()

    @mcp.tool(name="find_backlinks", description=TOOLS["find_backlinks"].description)
    async def find_backlinks(
        path: Annotated[str, Field(description=field_description(FindBacklinksInput, "path"))],
    ) -> CallToolResult:
        return call_tool(configuration, "find_backlinks", {"path": path}).to_call_tool_result()

    @mcp.tool(name="search_by_tags", description=TOOLS["search_by_tags"].description)
    async def search_by_tags(
        tags: Annotated[list[str], Field(description=field_description(SearchByTagsInput, "tags"))],
        matchAll: Annotated[  # noqa: N803
            bool, Field(description=field_description(SearchByTagsInput, "match_all"))
        ] = False,
    ) -> CallToolResult:
        arguments = {"tags": tags, "matchAll": matchAll}
        return call_tool(configuration, "search_by_tags", arguments).to_call_tool_result()
