"""MCP tool definitions for Obsidian vault operations.

Each tool module exposes a ``register_*`` function that binds its tools to a
FastMCP server and a vault configuration.
"""

from mcp.server.fastmcp import FastMCP

from obsidian_graph.data_models import VaultConfiguration
from obsidian_graph.tools import graph_tools
from obsidian_graph.tools import note_tools


def register_tools(mcp: FastMCP, configuration: VaultConfiguration) -> None:
    """Register every tool on ``mcp``."""
    note_tools.register_note_tools(mcp, configuration)
    graph_tools.register_graph_tools(mcp, configuration)


__all__ = [
    "graph_tools",
    "note_tools",
    "register_tools",
]
