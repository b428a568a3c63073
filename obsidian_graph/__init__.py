"""Obsidian Graph MCP Server

Sandboxed access to one or more Obsidian vaults via Model Context Protocol:
note reads and writes, filename and tag search, links, backlinks and metadata.
"""

from obsidian_graph.data_models import VaultMetadata, VaultConfiguration
from obsidian_graph.config import configuration_from_directories, load_vault_configuration
from obsidian_graph.core.sandbox import DenialReason, PathDeniedError, PathSandbox
from obsidian_graph.core.parser import extract_links, extract_metadata
from obsidian_graph.core.graph_operations import find_backlinks, search_by_tags, search_notes
from obsidian_graph.core.note_operations import append_note, create_link, read_notes, write_note
from obsidian_graph.dispatch import ToolResult, call_tool

__version__ = "1.0.0"
__all__ = [
    "VaultMetadata",
    "VaultConfiguration",
    "configuration_from_directories",
    "load_vault_configuration",
    "DenialReason",
    "PathDeniedError",
    "PathSandbox",
    "extract_links",
    "extract_metadata",
    "find_backlinks",
    "search_by_tags",
    "search_notes",
    "append_note",
    "create_link",
    "read_notes",
    "write_note",
    "ToolResult",
    "call_tool",
]
