"""FastMCP server initialization and tool registration."""

import logging

from mcp.server.fastmcp import FastMCP

from obsidian_graph.constants import LOG_LEVEL
from obsidian_graph.data_models import VaultConfiguration
from obsidian_graph.tools import register_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "obsidian_graph"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Send log records to stderr so the stdio transport stays clean."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_server(configuration: VaultConfiguration) -> FastMCP:
    """Build a FastMCP server whose tools operate on ``configuration``."""
    mcp = FastMCP(SERVER_NAME)
    register_tools(mcp, configuration)
    return mcp


def run_server(configuration: VaultConfiguration) -> None:
    """Start the MCP server with stdio transport."""
    mcp = create_server(configuration)
    logger.info("Starting Obsidian graph MCP server on stdio")
    logger.info("Allowed directories: %s", ", ".join(str(root) for root in configuration.roots))
    logger.debug("Vault configuration: %s", configuration.as_payload())
    mcp.run(transport="stdio")
