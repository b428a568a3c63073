"""Module-level constants for the Obsidian graph MCP server."""

from pathlib import Path

# Configuration
CONFIG_PATH = Path(__file__).parent.parent / "vaults.yaml"

# Limits
SEARCH_LIMIT = 200

# Output formatting
NOTE_SEPARATOR = "\n---\n"
MARKDOWN_SUFFIX = ".md"

# Logging
LOG_LEVEL = "INFO"
