"""Command-line entry point.

Usage:
    obsidian-graph-mcp ~/Vaults/Personal              # one vault
    obsidian-graph-mcp ~/Vaults/Personal ~/Vaults/Work # several; the first takes writes
    obsidian-graph-mcp --config vaults.yaml            # vaults from a YAML file
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from obsidian_graph import __version__, server
from obsidian_graph.config import configuration_from_directories, load_vault_configuration
from obsidian_graph.constants import CONFIG_PATH, LOG_LEVEL
from obsidian_graph.data_models import VaultConfiguration


def build_configuration(directories: tuple[str, ...], config_path: Optional[Path]) -> VaultConfiguration:
    """Pick the configuration source.

    Explicit directories win over ``--config``; with neither, ``vaults.yaml`` at
    the project root is used when it exists.
    """
    if directories:
        return configuration_from_directories(directories)
    if config_path is not None:
        return load_vault_configuration(config_path)
    if CONFIG_PATH.exists():
        return load_vault_configuration(CONFIG_PATH)
    raise ValueError("Usage: obsidian-graph-mcp <vault-directory> [<vault-directory> ...]")


@click.command()
@click.version_option(version=__version__, prog_name="obsidian-graph-mcp")
@click.argument("directories", nargs=-1)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML file listing vaults (used when no directories are given; defaults to vaults.yaml).",
)
@click.option(
    "--log-level",
    default=LOG_LEVEL,
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity (written to stderr).",
)
def main(directories: tuple[str, ...], config_path: Optional[Path], log_level: str) -> None:
    """Serve one or more Obsidian vaults over MCP (stdio)."""
    try:
        configuration = build_configuration(directories, config_path)
    except (OSError, ValueError) as exc:
        click.echo(str(exc), err=True)
        sys.exit(1)

    server.configure_logging(log_level)
    server.run_server(configuration)


if __name__ == "__main__":
    main()
