"""Configuration loading and vault root validation."""

import logging
from collections.abc import Iterable
from pathlib import Path

import yaml

from obsidian_graph.constants import CONFIG_PATH
from obsidian_graph.data_models import VaultMetadata, VaultConfiguration

logger = logging.getLogger(__name__)


def _resolve_directory(raw_path: str) -> Path:
    """Expand ``~`` and resolve a configured directory to an absolute path.

    Raises:
        NotADirectoryError: If the path is missing or not a directory.
    """
    resolved_path = Path(raw_path).expanduser().resolve(strict=False)
    if not resolved_path.exists():
        raise NotADirectoryError(f"Error accessing directory {raw_path}: no such directory")
    if not resolved_path.is_dir():
        raise NotADirectoryError(f"Error: {raw_path} is not a directory")
    return resolved_path


def configuration_from_directories(directories: Iterable[str]) -> VaultConfiguration:
    """Build a configuration from vault directories given on the command line.

    The first directory becomes the primary (write-authoritative) vault. Each
    vault is named after its directory.

    Raises:
        ValueError: If no directories are supplied.
        NotADirectoryError: If any entry does not exist or is not a directory.
    """
    vaults: list[VaultMetadata] = []
    for raw_path in directories:
        path = _resolve_directory(raw_path)
        vaults.append(VaultMetadata(name=path.name or str(path), path=path))

    if not vaults:
        raise ValueError("Usage: obsidian-graph-mcp <vault-directory> [<vault-directory> ...]")

    return VaultConfiguration(vaults=tuple(vaults))


def load_vault_configuration(config_path: Path = CONFIG_PATH) -> VaultConfiguration:
    """Load and validate a YAML vault configuration file.

    Expected layout::

        default: personal
        vaults:
          personal:
            path: ~/Documents/Personal
            description: Personal notes
          work:
            path: ~/Documents/Work

    Args:
        config_path: Path to the YAML configuration file. Defaults to
            ``vaults.yaml`` at the project root.

    Returns:
        A :class:`VaultConfiguration` whose first vault is ``default`` when it is
        given, otherwise the first entry of the mapping.

    Raises:
        FileNotFoundError: If the configuration file is missing.
        ValueError: If the file does not provide the expected structure.
        NotADirectoryError: If a configured vault path is not a directory.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Vault configuration file not found at {config_path}")

    raw_config = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw_config, dict):
        raise ValueError("Vault configuration must be a mapping")

    vaults_section = raw_config.get("vaults")
    if not isinstance(vaults_section, dict) or not vaults_section:
        raise ValueError("Vault configuration must include a non-empty 'vaults' mapping")

    processed: dict[str, VaultMetadata] = {}
    for name, entry in vaults_section.items():
        if not isinstance(entry, dict):
            raise ValueError(f"Vault '{name}' must map to a dictionary of settings")

        raw_path = entry.get("path")
        if not isinstance(raw_path, str) or not raw_path.strip():
            raise ValueError(f"Vault '{name}' is missing a valid 'path' string")

        description = str(entry.get("description") or "").strip()
        processed[str(name)] = VaultMetadata(
            name=str(name),
            path=_resolve_directory(raw_path.strip()),
            description=description,
        )

    default_vault = raw_config.get("default")
    if default_vault is not None and default_vault not in processed:
        raise ValueError(f"Default vault '{default_vault}' is not present in the 'vaults' mapping")

    ordered = list(processed.values())
    if default_vault is not None:
        ordered.sort(key=lambda vault: vault.name != default_vault)

    logger.debug("Loaded %d vault(s) from %s", len(ordered), config_path)
    return VaultConfiguration(vaults=tuple(ordered))
