"""Shared fixtures: a temporary vault and the configuration pointing at it."""

from pathlib import Path

import pytest

from obsidian_graph.data_models import VaultConfiguration, VaultMetadata


def write_note(root: Path, relative: str, content: str) -> Path:
    """Write ``content`` to ``root / relative``, creating folders as needed."""
    note_path = root / relative
    note_path.parent.mkdir(parents=True, exist_ok=True)
    note_path.write_text(content, encoding="utf-8")
    return note_path


@pytest.fixture
def vault_path(tmp_path):
    path = tmp_path / "vault"
    path.mkdir()
    return path.resolve()


@pytest.fixture
def outside_path(tmp_path):
    """A directory next to the vault that the sandbox must never reach."""
    path = tmp_path / "outside"
    path.mkdir()
    (path / "secret.md").write_text("top secret [[Target]] #secret", encoding="utf-8")
    return path.resolve()


@pytest.fixture
def configuration(vault_path):
    return VaultConfiguration(
        vaults=(VaultMetadata(name="test", path=vault_path, description="Test vault"),)
    )
