"""Single-note operations: reads, writes, appends and link creation.

Every operation here resolves its path against the primary vault only and
performs exactly one sandbox check before touching the filesystem.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from obsidian_graph.constants import MARKDOWN_SUFFIX
from obsidian_graph.core.parser import extract_links, extract_metadata
from obsidian_graph.core.sandbox import PathSandbox
from obsidian_graph.data_models import LinkSet, NoteMetadata, VaultConfiguration

logger = logging.getLogger(__name__)


class ExtensionPolicyError(ValueError):
    """Raised when a write targets a path without the ``.md`` extension."""


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _require_markdown(path: str) -> None:
    if not path.endswith(MARKDOWN_SUFFIX):
        raise ExtensionPolicyError("Note path must end with .md extension")


def _read_existing(note_path: Path) -> str:
    """Read a note, treating a missing file as empty."""
    try:
        return note_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""


def strip_markdown_suffix(name: str) -> str:
    return name[: -len(MARKDOWN_SUFFIX)] if name.endswith(MARKDOWN_SUFFIX) else name


def build_wiki_link(target: str, link_text: Optional[str] = None) -> str:
    """Build ``[[target]]`` or ``[[target|link_text]]`` with ``.md`` dropped from the target."""
    note = strip_markdown_suffix(target)
    return f"[[{note}|{link_text}]]" if link_text else f"[[{note}]]"


# ==============================================================================
# READ OPERATIONS
# ==============================================================================


@dataclass(frozen=True)
class NoteReadResult:
    """Outcome of reading one note out of a batch."""

    path: str
    content: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def read_note(configuration: VaultConfiguration, path: str) -> str:
    """Return the content of one note from the primary vault.

    Raises:
        PathDeniedError: If the sandbox rejects ``path``.
        OSError: If the file cannot be read.
    """
    note_path = PathSandbox(configuration).resolve_in_primary(path)
    return note_path.read_text(encoding="utf-8")


def read_notes(configuration: VaultConfiguration, paths: list[str]) -> list[NoteReadResult]:
    """Read several notes; a failure on one path does not affect the others."""
    results: list[NoteReadResult] = []
    for path in paths:
        try:
            results.append(NoteReadResult(path=path, content=read_note(configuration, path)))
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            logger.debug("Failed to read note '%s': %s", path, exc)
            results.append(NoteReadResult(path=path, error=str(exc)))
    return results


def read_note_links(configuration: VaultConfiguration, path: str) -> LinkSet:
    """Parse the wiki and markdown links out of one note."""
    return extract_links(read_note(configuration, path))


def read_note_metadata(configuration: VaultConfiguration, path: str) -> NoteMetadata:
    """Parse frontmatter, inline fields and tags out of one note."""
    return extract_metadata(read_note(configuration, path))


# ==============================================================================
# WRITE OPERATIONS
# ==============================================================================


def write_note(configuration: VaultConfiguration, path: str, content: str) -> Path:
    """Create or overwrite a note with exactly ``content``.

    Args:
        configuration: Vault roots; the note is written under the primary vault.
        path: Vault-relative path ending in ``.md``.
        content: Full note body.

    Returns:
        The absolute path written.

    Raises:
        ExtensionPolicyError: If ``path`` does not end in ``.md``.
        PathDeniedError: If the sandbox rejects ``path``.
    """
    _require_markdown(path)
    note_path = PathSandbox(configuration).resolve_in_primary(path)
    note_path.parent.mkdir(parents=True, exist_ok=True)
    note_path.write_text(content, encoding="utf-8")
    logger.info("Wrote note '%s' in vault '%s'", path, configuration.primary.name)
    return note_path


def append_note(configuration: VaultConfiguration, path: str, content: str) -> Path:
    """Append ``content`` to a note, creating it when missing.

    Existing content and the new content are joined with a single newline. The
    operation is not idempotent: appending the same text twice stores it twice.

    Raises:
        ExtensionPolicyError: If ``path`` does not end in ``.md``.
        PathDeniedError: If the sandbox rejects ``path``.
    """
    _require_markdown(path)
    note_path = PathSandbox(configuration).resolve_in_primary(path)
    note_path.parent.mkdir(parents=True, exist_ok=True)

    existing = _read_existing(note_path)
    updated = f"{existing}\n{content}" if existing else content
    note_path.write_text(updated, encoding="utf-8")
    logger.info("Appended to note '%s' in vault '%s'", path, configuration.primary.name)
    return note_path


def create_link(
    configuration: VaultConfiguration,
    from_path: str,
    to_path: str,
    link_text: Optional[str] = None,
) -> str:
    """Append a wiki link to ``to_path`` at the end of the note at ``from_path``.

    Only ``from_path`` is sandboxed; the target is a logical note name and is not
    required to exist. Repeated calls add the link again.

    Returns:
        The wiki link that was written.

    Raises:
        PathDeniedError: If the sandbox rejects ``from_path``.
    """
    note_path = PathSandbox(configuration).resolve_in_primary(from_path)

    existing = _read_existing(note_path)
    link = build_wiki_link(to_path, link_text)
    updated = f"{existing}\n\n{link}" if existing else link
    note_path.write_text(updated, encoding="utf-8")
    logger.info("Linked '%s' -> '%s' in vault '%s'", from_path, to_path, configuration.primary.name)
    return link
