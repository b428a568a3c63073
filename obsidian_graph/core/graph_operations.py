"""Whole-vault queries: name search, backlinks and tag search.

Every query walks each configured root with :func:`walk_vault`. Each visited
entry is passed through the sandbox with its root-relative path; entries the
sandbox rejects, and files that cannot be read, are skipped without aborting
the walk.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, TypeVar

from obsidian_graph.constants import MARKDOWN_SUFFIX, SEARCH_LIMIT
from obsidian_graph.core.parser import extract_links, extract_metadata, normalize_tag
from obsidian_graph.core.sandbox import DenialReason, PathSandbox
from obsidian_graph.data_models import SearchResult, VaultConfiguration, VaultMetadata

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ==============================================================================
# TRAVERSAL
# ==============================================================================


class EntryStatus(str, Enum):
    NOTE = "note"
    FILE = "file"
    DIRECTORY = "directory"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class WalkEntry:
    """One visited directory entry and what the walk decided about it."""

    status: EntryStatus
    relative_path: str
    path: Optional[Path] = None
    reason: Optional[DenialReason] = None
    error: Optional[str] = None

    @property
    def is_note(self) -> bool:
        return self.status is EntryStatus.NOTE


def _classify_entry(sandbox: PathSandbox, root: Path, entry: os.DirEntry, relative: str) -> WalkEntry:
    """Run the sandbox on one entry and decide how the walk treats it."""
    try:
        resolution = sandbox.check(relative, base=root)
        if not resolution.allowed:
            return WalkEntry(EntryStatus.SKIPPED, relative, reason=resolution.reason)

        # Symlinked directories are not descended into, which also rules out cycles.
        if entry.is_dir(follow_symlinks=False):
            return WalkEntry(EntryStatus.DIRECTORY, relative, path=Path(entry.path))
        if entry.name.endswith(MARKDOWN_SUFFIX) and entry.is_file():
            return WalkEntry(EntryStatus.NOTE, relative, path=Path(entry.path))
        return WalkEntry(EntryStatus.FILE, relative, path=Path(entry.path))
    except OSError as exc:
        return WalkEntry(EntryStatus.SKIPPED, relative, error=str(exc))


def walk_vault(sandbox: PathSandbox, vault: VaultMetadata) -> Iterator[WalkEntry]:
    """Depth-first walk of one vault root using an explicit stack.

    Entry order within a directory follows :func:`os.scandir`. Subdirectories
    are visited after the remaining entries of the current directory.

    Raises:
        FileNotFoundError: If the vault root itself is not an accessible directory.
    """
    root = vault.path
    if not root.is_dir():
        raise FileNotFoundError(f"Vault '{vault.name}' is not accessible at {root}")

    pending: list[tuple[Path, str]] = [(root, "")]
    while pending:
        directory, prefix = pending.pop()
        try:
            with os.scandir(directory) as iterator:
                entries = list(iterator)
        except OSError as exc:
            if directory == root:
                raise
            yield WalkEntry(EntryStatus.SKIPPED, prefix.rstrip("/"), error=str(exc))
            continue

        subdirectories: list[tuple[Path, str]] = []
        for entry in entries:
            relative = f"{prefix}{entry.name}"
            walked = _classify_entry(sandbox, root, entry, relative)
            if walked.status is EntryStatus.SKIPPED:
                logger.debug(
                    "Skipping '%s' in vault '%s': %s",
                    relative,
                    vault.name,
                    walked.reason.value if walked.reason else walked.error,
                )
            elif walked.status is EntryStatus.DIRECTORY:
                subdirectories.append((Path(entry.path), f"{relative}/"))
            yield walked

        # Reversed so the first listed subdirectory is popped first.
        pending.extend(reversed(subdirectories))


def _read_note(note: WalkEntry) -> Optional[str]:
    assert note.path is not None
    try:
        return note.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Skipping unreadable note '%s': %s", note.relative_path, exc)
        return None


def _collect_across_vaults(
    configuration: VaultConfiguration,
    collect: Callable[[PathSandbox, VaultMetadata], list[T]],
) -> list[T]:
    """Run ``collect`` for every vault concurrently and concatenate in vault order."""
    sandbox = PathSandbox(configuration)
    vaults = configuration.vaults
    if len(vaults) == 1:
        return collect(sandbox, vaults[0])

    with ThreadPoolExecutor(max_workers=len(vaults)) as executor:
        futures = [executor.submit(collect, sandbox, vault) for vault in vaults]
        results: list[T] = []
        for future in futures:
            results.extend(future.result())
    return results


def _dedupe(paths: list[str]) -> list[str]:
    return list(dict.fromkeys(paths))


# ==============================================================================
# SEARCH OPERATIONS
# ==============================================================================


def compile_name_pattern(query: str) -> Optional[re.Pattern[str]]:
    """Translate ``query`` into a case-insensitive pattern, ``*`` meaning any run.

    Returns ``None`` when the result is not a valid regular expression.
    """
    try:
        return re.compile(query.replace("*", ".*"), re.IGNORECASE)
    except re.error:
        return None


def name_matches(name: str, query: str, pattern: Optional[re.Pattern[str]] = None) -> bool:
    """Return ``True`` when ``name`` contains ``query`` or matches it as a pattern."""
    if query.lower() in name.lower():
        return True
    return pattern is not None and pattern.search(name) is not None


def search_notes(configuration: VaultConfiguration, query: str, limit: int = SEARCH_LIMIT) -> SearchResult:
    """Find notes whose filename matches ``query``.

    Args:
        configuration: Vault roots to search.
        query: Case-insensitive substring, or a pattern where ``*`` matches any
            sequence. An invalid pattern only disables the pattern match.
        limit: Maximum number of paths returned.

    Returns:
        A :class:`SearchResult` with at most ``limit`` vault-relative paths and the
        total number of matches found.
    """
    pattern = compile_name_pattern(query)

    def collect(sandbox: PathSandbox, vault: VaultMetadata) -> list[str]:
        return [
            entry.relative_path
            for entry in walk_vault(sandbox, vault)
            if entry.is_note and name_matches(os.path.basename(entry.relative_path), query, pattern)
        ]

    matches = _dedupe(_collect_across_vaults(configuration, collect))
    return SearchResult(paths=matches[:limit], total=len(matches))


def is_backlink(wiki_links: list[str], markdown_links: list[str], target: str) -> bool:
    """Check whether any of a note's links point at ``target``."""
    bare_name = target[: -len(MARKDOWN_SUFFIX)] if target.endswith(MARKDOWN_SUFFIX) else target
    if any(link == bare_name or link == target for link in wiki_links):
        return True
    return any(link == target or link.endswith(f"/{target}") for link in markdown_links)


def find_backlinks(configuration: VaultConfiguration, target: str) -> list[str]:
    """List notes that link to ``target``.

    Args:
        configuration: Vault roots to search.
        target: Note path as given by the caller, with or without ``.md``.

    Returns:
        Vault-relative paths of linking notes, one entry per source note.
    """

    def collect(sandbox: PathSandbox, vault: VaultMetadata) -> list[str]:
        backlinks: list[str] = []
        for entry in walk_vault(sandbox, vault):
            if not entry.is_note:
                continue
            text = _read_note(entry)
            if text is None:
                continue
            links = extract_links(text)
            if is_backlink(links.wiki_links, links.markdown_links, target):
                backlinks.append(entry.relative_path)
        return backlinks

    return _dedupe(_collect_across_vaults(configuration, collect))


def normalize_tags(tags: list[str]) -> list[str]:
    """``#``-prefix every tag, keeping the caller's order."""
    return [normalize_tag(tag) for tag in tags]


def search_by_tags(
    configuration: VaultConfiguration,
    tags: list[str],
    match_all: bool = False,
) -> list[str]:
    """Find notes carrying the requested tags.

    Args:
        configuration: Vault roots to search.
        tags: Tags with or without the leading ``#``.
        match_all: When True every tag must be present; otherwise any one suffices.

    Returns:
        Vault-relative paths of matching notes.
    """
    search_tags = normalize_tags(tags)

    def collect(sandbox: PathSandbox, vault: VaultMetadata) -> list[str]:
        matches: list[str] = []
        for entry in walk_vault(sandbox, vault):
            if not entry.is_note:
                continue
            text = _read_note(entry)
            if text is None:
                continue
            note_tags = set(extract_metadata(text).tags)
            if match_all:
                has_match = all(tag in note_tags for tag in search_tags)
            else:
                has_match = any(tag in note_tags for tag in search_tags)
            if has_match:
                matches.append(entry.relative_path)
        return matches

    return _dedupe(_collect_across_vaults(configuration, collect))
