"""Data models for vault configuration and derived note structures."""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized metadata describing one configured vault root."""

    name: str
    path: Path
    description: str = ""

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "name": self.name,
            "path": str(self.path),
            "description": self.description,
            "exists": self.path.is_dir(),
        }


@dataclass(frozen=True)
class VaultConfiguration:
    """Immutable set of vault roots fixed at process start.

    The first vault is authoritative for single-note reads and for every
    mutation. Whole-vault queries span all of them.
    """

    vaults: tuple[VaultMetadata, ...]

    def __post_init__(self) -> None:
        if not self.vaults:
            raise ValueError("At least one vault directory must be configured")

    @property
    def primary(self) -> VaultMetadata:
        """The vault that single-note operations resolve against."""
        return self.vaults[0]

    @property
    def roots(self) -> tuple[Path, ...]:
        return tuple(vault.path for vault in self.vaults)

    def as_payload(self) -> dict[str, Any]:
        """Return serializable configuration payload."""
        return {
            "primary": self.primary.name,
            "vaults": [vault.as_payload() for vault in self.vaults],
        }


@dataclass(frozen=True)
class LinkSet:
    """Links found in one note, de-duplicated in first-seen order."""

    wiki_links: list[str] = field(default_factory=list)
    markdown_links: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.wiki_links) + len(self.markdown_links)

    def as_payload(self) -> dict[str, Any]:
        return {
            "wikiLinks": list(self.wiki_links),
            "markdownLinks": list(self.markdown_links),
            "totalLinks": self.total,
        }


@dataclass(frozen=True)
class NoteMetadata:
    """Frontmatter, inline fields and tags parsed from one note."""

    frontmatter: dict[str, str] = field(default_factory=dict)
    inline_fields: dict[str, str] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)

    def as_payload(self) -> dict[str, Any]:
        return {
            "frontmatter": dict(self.frontmatter),
            "inlineFields": dict(self.inline_fields),
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class SearchResult:
    """Capped list of matching note paths plus the uncapped match count."""

    paths: list[str]
    total: int

    @property
    def overflow(self) -> int:
        return max(0, self.total - len(self.paths))
