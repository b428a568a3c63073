"""Lexical extraction of links, tags and metadata from note text.

Only a small, fixed subset of Obsidian syntax is recognised:

- ``[[Target]]`` / ``[[Target|Alias]]`` wiki links
- ``[label](target.md)`` markdown links to local notes
- a leading ``---`` frontmatter block of flat ``key: value`` lines
- Dataview-style ``Key:: Value`` inline fields
- ``#tag`` tokens

Both public functions are total: malformed input yields partial or empty results.
"""

from __future__ import annotations

import re

from obsidian_graph.constants import MARKDOWN_SUFFIX
from obsidian_graph.data_models import LinkSet, NoteMetadata

WIKI_LINK_PATTERN = re.compile(r"\[\[([^\]]+)\]\]")
MARKDOWN_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
INLINE_FIELD_PATTERN = re.compile(r"([\w-]+)::([^\n]+)")
TAG_PATTERN = re.compile(r"#[\w-]+")

FRONTMATTER_PATTERN = re.compile(r"\A---\n(.*?)\n---", re.DOTALL)


def _append_unique(items: list[str], value: str) -> None:
    if value and value not in items:
        items.append(value)


def normalize_tag(tag: str) -> str:
    """Return ``tag`` trimmed and prefixed with ``#``."""
    cleaned = tag.strip()
    return cleaned if cleaned.startswith("#") else f"#{cleaned}"


def extract_links(text: str) -> LinkSet:
    """Extract wiki links and local markdown links from note text.

    Args:
        text: Raw markdown.

    Returns:
        A :class:`LinkSet`. Wiki targets drop any ``|alias``; markdown targets
        keep only destinations ending in ``.md`` that are not web URLs.
    """
    wiki_links: list[str] = []
    markdown_links: list[str] = []

    for match in WIKI_LINK_PATTERN.finditer(text):
        _append_unique(wiki_links, match.group(1).split("|", 1)[0].strip())

    for match in MARKDOWN_LINK_PATTERN.finditer(text):
        target = match.group(2).strip()
        if target.endswith(MARKDOWN_SUFFIX) and not target.startswith("http"):
            _append_unique(markdown_links, target)

    return LinkSet(wiki_links=wiki_links, markdown_links=markdown_links)


def parse_frontmatter_block(text: str) -> dict[str, str]:
    """Parse a leading ``---`` block into a flat mapping of raw strings.

    Each line is split once on the first colon. Lines without a colon or with
    an empty key are skipped. Values are not interpreted as YAML.
    """
    match = FRONTMATTER_PATTERN.match(text)
    if match is None:
        return {}

    result: dict[str, str] = {}
    for line in match.group(1).splitlines():
        key, separator, value = line.partition(":")
        key = key.strip()
        if not separator or not key:
            continue
        result[key] = value.strip()
    return result


def _frontmatter_tags(raw_value: str) -> list[str]:
    cleaned = raw_value.strip()
    if cleaned.startswith("[") and cleaned.endswith("]"):
        cleaned = cleaned[1:-1]
    return [normalize_tag(part) for part in cleaned.split(",") if part.strip()]


def extract_metadata(text: str) -> NoteMetadata:
    """Extract frontmatter, inline fields and tags from note text.

    Args:
        text: Raw markdown.

    Returns:
        A :class:`NoteMetadata`. Inline fields keep the last value per key; tags
        are de-duplicated in first-seen order with frontmatter ``tags`` merged
        after the inline ones.
    """
    frontmatter = parse_frontmatter_block(text)

    inline_fields: dict[str, str] = {}
    for match in INLINE_FIELD_PATTERN.finditer(text):
        inline_fields[match.group(1).strip()] = match.group(2).strip()

    tags: list[str] = []
    for match in TAG_PATTERN.finditer(text):
        _append_unique(tags, match.group(0))

    if frontmatter.get("tags"):
        for tag in _frontmatter_tags(frontmatter["tags"]):
            _append_unique(tags, tag)

    return NoteMetadata(frontmatter=frontmatter, inline_fields=inline_fields, tags=tags)
