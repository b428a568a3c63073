"""Tests for whole-vault queries and the traversal they share."""

import os

import pytest

from obsidian_graph.core.graph_operations import (
    EntryStatus,
    compile_name_pattern,
    find_backlinks,
    is_backlink,
    name_matches,
    search_by_tags,
    search_notes,
    walk_vault,
)
from obsidian_graph.core.sandbox import DenialReason, PathSandbox
from obsidian_graph.data_models import VaultConfiguration, VaultMetadata

from conftest import write_note


@pytest.fixture
def graph_vault(vault_path, outside_path):
    """A small vault with links, tags, a hidden folder and an escaping symlink."""
    write_note(vault_path, "Target.md", "# Target\n#project")
    write_note(vault_path, "Linker.md", "Points to [[Target]] and [[Target|alias]]")
    write_note(vault_path, "Projects/Alpha.md", "---\ntags: project, active\n---\nSee [t](Target.md)")
    write_note(vault_path, "Projects/Beta.md", "Nested [x](notes/Target.md) #project #active")
    write_note(vault_path, "Projects/Gamma.md", "#active only [[Other]]")
    write_note(vault_path, ".obsidian/Hidden Target.md", "[[Target]] #project")
    write_note(vault_path, "attachment.txt", "[[Target]]")
    os.symlink(outside_path / "secret.md", vault_path / "Escape.md")
    return vault_path


class TestWalkVault:
    def test_reports_every_entry_with_a_status(self, configuration, graph_vault):
        vault = configuration.primary
        entries = {entry.relative_path: entry for entry in walk_vault(PathSandbox(configuration), vault)}

        assert entries["Target.md"].status is EntryStatus.NOTE
        assert entries["Projects"].status is EntryStatus.DIRECTORY
        assert entries["Projects/Alpha.md"].status is EntryStatus.NOTE
        assert entries["attachment.txt"].status is EntryStatus.FILE
        assert entries[".obsidian"].status is EntryStatus.SKIPPED
        assert entries[".obsidian"].reason is DenialReason.HIDDEN_PATH
        assert entries["Escape.md"].status is EntryStatus.SKIPPED
        assert entries["Escape.md"].reason is DenialReason.SYMLINK_ESCAPE

    def test_hidden_directories_are_not_descended(self, configuration, graph_vault):
        paths = [entry.relative_path for entry in walk_vault(PathSandbox(configuration), configuration.primary)]
        assert not any(path.startswith(".obsidian/") for path in paths)

    def test_deep_trees_do_not_recurse(self, configuration, vault_path):
        deep = "/".join(f"d{level}" for level in range(200))
        write_note(vault_path, f"{deep}/bottom.md", "")

        notes = [
            entry.relative_path
            for entry in walk_vault(PathSandbox(configuration), configuration.primary)
            if entry.is_note
        ]

        assert notes == [f"{deep}/bottom.md"]

    def test_missing_root_fails(self, tmp_path):
        vault = VaultMetadata(name="gone", path=tmp_path / "gone")
        configuration = VaultConfiguration(vaults=(vault,))
        with pytest.raises(FileNotFoundError):
            list(walk_vault(PathSandbox(configuration), vault))


class TestSearchNotes:
    def test_substring_is_case_insensitive(self, configuration, graph_vault):
        result = search_notes(configuration, "alpha")
        assert result.paths == ["Projects/Alpha.md"]
        assert result.total == 1
        assert result.overflow == 0

    def test_wildcard_pattern(self, configuration, graph_vault):
        result = search_notes(configuration, "p*a.md")
        assert sorted(result.paths) == ["Projects/Alpha.md"]

        result = search_notes(configuration, "*a.md")
        assert sorted(result.paths) == ["Projects/Alpha.md", "Projects/Beta.md", "Projects/Gamma.md"]

    def test_only_markdown_files_match(self, configuration, graph_vault):
        assert search_notes(configuration, "attachment").paths == []

    def test_hidden_and_escaping_entries_are_skipped(self, configuration, graph_vault):
        paths = search_notes(configuration, "target").paths
        assert paths == ["Target.md"]
        assert search_notes(configuration, "escape").paths == []

    def test_invalid_pattern_is_not_an_error(self, configuration, graph_vault):
        result = search_notes(configuration, "([")
        assert result.paths == []
        assert result.total == 0

    def test_results_are_capped(self, configuration, vault_path):
        for index in range(250):
            write_note(vault_path, f"note-{index:03d}.md", "")

        result = search_notes(configuration, "note")

        assert len(result.paths) == 200
        assert result.total == 250
        assert result.overflow == 50

    def test_spans_all_roots(self, tmp_path):
        first = (tmp_path / "first").resolve()
        second = (tmp_path / "second").resolve()
        write_note(first, "Meeting One.md", "")
        write_note(second, "Sub/Meeting Two.md", "")
        configuration = VaultConfiguration(
            vaults=(VaultMetadata(name="first", path=first), VaultMetadata(name="second", path=second))
        )

        result = search_notes(configuration, "meeting")

        assert result.paths == ["Meeting One.md", "Sub/Meeting Two.md"]


class TestFindBacklinks:
    def test_wiki_and_markdown_backlinks(self, configuration, graph_vault):
        backlinks = find_backlinks(configuration, "Target.md")
        assert sorted(backlinks) == ["Linker.md", "Projects/Alpha.md", "Projects/Beta.md"]

    def test_one_report_per_source(self, configuration, graph_vault):
        write_note(graph_vault, "Both.md", "[[Target]] [t](Target.md) [[Target.md]]")
        backlinks = find_backlinks(configuration, "Target.md")
        assert backlinks.count("Both.md") == 1

    def test_removing_the_link_removes_the_backlink(self, configuration, vault_path):
        write_note(vault_path, "Y.md", "")
        write_note(vault_path, "X.md", "links to [[Y]]")
        assert find_backlinks(configuration, "Y.md") == ["X.md"]

        write_note(vault_path, "X.md", "no links any more")
        assert find_backlinks(configuration, "Y.md") == []

    def test_unreadable_notes_are_skipped(self, configuration, vault_path):
        (vault_path / "Broken.md").write_bytes(b"\xff\xfe[[Y]]")
        write_note(vault_path, "Good.md", "[[Y]]")
        assert find_backlinks(configuration, "Y.md") == ["Good.md"]

    def test_target_without_extension(self, configuration, graph_vault):
        assert "Linker.md" in find_backlinks(configuration, "Target")

    def test_is_backlink_rules(self):
        assert is_backlink(["Plan"], [], "Plan.md")
        assert is_backlink(["Projects/Plan.md"], [], "Projects/Plan.md")
        assert is_backlink([], ["../Projects/Plan.md"], "Projects/Plan.md")
        assert not is_backlink([], ["MyPlan.md"], "Plan.md")
        assert not is_backlink(["Plan2"], ["Plan"], "Plan.md")


class TestSearchByTags:
    def test_match_any(self, configuration, graph_vault):
        matches = search_by_tags(configuration, ["project", "#active"])
        assert sorted(matches) == ["Projects/Alpha.md", "Projects/Beta.md", "Projects/Gamma.md", "Target.md"]

    def test_match_all(self, configuration, graph_vault):
        matches = search_by_tags(configuration, ["project", "active"], match_all=True)
        assert sorted(matches) == ["Projects/Alpha.md", "Projects/Beta.md"]

    def test_frontmatter_tags_count(self, configuration, graph_vault):
        assert search_by_tags(configuration, ["#active"], match_all=True).count("Projects/Alpha.md") == 1

    def test_no_match(self, configuration, graph_vault):
        assert search_by_tags(configuration, ["missing"]) == []

    def test_skipped_entries_never_match(self, configuration, graph_vault):
        assert search_by_tags(configuration, ["secret"]) == []


class TestNameMatching:
    def test_plain_substring(self):
        assert name_matches("Weekly Review.md", "review", compile_name_pattern("review"))

    def test_pattern_is_searched_not_anchored(self):
        assert name_matches("2025-10-01 Log.md", "10*log", compile_name_pattern("10*log"))

    def test_invalid_pattern_compiles_to_none(self):
        assert compile_name_pattern("note[") is None
        assert name_matches("note[1].md", "note[", None)
