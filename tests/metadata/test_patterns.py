"""
Unit tests for workspace member pattern expansion.
"""

import os

import pytest

from cargokit.metadata import (
    DiagKind,
    Diagnostics,
    apply_exclude_patterns,
    apply_member_patterns,
    expand_manifest_pattern,
)
from tests.fixtures.workspaces import package_toml, write_manifest


@pytest.fixture
def tree(tmp_path):
    """
    Create:
    - crates/a, crates/b, crates/c10, crates/c2 (packages)
    - crates/docs (no manifest)
    - tools/gen (package)
    """
    root = tmp_path.resolve()
    for name in ["a", "b", "c10", "c2"]:
        write_manifest(root / "crates" / name, package_toml(name))
    (root / "crates" / "docs").mkdir()
    write_manifest(root / "tools" / "gen", package_toml("gen"))
    return root


class TestExpandManifestPattern:
    """Tests for expand_manifest_pattern()."""

    def test_wildcard_skips_dirs_without_manifest(self, tree):
        """Test `*` only matches directories holding a manifest."""
        matched, diagnostics = set(), Diagnostics()
        expand_manifest_pattern(True, matched, tree, "crates/*", diagnostics)

        assert matched == {
            tree / "crates" / n / "Cargo.toml" for n in ["a", "b", "c10", "c2"]
        }
        # crates/docs has no Cargo.toml
        assert [d.kind for d in diagnostics] == [DiagKind.IO]
        assert diagnostics[0].path == tree / "crates" / "docs" / "Cargo.toml"
        assert "expected by pattern `crates/*`" in diagnostics[0].message
        assert isinstance(diagnostics[0].error, FileNotFoundError)

    def test_literal_path(self, tree):
        """Test a literal member path."""
        matched, diagnostics = set(), Diagnostics()
        expand_manifest_pattern(True, matched, tree, "tools/gen", diagnostics)
        assert matched == {tree / "tools" / "gen" / "Cargo.toml"}
        assert diagnostics.is_empty()

    def test_dot_segments(self, tree):
        """Test `.` and `..` segments are normalized."""
        matched, diagnostics = set(), Diagnostics()
        expand_manifest_pattern(True, matched, tree / "tools", "./../crates/./a", diagnostics)
        assert matched == {tree / "crates" / "a" / "Cargo.toml"}

    def test_absolute_pattern(self, tree):
        """Test an absolute pattern ignores the workspace directory."""
        matched, diagnostics = set(), Diagnostics()
        pattern = str(tree / "tools" / "gen")
        expand_manifest_pattern(True, matched, tree / "crates", pattern, diagnostics)
        assert matched == {tree / "tools" / "gen" / "Cargo.toml"}

    def test_repeat_match_warns(self, tree):
        """Test matching the same manifest twice warns."""
        matched, diagnostics = set(), Diagnostics()
        expand_manifest_pattern(True, matched, tree, "crates/a", diagnostics)
        expand_manifest_pattern(True, matched, tree, "crates/a", diagnostics)

        assert len(matched) == 1
        assert [d.kind for d in diagnostics] == [DiagKind.WARNING]
        assert "multiple matches (repeat pattern: `crates/a`)" in diagnostics[0].message

    def test_exclude_removes_without_touching_disk(self, tree):
        """Test exclude removal needs no manifest on disk."""
        matched = {tree / "crates" / "a" / "Cargo.toml", tree / "crates" / "b" / "Cargo.toml"}
        diagnostics = Diagnostics()
        expand_manifest_pattern(False, matched, tree, "crates/a", diagnostics)
        expand_manifest_pattern(False, matched, tree, "nowhere/*", diagnostics)

        assert matched == {tree / "crates" / "b" / "Cargo.toml"}
        assert [d.kind for d in diagnostics] == [DiagKind.IO]
        assert "unable to enumerate" in diagnostics[0].message

    def test_missing_wildcard_directory(self, tree):
        """Test `*` under a missing directory is an IO diagnostic."""
        matched, diagnostics = set(), Diagnostics()
        expand_manifest_pattern(True, matched, tree, "missing/*", diagnostics)
        assert matched == set()
        assert diagnostics[0].path == tree / "missing"
        assert "unable to enumerate (expected by pattern `missing/*`)" == diagnostics[0].message

    @pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt", reason="needs symlinks")
    def test_wildcard_does_not_follow_symlinks(self, tree):
        """Test `*` skips symlinked directories."""
        (tree / "crates" / "link").symlink_to(tree / "tools" / "gen", target_is_directory=True)
        matched, diagnostics = set(), Diagnostics()
        expand_manifest_pattern(True, matched, tree, "crates/*", diagnostics)
        assert tree / "crates" / "link" / "Cargo.toml" not in matched


class TestApplyPatterns:
    """Tests for the member/exclude pattern drivers."""

    def test_member_pattern_adding_nothing(self, tree):
        """Test a member pattern that adds nothing is flagged."""
        matched, diagnostics = set(), Diagnostics()
        manifest = tree / "Cargo.toml"
        apply_member_patterns(matched, tree, ["crates/a", "crates/a"], manifest, diagnostics)

        kinds = [(d.kind, d.message) for d in diagnostics]
        assert (DiagKind.WARNING, "multiple matches (repeat pattern: `crates/a`)") in kinds
        assert (
            DiagKind.MALFORMED,
            'member pattern "crates/a" added no packages',
        ) in kinds
        assert diagnostics.of_kind(DiagKind.MALFORMED)[0].path == manifest

    def test_exclude_pattern_removing_nothing(self, tree):
        """Test an exclude pattern that removes nothing is flagged."""
        matched, diagnostics = set(), Diagnostics()
        manifest = tree / "Cargo.toml"
        apply_member_patterns(matched, tree, ["tools/*"], manifest, diagnostics)
        apply_exclude_patterns(matched, tree, ["crates/a", "tools/gen"], manifest, diagnostics)

        assert matched == set()
        assert [d.message for d in diagnostics] == [
            'exclude pattern "crates/a" removed no packages'
        ]
        assert diagnostics[0].kind is DiagKind.WARNING
