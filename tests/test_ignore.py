"""Tests for .gitignore rule evaluation."""

from __future__ import annotations

from pathlib import Path

import pytest

from diff_gitignore_filter.filtering.ignore import IgnoreRules, Match


def _rules(root: Path, content: str) -> IgnoreRules:
    (root / ".gitignore").write_text(content)
    rules = IgnoreRules.load(root)
    assert rules is not None
    return rules


class TestLoad:
    def test_missing_file(self, tmp_path: Path):
        assert IgnoreRules.load(tmp_path) is None

    def test_relative_root_with_base_dir(self, tmp_path: Path):
        (tmp_path / "proj").mkdir()
        (tmp_path / "proj" / ".gitignore").write_text("build/\n")
        rules = IgnoreRules.load(Path("proj"), base_dir=tmp_path)
        assert rules is not None
        assert rules.is_ignored("proj/build/out.o")
        assert not rules.is_ignored("proj/src/main.c")

    def test_gitignore_directory_is_skipped(self, tmp_path: Path):
        (tmp_path / ".gitignore").mkdir()
        assert IgnoreRules.load(tmp_path) is None


class TestIsIgnored:
    def test_directory_inheritance(self, tmp_path: Path):
        rules = _rules(tmp_path, "target/\n")
        assert rules.is_ignored("target/debug/main")
        assert not rules.is_ignored("src/target.rs")

    def test_negation_precedence(self, tmp_path: Path):
        rules = _rules(tmp_path, "*.log\n!important.log\n")
        assert rules.is_ignored("debug.log")
        assert not rules.is_ignored("important.log")

    def test_nested_glob(self, tmp_path: Path):
        rules = _rules(tmp_path, "*.log\n")
        assert rules.is_ignored("var/cache/app.log")

    def test_anchored_pattern(self, tmp_path: Path):
        rules = _rules(tmp_path, "/only-top.txt\n")
        assert rules.is_ignored("only-top.txt")
        assert not rules.is_ignored("sub/only-top.txt")

    def test_comments_and_blank_lines(self, tmp_path: Path):
        rules = _rules(tmp_path, "# build output\n\n*.o\n")
        assert rules.is_ignored("a.o")
        assert not rules.is_ignored("# build output")

    @pytest.mark.parametrize("path", ["README.md", "src/lib.rs", ".gitignore"])
    def test_default_include(self, tmp_path: Path, path):
        rules = _rules(tmp_path, "*.log\n")
        assert not rules.is_ignored(path)


class TestMatched:
    def test_tri_state(self, tmp_path: Path):
        rules = _rules(tmp_path, "*.log\n!important.log\n")
        assert rules.matched("debug.log", is_dir=False) is Match.IGNORE
        assert rules.matched("important.log", is_dir=False) is Match.WHITELIST
        assert rules.matched("main.rs", is_dir=False) is Match.NONE

    def test_directory_rule(self, tmp_path: Path):
        rules = _rules(tmp_path, "build/\n")
        assert rules.matched("build", is_dir=True) is Match.IGNORE
