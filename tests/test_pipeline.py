"""Tests for the spool-then-two-pass pipeline."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from diff_gitignore_filter.config.schema import AppConfig
from diff_gitignore_filter.filtering.errors import FilterError
from diff_gitignore_filter.git.models import PathContext
from diff_gitignore_filter.pipeline import build_filter, process_diff_with_config, spool_input


class BrokenStream(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def readinto(self, buffer):
        raise OSError(5, "Input/output error")


class TestSpoolInput:
    def test_seekable_copy(self):
        with spool_input(io.BytesIO(b"diff --git a/x b/x\n")) as store:
            assert store.read() == b"diff --git a/x b/x\n"
            store.seek(0)
            assert store.read(4) == b"diff"

    def test_read_failure(self):
        with pytest.raises(FilterError):
            spool_input(BrokenStream())


class TestBuildFilter:
    def test_from_config(self, tmp_path: Path):
        cfg = AppConfig(vcs_patterns=[".git/"], downstream_command="cat")
        diff_filter = build_filter(cfg, tmp_path, tmp_path)
        assert diff_filter.vcs_filtering_enabled
        assert diff_filter.vcs_patterns == (".git/",)
        assert diff_filter.downstream_command == "cat"

    def test_vcs_disabled(self, tmp_path: Path):
        diff_filter = build_filter(AppConfig(vcs_enabled=False), tmp_path, tmp_path)
        assert not diff_filter.vcs_filtering_enabled


class TestProcessDiffWithConfig:
    def test_in_repository(self, repo_with_gitignore: Path, sample_diff_main_and_log):
        output = io.BytesIO()
        store = io.BytesIO(sample_diff_main_and_log.encode())
        store.read()  # both passes must rewind on their own
        report = process_diff_with_config(store, output, AppConfig(), repo_with_gitignore)
        assert report.context is PathContext.IN_REPO
        assert report.root.resolve() == repo_with_gitignore.resolve()
        assert b"debug.log" not in output.getvalue()
        assert report.result.included == 1

    def test_virtual_diff_relative_root(self, tmp_path: Path, monkeypatch, make_section):
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
        (tmp_path / "proj").mkdir()
        (tmp_path / "proj" / ".gitignore").write_text("*.log\n")
        diff = make_section("proj/out.log") + make_section("proj/src/a.c")
        output = io.BytesIO()
        report = process_diff_with_config(io.BytesIO(diff.encode()), output, AppConfig(), tmp_path)
        assert report.context is PathContext.VIRTUAL
        assert report.root == Path("proj")
        assert output.getvalue() == make_section("proj/src/a.c").encode()


class TestLogging:
    def test_root_not_logged_at_info(self, repo_with_gitignore: Path, sample_diff_main_and_log, caplog, monkeypatch):
        # The CLI detaches the package logger from the root logger.
        monkeypatch.setattr(logging.getLogger("diff_gitignore_filter"), "propagate", True)
        caplog.set_level(logging.INFO, logger="diff_gitignore_filter")
        store = io.BytesIO(sample_diff_main_and_log.encode())
        process_diff_with_config(store, io.BytesIO(), AppConfig(), repo_with_gitignore)
        info_messages = [r.getMessage() for r in caplog.records if r.levelno >= logging.INFO]
        assert info_messages == ["Kept 1 of 2 sections"]
