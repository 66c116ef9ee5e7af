"""Tests for the git subprocess wrapper."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from diff_gitignore_filter.git import adapter
from diff_gitignore_filter.git.adapter import (
    GitCommandError,
    GitError,
    discover_repository,
    get_config_value,
    is_git_repository,
)


def _completed(returncode: int, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(["git"], returncode, stdout=stdout, stderr=stderr)


class TestRunGit:
    def test_git_missing(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("PATH", str(tmp_path))
        with pytest.raises(GitError, match="not installed"):
            is_git_repository(tmp_path)

    def test_discovery_never_raises(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("PATH", str(tmp_path))
        assert discover_repository(tmp_path) is None


class TestIsGitRepository:
    def test_repo(self, tmp_git_repo: Path):
        assert is_git_repository(tmp_git_repo)

    def test_plain_directory(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
        assert not is_git_repository(tmp_path)


class TestGetConfigValue:
    def test_value_trimmed(self, monkeypatch, tmp_path: Path):
        monkeypatch.setattr(adapter, "_run_git", lambda args, cwd: _completed(0, "  cat  \n"))
        assert get_config_value("a.b", tmp_path) == "cat"

    def test_empty_value_is_unset(self, monkeypatch, tmp_path: Path):
        monkeypatch.setattr(adapter, "_run_git", lambda args, cwd: _completed(0, "\n"))
        assert get_config_value("a.b", tmp_path) is None

    def test_missing_key(self, monkeypatch, tmp_path: Path):
        monkeypatch.setattr(adapter, "_run_git", lambda args, cwd: _completed(1))
        assert get_config_value("a.b", tmp_path) is None

    def test_other_exit_code(self, monkeypatch, tmp_path: Path):
        monkeypatch.setattr(adapter, "_run_git", lambda args, cwd: _completed(3, stderr="bad config line 1\n"))
        with pytest.raises(GitCommandError) as excinfo:
            get_config_value("a.b", tmp_path)
        assert excinfo.value.exit_code == 3
        assert "bad config line 1" in str(excinfo.value)

    def test_real_repository(self, tmp_git_repo: Path):
        assert get_config_value("user.name", tmp_git_repo) == "Test"
