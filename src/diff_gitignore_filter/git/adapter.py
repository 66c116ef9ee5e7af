"""Git subprocess wrapper: repository discovery and config lookups."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional

from diff_gitignore_filter.git.models import Repository

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git is unavailable or cannot be executed."""


class GitCommandError(GitError):
    """Raised when a git command exits with an unexpected status."""

    def __init__(self, command: str, exit_code: int, stderr: str) -> None:
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(f"Git command '{command}' failed with exit code {exit_code}: {stderr}")


class NotInGitRepositoryError(GitError):
    """Raised when an operation needs a repository and *path* is not in one."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Not in a git repository: {path}")


def _run_git(args: list[str], cwd: Path, timeout: int = 30) -> subprocess.CompletedProcess:
    """Run a git command and return the completed process. Raises GitError if git cannot run."""
    try:
        return subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")
    except OSError as exc:
        raise GitError(f"IO error executing git {' '.join(args)}: {exc}") from exc


def is_git_repository(path: Path) -> bool:
    """Return True if *path* lies inside a git repository (or its git dir)."""
    result = _run_git(["rev-parse", "--git-dir"], cwd=path)
    return result.returncode == 0


def discover_repository(path: Path) -> Optional[Repository]:
    """Walk upwards from *path* looking for a repository.

    Returns None when *path* is not inside a repository, does not exist, or git
    cannot be run at all. Never raises.
    """
    try:
        if not path.is_dir():
            return None
        result = _run_git(["rev-parse", "--is-bare-repository", "--absolute-git-dir"], cwd=path)
        if result.returncode != 0:
            return None
        lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if len(lines) < 2:
            return None
        is_bare = lines[0] == "true"
        git_dir = Path(lines[1])
        if is_bare:
            return Repository(git_dir=git_dir)

        toplevel = _run_git(["rev-parse", "--show-toplevel"], cwd=path)
        workdir = toplevel.stdout.strip()
        if toplevel.returncode != 0 or not workdir:
            # Inside the git dir of a non-bare repository: no work tree visible.
            return Repository(git_dir=git_dir)
        return Repository(git_dir=git_dir, workdir=Path(workdir))
    except (GitError, OSError) as exc:
        logger.debug("Repository discovery failed for %s: %s", path, exc)
        return None


def get_config_value(key: str, cwd: Path) -> Optional[str]:
    """Return the trimmed value of git config *key*, or None when it is not set.

    ``git config --get`` exits 1 for a missing key; any other non-zero exit is
    reported as GitCommandError.
    """
    result = _run_git(["config", "--get", key], cwd=cwd)
    if result.returncode == 0:
        value = result.stdout.strip()
        return value or None
    if result.returncode == 1:
        return None
    raise GitCommandError(f"git config --get {key}", result.returncode, result.stderr.strip())
