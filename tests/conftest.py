"""Shared test fixtures: sample diffs and temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest


def _git(*args: str, cwd: Path) -> None:
    subprocess.run(["git", *args], cwd=cwd, capture_output=True, check=True)


@pytest.fixture
def sample_diff_main_and_log() -> str:
    """A diff touching src/main.rs and debug.log."""
    return textwrap.dedent("""\
        diff --git a/src/main.rs b/src/main.rs
        index 1234567..abcdef0 100644
        --- a/src/main.rs
        +++ b/src/main.rs
        @@ -1,3 +1,4 @@
         fn main() {
             println!("Hello");
        +    println!("World");
         }
        diff --git a/debug.log b/debug.log
        index 1111111..2222222 100644
        --- a/debug.log
        +++ b/debug.log
        @@ -1 +1,2 @@
         first entry
        +second entry
    """)


@pytest.fixture
def sample_diff_git_config() -> str:
    """A diff touching .git/config."""
    return textwrap.dedent("""\
        diff --git a/.git/config b/.git/config
        index 3333333..4444444 100644
        --- a/.git/config
        +++ b/.git/config
        @@ -1,2 +1,3 @@
         [core]
        +	bare = false
         	filemode = true
    """)


@pytest.fixture
def sample_diff_with_spaces() -> str:
    """A diff for a file whose name contains spaces."""
    return textwrap.dedent("""\
        diff --git a/docs/release notes.md b/docs/release notes.md
        index 5555555..6666666 100644
        --- a/docs/release notes.md
        +++ b/docs/release notes.md
        @@ -1 +1,2 @@
         # Notes
        +- fixed things
    """)


@pytest.fixture
def sample_diff_binary_bytes() -> bytes:
    """A diff carrying a GIT binary patch and raw non-UTF-8 bytes."""
    return (
        b"diff --git a/image.png b/image.png\n"
        b"new file mode 100644\n"
        b"index 0000000..abc1234\n"
        b"GIT binary patch\n"
        b"literal 12\n"
        b"Tc${NkU|?WiVEDhg\x00\xff\xfe\n"
        b"\n"
        b"literal 0\n"
        b"HcmV?d00001\n"
        b"\n"
    )


def _make_section(path: str, added_lines: int = 1) -> str:
    """Build one diff section adding *added_lines* lines to *path*."""
    body = "".join(f"+line {i}\n" for i in range(added_lines))
    return (
        f"diff --git a/{path} b/{path}\n"
        f"index 0000000..1111111 100644\n"
        f"--- a/{path}\n"
        f"+++ b/{path}\n"
        f"@@ -0,0 +1,{added_lines} @@\n"
        f"{body}"
    )


@pytest.fixture
def make_section():
    return _make_section


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository for integration tests."""
    repo = tmp_path / "repo"
    repo.mkdir()
    _git("init", str(repo), cwd=tmp_path)
    _git("config", "user.email", "test@test.com", cwd=repo)
    _git("config", "user.name", "Test", cwd=repo)
    # Initial commit
    (repo / "README.md").write_text("# Test\n")
    _git("add", ".", cwd=repo)
    _git("commit", "-m", "init", cwd=repo)
    return repo


@pytest.fixture
def repo_with_gitignore(tmp_git_repo: Path) -> Path:
    """A repository whose .gitignore ignores *.log."""
    (tmp_git_repo / ".gitignore").write_text("*.log\n")
    (tmp_git_repo / "src").mkdir()
    (tmp_git_repo / "src" / "main.rs").write_text('fn main() {\n    println!("Hello");\n}\n')
    (tmp_git_repo / "debug.log").write_text("first entry\n")
    return tmp_git_repo


@pytest.fixture
def tmp_worktree(tmp_git_repo: Path) -> Path:
    """A linked worktree of tmp_git_repo."""
    worktree = tmp_git_repo.parent / "linked"
    _git("worktree", "add", "-b", "feature", str(worktree), cwd=tmp_git_repo)
    return worktree


@pytest.fixture
def tmp_bare_repo(tmp_path: Path) -> Path:
    bare = tmp_path / "bare.git"
    _git("init", "--bare", str(bare), cwd=tmp_path)
    return bare
