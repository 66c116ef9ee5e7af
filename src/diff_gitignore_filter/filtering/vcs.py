"""Version-control metadata detection (``.git/``, ``.svn/``, ``CVS/`` ...).

A pattern names a directory. ``".git/"``, ``".git"`` and ``".git/*"`` all
mean "anything inside a directory called .git", at the top level or nested.
Matches are anchored to whole path components, so ``.github/`` and
``my.git.backup`` are not VCS metadata.
"""

from __future__ import annotations

from typing import Iterable


def _directory_name(pattern: str) -> str:
    if pattern.endswith("/*"):
        return pattern[:-2]
    return pattern.rstrip("/")


def matches_vcs_pattern(file_path: str, pattern: str) -> bool:
    """Return True if *file_path* lies in (or is) the directory named by *pattern*."""
    name = _directory_name(pattern)
    if not name:
        return False
    if file_path == pattern:
        return True
    return file_path.startswith(f"{name}/") or f"/{name}/" in file_path


def is_vcs_path(file_path: str, patterns: Iterable[str]) -> bool:
    """Return True if *file_path* matches any of *patterns*."""
    return any(matches_vcs_pattern(file_path, pattern) for pattern in patterns)
