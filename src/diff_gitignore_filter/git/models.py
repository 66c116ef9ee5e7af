"""Data models for diff paths and repository discovery."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class PathContext(str, Enum):
    """Where the diff is being filtered, relative to version control."""

    IN_REPO = "in_repo"
    OUTSIDE_REPO = "outside_repo"
    VIRTUAL = "virtual"


@dataclass(frozen=True, slots=True)
class PathAnalysis:
    """One path taken from a ``diff --git`` header."""

    path: str  # lexically normalised, '/'-separated
    is_absolute: bool
    exists: bool


@dataclass(frozen=True)
class Repository:
    """A discovered git repository."""

    git_dir: Path
    workdir: Optional[Path] = None  # None for bare repositories

    @property
    def is_bare(self) -> bool:
        return self.workdir is None

    @property
    def is_linked_worktree(self) -> bool:
        """A linked worktree carries a ``.git`` *file* pointing at the main repo."""
        if self.workdir is None:
            return False
        try:
            return (self.workdir / ".git").is_file()
        except OSError:
            return False

    @property
    def root(self) -> Path:
        if self.is_bare:
            return self.git_dir
        return self.workdir


@dataclass(frozen=True)
class RootCandidate:
    """A directory that could anchor the ignore rules, with its priority."""

    path: Path
    priority_score: int
