"""Configuration schema: parsed CLI arguments and the resolved application config."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

DEFAULT_VCS_PATTERNS: Tuple[str, ...] = (
    ".git/",
    ".svn/",
    "_svn/",
    ".hg/",
    "CVS/",
    "CVSROOT/",
    ".bzr/",
)


@dataclass
class CliArgs:
    """Values given on the command line. None means "not given"."""

    downstream: Optional[str] = None
    vcs: Optional[bool] = None  # --vcs / --no-vcs
    vcs_patterns: Optional[List[str]] = None


@dataclass
class AppConfig:
    vcs_enabled: bool = True
    vcs_patterns: List[str] = field(default_factory=lambda: list(DEFAULT_VCS_PATTERNS))
    downstream_command: Optional[str] = None
