"""Section filtering: VCS patterns, ignore rules, streaming output, downstream piping."""

from diff_gitignore_filter.filtering.engine import MAX_BUFFERED_LINES, DiffFilter, FilterResult
from diff_gitignore_filter.filtering.errors import (
    DownstreamProcessError,
    DownstreamSpawnError,
    FilterError,
)
from diff_gitignore_filter.filtering.ignore import IgnoreRules, Match
from diff_gitignore_filter.filtering.vcs import is_vcs_path, matches_vcs_pattern

__all__ = [
    "MAX_BUFFERED_LINES",
    "DiffFilter",
    "DownstreamProcessError",
    "DownstreamSpawnError",
    "FilterError",
    "FilterResult",
    "IgnoreRules",
    "Match",
    "is_vcs_path",
    "matches_vcs_pattern",
]
