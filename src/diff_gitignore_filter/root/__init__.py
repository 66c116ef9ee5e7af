"""Root resolution: context classification, suffix analysis, candidate scoring."""

from diff_gitignore_filter.root.finder import RootFinder, find_root, priority_score
from diff_gitignore_filter.root.suffix import common_suffix, common_suffix_for_pair, strip_suffix

__all__ = [
    "RootFinder",
    "common_suffix",
    "common_suffix_for_pair",
    "find_root",
    "priority_score",
    "strip_suffix",
]
