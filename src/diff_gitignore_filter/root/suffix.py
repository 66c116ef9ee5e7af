"""Common path-suffix analysis over ``(left, right)`` path pairs.

Diffs produced with different amounts of leading path stripped still agree on
the *tail* of each path. The longest tail shared by every pair tells us which
part of each path is repository-relative, and what is left in front of it is
the root.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from diff_gitignore_filter.git.diff_header import normalize_path, path_components

PathPair = Tuple[str, str]


def common_suffix_for_pair(left: str, right: str) -> Optional[str]:
    """Return the trailing components *left* and *right* share, '/'-joined.

    None when even the last components differ.
    """
    left_parts = path_components(normalize_path(left))
    right_parts = path_components(normalize_path(right))

    shared = 0
    for left_part, right_part in zip(reversed(left_parts), reversed(right_parts)):
        if left_part != right_part:
            break
        shared += 1

    if shared == 0:
        return None
    return "/".join(left_parts[-shared:])


def common_suffix(pairs: Sequence[PathPair]) -> Optional[str]:
    """Return the longest suffix shared by *all* pairs, or None.

    Each pair is reduced to its own suffix first; those suffixes are then
    intersected one by one against the running result.
    """
    if not pairs:
        return None

    suffix = common_suffix_for_pair(*pairs[0])
    if suffix is None:
        return None

    for left, right in pairs[1:]:
        pair_suffix = common_suffix_for_pair(left, right)
        if pair_suffix is None:
            return None
        suffix = common_suffix_for_pair(suffix, pair_suffix)
        if not suffix:
            return None
    return suffix


def strip_suffix(path: str, suffix: str) -> Optional[str]:
    """Remove *suffix* from the end of *path* and return what precedes it.

    Returns ``"."`` when nothing precedes a relative path, and None when
    *path* does not end with *suffix*.
    """
    normalized = normalize_path(path)
    parts = path_components(normalized)
    suffix_parts = path_components(suffix)
    if len(parts) < len(suffix_parts):
        return None

    start = len(parts) - len(suffix_parts)
    if parts[start:] != suffix_parts:
        return None

    head = parts[:start]
    if normalized.startswith("/"):
        return "/" + "/".join(head)
    return "/".join(head) if head else "."


def roots_by_suffix(pairs: Sequence[PathPair]) -> Optional[PathPair]:
    """Derive the ``(left_root, right_root)`` of the first pair from the common suffix."""
    suffix = common_suffix(pairs)
    if suffix is None:
        return None

    left, right = pairs[0]
    left_root = strip_suffix(left, suffix)
    right_root = strip_suffix(right, suffix)
    if left_root is None or right_root is None:
        return None
    return left_root, right_root
