"""Parsing of ``diff --git`` section headers.

Two readings of the same header are needed. Root resolution splits on
whitespace and wants both sides of the pair. Filtering wants the one path a
section belongs to, including names that contain spaces, so it takes the text
between the ``a/`` and `` b/`` markers instead.
"""

from __future__ import annotations

import posixpath
from typing import List, Optional, Tuple

DIFF_HEADER_PREFIX = "diff --git "


def is_diff_header(line: str) -> bool:
    """Return True if *line* opens a new per-file section."""
    return line.startswith(DIFF_HEADER_PREFIX)


def parse_header_paths(line: str) -> Optional[Tuple[str, str]]:
    """Return the ``(left, right)`` paths of a header, without ``a/``/``b/`` prefixes.

    Lines with fewer than four whitespace-separated tokens yield None.
    """
    parts = line.split()
    if len(parts) < 4 or parts[0] != "diff" or parts[1] != "--git":
        return None
    return parts[2].removeprefix("a/"), parts[3].removeprefix("b/")


def extract_file_path(line: str) -> Optional[str]:
    """Return the path between ``a/`` and `` b/`` in a header line, or None."""
    line = line.rstrip("\r\n")
    if not is_diff_header(line):
        return None
    remaining = line[len(DIFF_HEADER_PREFIX):]
    a_pos = remaining.find("a/")
    b_pos = remaining.find(" b/")
    if a_pos < 0 or b_pos < 0 or a_pos + 2 >= b_pos:
        return None
    return remaining[a_pos + 2:b_pos]


def normalize_path(path: str) -> str:
    """Collapse ``.`` and ``..`` lexically. Absolute paths stay absolute."""
    if not path:
        return "."
    return posixpath.normpath(path)


def path_components(path: str) -> List[str]:
    """Split a normalised path into its named components (no root, no ``.``)."""
    return [part for part in path.split("/") if part and part != "."]
