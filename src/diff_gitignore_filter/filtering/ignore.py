"""Ignore-rule evaluation backed by pathspec's gitignore implementation."""

from __future__ import annotations

import logging
import posixpath
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional

import pathspec

logger = logging.getLogger(__name__)


class Match(Enum):
    """Outcome of matching one path against the rules."""

    NONE = "none"
    IGNORE = "ignore"
    WHITELIST = "whitelist"  # matched a negated (!) rule


def _ancestors(path: str) -> Iterator[str]:
    """Yield the parent directories of *path*, nearest first."""
    parent = posixpath.dirname(path.rstrip("/"))
    while parent and parent != "/":
        yield parent
        parent = posixpath.dirname(parent)


class IgnoreRules:
    """The ``.gitignore`` found at the top level of a root directory."""

    def __init__(self, root: Path, spec: pathspec.GitIgnoreSpec) -> None:
        self.root = root
        self._spec = spec
        prefix = root.as_posix()
        self._prefix = "" if prefix == "." else prefix.rstrip("/") + "/"

    @classmethod
    def load(cls, root: Path, base_dir: Optional[Path] = None) -> Optional["IgnoreRules"]:
        """Load ``<root>/.gitignore``.

        *root* may be relative to *base_dir* (the process working directory when
        omitted). A missing, unreadable or malformed file yields None.
        """
        directory = base_dir / root if base_dir is not None else root
        gitignore = directory / ".gitignore"
        try:
            if not gitignore.is_file():
                logger.debug("No .gitignore at %s", directory)
                return None
            lines = gitignore.read_text(encoding="utf-8", errors="replace").splitlines()
            spec = pathspec.GitIgnoreSpec.from_lines(lines)
        except (OSError, ValueError) as exc:
            logger.debug("Skipping unusable %s: %s", gitignore, exc)
            return None

        logger.debug("Loaded %d ignore patterns from %s", len(spec.patterns), gitignore)
        return cls(root, spec)

    def _relative(self, path: str) -> str:
        if self._prefix and path.startswith(self._prefix):
            return path[len(self._prefix):]
        return path

    def _check(self, relative_path: str, is_dir: bool) -> Match:
        candidate = relative_path.rstrip("/") + "/" if is_dir else relative_path
        result = self._spec.check_file(candidate)
        if result.include is None:
            return Match.NONE
        return Match.IGNORE if result.include else Match.WHITELIST

    def matched(self, path: str, is_dir: bool) -> Match:
        """Match one path, as a directory when *is_dir* is set."""
        return self._check(self._relative(path), is_dir)

    def is_ignored(self, path: str) -> bool:
        """Return True if *path* or the nearest decisive ancestor directory is ignored."""
        relative_path = self._relative(path)
        decision = self._check(relative_path, is_dir=False)
        if decision is Match.NONE:
            for parent in _ancestors(relative_path):
                decision = self._check(parent, is_dir=True)
                if decision is not Match.NONE:
                    break
        return decision is Match.IGNORE
