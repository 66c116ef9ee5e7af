"""Root resolution: decide which directory's .gitignore applies to a diff.

The diff may come from the repository we are standing in, from a repository
elsewhere on disk, or from another machine entirely. We look at the paths in
the ``diff --git`` headers, classify the situation, and pick a root with a
strategy suited to it. Nothing here raises: every failure degrades to a
best-effort directory, ultimately ``.``.
"""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Callable, Dict, Iterable, List, Optional, Tuple

from diff_gitignore_filter.git.adapter import discover_repository
from diff_gitignore_filter.git.diff_header import is_diff_header, normalize_path, parse_header_paths
from diff_gitignore_filter.git.models import PathAnalysis, PathContext, Repository, RootCandidate
from diff_gitignore_filter.root.suffix import PathPair, roots_by_suffix

logger = logging.getLogger(__name__)

# (is_repo, is_linked_worktree, has_gitignore) -> priority
_PRIORITY_TABLE: Dict[Tuple[bool, bool, bool], int] = {
    (True, False, True): 6,
    (True, False, False): 5,
    (True, True, True): 4,
    (True, True, False): 3,
    (False, False, True): 2,
    (False, False, False): 1,
}


def priority_score(is_repo: bool, is_linked_worktree: bool, has_gitignore: bool) -> int:
    """Look up the priority of a candidate root. Worktree status only counts inside a repo."""
    return _PRIORITY_TABLE[(is_repo, is_repo and is_linked_worktree, has_gitignore)]


def _safe_exists(path: Path) -> bool:
    try:
        return path.exists()
    except OSError:
        return False


def _safe_is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def pair_up(analyses: List[PathAnalysis]) -> List[PathPair]:
    """Group analyses positionally into (left, right) pairs; a dangling path is dropped."""
    return [
        (analyses[i].path, analyses[i + 1].path)
        for i in range(0, len(analyses) - 1, 2)
    ]


class RootFinder:
    """Resolve the ignore-rule root for a diff, relative to *current_dir*."""

    def __init__(
        self,
        current_dir: Path,
        discover: Callable[[Path], Optional[Repository]] = discover_repository,
    ) -> None:
        self.current_dir = current_dir
        self._discover = discover
        self._repositories: Dict[Path, Optional[Repository]] = {}
        self.context: Optional[PathContext] = None  # set by the last find_root call

    # ---- entry point ----

    def find_root(self, diff_reader: Iterable[bytes]) -> Path:
        """Return the root directory for *diff_reader*. Relative results are relative to current_dir."""
        try:
            analyses = self.analyze_diff_paths(diff_reader)
        except (OSError, ValueError) as exc:
            logger.debug("Could not read diff for root resolution: %s", exc)
            return self.current_dir

        context = self.context = self.classify_context(analyses)
        logger.debug("Path context: %s (%d paths)", context.value, len(analyses))

        if context is PathContext.IN_REPO:
            root = self._in_repo_root(analyses)
        elif context is PathContext.OUTSIDE_REPO:
            root = self._outside_repo_root(analyses)
        else:
            root = self._virtual_root(analyses)

        logger.debug("Resolved root: %s", root)
        return root

    # ---- path extraction ----

    def analyze_diff_paths(self, diff_reader: Iterable[bytes]) -> List[PathAnalysis]:
        """Collect a PathAnalysis for both sides of every well-formed header."""
        analyses: List[PathAnalysis] = []
        for raw_line in diff_reader:
            line = raw_line.decode("utf-8", errors="replace") if isinstance(raw_line, bytes) else raw_line
            if not is_diff_header(line):
                continue
            pair = parse_header_paths(line)
            if pair is None:
                continue
            analyses.extend(self._analyze(path) for path in pair)
        return analyses

    def _analyze(self, path: str) -> PathAnalysis:
        return PathAnalysis(
            path=normalize_path(path),
            is_absolute=path.startswith("/"),
            exists=_safe_exists(self.current_dir / path),
        )

    # ---- classification ----

    def classify_context(self, analyses: List[PathAnalysis]) -> PathContext:
        if self._repository(self.current_dir) is not None:
            return PathContext.IN_REPO
        if all(analysis.exists for analysis in analyses):
            return PathContext.OUTSIDE_REPO
        return PathContext.VIRTUAL

    # ---- strategies ----

    def _in_repo_root(self, analyses: List[PathAnalysis]) -> Path:
        repository = self._repository(self.current_dir)
        if repository is None:
            return self._outside_repo_root(analyses)

        root = repository.root
        external = [
            analysis.path
            for analysis in analyses
            if analysis.is_absolute and not PurePosixPath(analysis.path).is_relative_to(root)
        ]
        if external:
            logger.debug("Diff reaches outside %s (%s); using suffix analysis", root, external[0])
            return self._outside_repo_root(analyses)
        return root

    def _outside_repo_root(self, analyses: List[PathAnalysis]) -> Path:
        pairs = pair_up(analyses)
        roots = roots_by_suffix(pairs)
        if roots is not None:
            left_root, right_root = roots
            return self.select_root([Path(left_root), Path(right_root)])
        return self.select_root(self.fallback_candidates(pairs))

    def _virtual_root(self, analyses: List[PathAnalysis]) -> Path:
        # No filesystem to validate against: trust the pre-image side.
        pairs = pair_up(analyses)
        roots = roots_by_suffix(pairs)
        if roots is not None:
            return Path(roots[0])
        if pairs:
            return Path(posixpath.dirname(pairs[0][0]) or ".")
        return Path(".")

    # ---- candidate scoring ----

    @staticmethod
    def fallback_candidates(pairs: List[PathPair]) -> List[Path]:
        """Sorted, de-duplicated parent directories of every path in *pairs*."""
        parents = {
            posixpath.dirname(path) or "."
            for pair in pairs
            for path in pair
            if path not in (".", "/")
        }
        return [Path(parent) for parent in sorted(parents)]

    def score(self, path: Path) -> RootCandidate:
        resolved = self.current_dir / path
        repository = self._repository(resolved)
        is_repo = repository is not None
        is_worktree = repository is not None and repository.is_linked_worktree
        has_gitignore = _safe_is_file(resolved / ".gitignore")
        return RootCandidate(path=path, priority_score=priority_score(is_repo, is_worktree, has_gitignore))

    def select_root(self, candidates: List[Path]) -> Path:
        """Return the highest-scoring candidate; on a tie the later candidate wins."""
        best: Optional[RootCandidate] = None
        for path in candidates:
            candidate = self.score(path)
            logger.debug("Root candidate %s scored %d", candidate.path, candidate.priority_score)
            if best is None or candidate.priority_score >= best.priority_score:
                best = candidate
        return best.path if best is not None else Path(".")

    def _repository(self, path: Path) -> Optional[Repository]:
        if path not in self._repositories:
            self._repositories[path] = self._discover(path)
        return self._repositories[path]


def find_root(current_dir: Path, diff_reader: BinaryIO) -> Path:
    """Resolve the ignore-rule root for the diff read from *diff_reader*."""
    return RootFinder(current_dir).find_root(diff_reader)
