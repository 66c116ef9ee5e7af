"""One filter run: spool the input, resolve the root, filter from the start again."""

from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from diff_gitignore_filter.config.schema import AppConfig
from diff_gitignore_filter.filtering.engine import DiffFilter, FilterResult
from diff_gitignore_filter.filtering.errors import FilterError
from diff_gitignore_filter.git.models import PathContext
from diff_gitignore_filter.root.finder import RootFinder

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    """Root, context and filter outcome of one run, for reporting."""

    root: Path
    context: Optional[PathContext]
    result: FilterResult


def spool_input(stream: BinaryIO) -> BinaryIO:
    """Copy *stream* into a seekable temporary file positioned at the start."""
    store = tempfile.TemporaryFile()
    try:
        shutil.copyfileobj(stream, store)
        store.seek(0)
    except OSError as exc:
        store.close()
        raise FilterError(f"Failed to read input data: {exc}") from exc
    return store


def build_filter(config: AppConfig, root: Path, current_dir: Path) -> DiffFilter:
    """Assemble the DiffFilter for *root* from the resolved config."""
    diff_filter = DiffFilter.from_root(root, base_dir=current_dir)
    if config.vcs_enabled:
        diff_filter = diff_filter.with_vcs_patterns(config.vcs_patterns)
    if config.downstream_command:
        diff_filter = diff_filter.with_downstream(config.downstream_command)
    return diff_filter


def process_diff_with_config(
    store: BinaryIO,
    output: BinaryIO,
    config: AppConfig,
    current_dir: Path,
) -> RunReport:
    """Resolve the root over *store*, then filter *store* into *output*.

    Both passes read *store* from offset 0.
    """
    store.seek(0)
    finder = RootFinder(current_dir)
    root = finder.find_root(store)
    logger.debug("Using ignore rules from %s", root)

    store.seek(0)
    diff_filter = build_filter(config, root, current_dir)
    result = diff_filter.process_diff(store, output)
    logger.info("Kept %d of %d sections", result.included, result.sections)
    return RunReport(root=root, context=finder.context, result=result)
