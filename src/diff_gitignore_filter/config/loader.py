"""Resolve the application config: CLI flags, then git config, then defaults."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, TypeVar

from diff_gitignore_filter.config import git_config
from diff_gitignore_filter.config.errors import (
    ConfigError,
    ConfigIOError,
    GitCommandConfigError,
    InvalidCliArgumentError,
    InvalidGitConfigError,
    NotInRepositoryError,
)
from diff_gitignore_filter.config.reader import GitConfigReader, SystemGitConfigReader
from diff_gitignore_filter.config.schema import DEFAULT_VCS_PATTERNS, AppConfig, CliArgs

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_cli_vcs_patterns(value: str) -> List[str]:
    """Parse ``--vcs-pattern``. An empty list is rejected."""
    patterns = git_config.parse_pattern_list(value)
    if not patterns:
        raise InvalidCliArgumentError(f"--vcs-pattern needs at least one pattern, got {value!r}")
    return patterns


def _from_git(getter: Callable[[GitConfigReader], Optional[T]], reader: GitConfigReader) -> Optional[T]:
    """Run a git-config accessor; outside a repository there is simply no git config."""
    try:
        return getter(reader)
    except NotInRepositoryError as exc:
        logger.debug("No git config available: %s", exc)
        return None


def load_config(cli_args: CliArgs, reader: Optional[GitConfigReader] = None) -> AppConfig:
    """Build the AppConfig for one run. Raises ConfigError on unusable input."""
    if reader is None:
        reader = SystemGitConfigReader()

    cfg = AppConfig()

    if cli_args.vcs is not None:
        cfg.vcs_enabled = cli_args.vcs
    else:
        enabled = _from_git(git_config.get_vcs_enabled, reader)
        if enabled is not None:
            cfg.vcs_enabled = enabled

    # --vcs-pattern replaces the configured/default set rather than adding to it.
    if cli_args.vcs_patterns is not None:
        if not cli_args.vcs_patterns:
            raise InvalidCliArgumentError("--vcs-pattern needs at least one pattern")
        cfg.vcs_patterns = list(cli_args.vcs_patterns)
    else:
        patterns = _from_git(git_config.get_vcs_patterns, reader)
        cfg.vcs_patterns = patterns if patterns is not None else list(DEFAULT_VCS_PATTERNS)

    if cli_args.downstream is not None and cli_args.downstream.strip():
        cfg.downstream_command = cli_args.downstream.strip()
    else:
        cfg.downstream_command = _from_git(git_config.get_downstream_filter, reader)

    logger.debug("Resolved config: %s", cfg)
    return cfg


__all__ = [
    "ConfigError",
    "ConfigIOError",
    "GitCommandConfigError",
    "InvalidCliArgumentError",
    "InvalidGitConfigError",
    "NotInRepositoryError",
    "load_config",
    "parse_cli_vcs_patterns",
]
