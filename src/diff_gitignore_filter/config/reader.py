"""Sources of git configuration values.

Everything that needs a config value depends on the ``GitConfigReader``
protocol only. ``SystemGitConfigReader`` asks the ``git`` binary;
``MappingConfigReader`` answers from a dict.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional, Protocol

from diff_gitignore_filter.git.adapter import (
    GitError,
    NotInGitRepositoryError,
    get_config_value,
    is_git_repository,
)

logger = logging.getLogger(__name__)


class GitConfigReader(Protocol):
    def get(self, key: str) -> Optional[str]:
        """Return the value of *key*, or None when it is not set."""
        ...


class SystemGitConfigReader:
    """Read config through ``git config --get``, scoped to the repository at *cwd*.

    Raises NotInGitRepositoryError outside a repository, GitCommandError when
    git exits with an unexpected status and GitError when git cannot run.
    """

    def __init__(self, cwd: Optional[Path] = None) -> None:
        self.cwd = cwd if cwd is not None else Path.cwd()

    def get(self, key: str) -> Optional[str]:
        if not is_git_repository(self.cwd):
            raise NotInGitRepositoryError(self.cwd)
        value = get_config_value(key, self.cwd)
        logger.debug("git config %s = %r", key, value)
        return value


class MappingConfigReader:
    """Serve config values from a dict; optionally fail every lookup with *error*."""

    def __init__(self, values: Optional[Mapping[str, str]] = None, error: Optional[GitError] = None) -> None:
        self.values = dict(values or {})
        self.error = error

    def get(self, key: str) -> Optional[str]:
        if self.error is not None:
            raise self.error
        value = self.values.get(key)
        if value is None:
            return None
        return value.strip() or None
