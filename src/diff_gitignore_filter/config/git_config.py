"""Typed access to the tool's git config keys.

Lookups return None when a key is unset so the caller can fall back to a
default. git failures are translated into ConfigError subclasses here.
"""

from __future__ import annotations

from typing import List, Optional

from diff_gitignore_filter.config.errors import (
    ConfigIOError,
    GitCommandConfigError,
    InvalidGitConfigError,
    NotInRepositoryError,
)
from diff_gitignore_filter.config.reader import GitConfigReader
from diff_gitignore_filter.git.adapter import GitCommandError, GitError, NotInGitRepositoryError

VCS_ENABLED_KEY = "diff-gitignore-filter.vcs-ignore.enabled"
VCS_PATTERNS_KEY = "diff-gitignore-filter.vcs-ignore.patterns"
DOWNSTREAM_KEY = "gitignore-diff.downstream-filter"

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


def parse_boolean(value: str) -> Optional[bool]:
    """Parse a git-style boolean. Unrecognised text gives None."""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


def parse_pattern_list(value: str) -> List[str]:
    """Split a comma-separated list, trimming entries and dropping empty ones."""
    return [part.strip() for part in value.split(",") if part.strip()]


def _lookup(reader: GitConfigReader, key: str) -> Optional[str]:
    try:
        return reader.get(key)
    except NotInGitRepositoryError as exc:
        raise NotInRepositoryError(str(exc)) from exc
    except GitCommandError as exc:
        raise GitCommandConfigError(str(exc)) from exc
    except GitError as exc:
        raise ConfigIOError(str(exc)) from exc


def get_vcs_enabled(reader: GitConfigReader) -> Optional[bool]:
    value = _lookup(reader, VCS_ENABLED_KEY)
    if value is None:
        return None
    parsed = parse_boolean(value)
    if parsed is None:
        raise InvalidGitConfigError(VCS_ENABLED_KEY, value, "expected true/false, yes/no, on/off or 1/0")
    return parsed


def get_vcs_patterns(reader: GitConfigReader) -> Optional[List[str]]:
    value = _lookup(reader, VCS_PATTERNS_KEY)
    if value is None:
        return None
    patterns = parse_pattern_list(value)
    if not patterns:
        raise InvalidGitConfigError(VCS_PATTERNS_KEY, value, "no patterns given")
    return patterns


def get_downstream_filter(reader: GitConfigReader) -> Optional[str]:
    value = _lookup(reader, DOWNSTREAM_KEY)
    if value is None or not value.strip():
        return None
    return value.strip()
