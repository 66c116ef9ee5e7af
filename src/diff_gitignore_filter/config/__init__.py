"""Configuration: CLI flags over git config over built-in defaults."""

from diff_gitignore_filter.config.errors import (
    ConfigError,
    ConfigIOError,
    GitCommandConfigError,
    InvalidCliArgumentError,
    InvalidGitConfigError,
    NotInRepositoryError,
)
from diff_gitignore_filter.config.loader import load_config, parse_cli_vcs_patterns
from diff_gitignore_filter.config.reader import GitConfigReader, MappingConfigReader, SystemGitConfigReader
from diff_gitignore_filter.config.schema import DEFAULT_VCS_PATTERNS, AppConfig, CliArgs

__all__ = [
    "DEFAULT_VCS_PATTERNS",
    "AppConfig",
    "CliArgs",
    "ConfigError",
    "ConfigIOError",
    "GitCommandConfigError",
    "GitConfigReader",
    "InvalidCliArgumentError",
    "InvalidGitConfigError",
    "MappingConfigReader",
    "NotInRepositoryError",
    "SystemGitConfigReader",
    "load_config",
    "parse_cli_vcs_patterns",
]
