"""Configuration errors. Each carries the short category shown to the user."""

from __future__ import annotations


class ConfigError(Exception):
    """Raised when configuration cannot be resolved."""

    category = "Configuration error"


class GitCommandConfigError(ConfigError):
    category = "Git command failed"


class InvalidGitConfigError(ConfigError):
    """Raised when a git config value is present but unusable."""

    category = "Invalid git config"

    def __init__(self, key: str, value: str, reason: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"{key}={value!r}: {reason}")


class NotInRepositoryError(ConfigError):
    category = "Not in git repository"


class ConfigIOError(ConfigError):
    category = "Configuration error"


class InvalidCliArgumentError(ConfigError):
    category = "Invalid CLI argument"
