"""Git interface layer: adapter, diff header parsing, models."""

from diff_gitignore_filter.git.adapter import (
    GitCommandError,
    GitError,
    NotInGitRepositoryError,
    discover_repository,
    get_config_value,
    is_git_repository,
)
from diff_gitignore_filter.git.diff_header import (
    extract_file_path,
    is_diff_header,
    normalize_path,
    parse_header_paths,
)
from diff_gitignore_filter.git.models import PathAnalysis, PathContext, Repository, RootCandidate

__all__ = [
    "GitCommandError",
    "GitError",
    "NotInGitRepositoryError",
    "PathAnalysis",
    "PathContext",
    "Repository",
    "RootCandidate",
    "discover_repository",
    "extract_file_path",
    "get_config_value",
    "is_diff_header",
    "is_git_repository",
    "normalize_path",
    "parse_header_paths",
]
