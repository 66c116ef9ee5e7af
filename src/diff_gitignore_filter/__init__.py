"""diff-gitignore-filter: drop ignored and VCS-metadata sections from git diffs."""

__version__ = "1.0.1"
