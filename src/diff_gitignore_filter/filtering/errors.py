"""Errors raised while filtering a diff or driving the downstream command."""

from __future__ import annotations

from typing import Optional


class FilterError(Exception):
    """Raised on I/O failure while reading the diff or writing output (never a broken pipe)."""


class DownstreamSpawnError(FilterError):
    """Raised when the downstream command could not be launched at all."""

    def __init__(self, command: str, reason: str) -> None:
        self.command = command
        super().__init__(f"Failed to spawn downstream command '{command}': {reason}")


class DownstreamProcessError(FilterError):
    """Raised when the downstream command ran but exited unsuccessfully."""

    def __init__(self, command: str, exit_code: Optional[int]) -> None:
        self.command = command
        self.exit_code = exit_code
        super().__init__(f"Downstream command '{command}' failed with exit code: {exit_code}")
