"""Downstream command adapter: pipe filtered output into ``sh -c <command>``."""

from __future__ import annotations

import logging
import subprocess
from typing import BinaryIO, Callable, Optional, TypeVar

from diff_gitignore_filter.filtering.errors import (
    DownstreamProcessError,
    DownstreamSpawnError,
    FilterError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _close_quietly(stream: BinaryIO) -> None:
    try:
        stream.close()
    except BrokenPipeError:
        pass  # reader went away before the last flush
    except OSError as exc:
        logger.debug("Error closing downstream stdin: %s", exc)


def run_downstream(command: str, feed: Callable[[BinaryIO], T]) -> T:
    """Spawn *command*, hand its stdin to *feed*, then wait for it to exit.

    stdout and stderr of the child are inherited. The child's stdin is always
    closed and the child always reaped, even when *feed* fails. A non-zero exit
    takes precedence over an error raised by *feed*.
    """
    try:
        process = subprocess.Popen(["sh", "-c", command], stdin=subprocess.PIPE)
    except OSError as exc:
        raise DownstreamSpawnError(command, str(exc)) from exc

    logger.debug("Started downstream command %r (pid %d)", command, process.pid)
    assert process.stdin is not None

    feed_error: Optional[FilterError] = None
    result: Optional[T] = None
    try:
        result = feed(process.stdin)
    except FilterError as exc:
        feed_error = exc
    finally:
        _close_quietly(process.stdin)
        exit_code = process.wait()

    logger.debug("Downstream command exited with %d", exit_code)
    if exit_code != 0:
        raise DownstreamProcessError(command, exit_code) from feed_error
    if feed_error is not None:
        raise feed_error
    return result  # type: ignore[return-value]
