"""Streaming diff filter.

A unified diff is a preamble followed by per-file sections, each opened by a
``diff --git`` header. Sections are kept or dropped whole: dropped sections
never reach the writer, kept ones are written in chunks of at most
``MAX_BUFFERED_LINES`` lines so a huge file never sits in memory at once.
"""

from __future__ import annotations

import dataclasses
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Tuple

from diff_gitignore_filter.filtering.downstream import run_downstream
from diff_gitignore_filter.filtering.errors import FilterError
from diff_gitignore_filter.filtering.ignore import IgnoreRules
from diff_gitignore_filter.filtering.vcs import is_vcs_path
from diff_gitignore_filter.git.diff_header import extract_file_path, is_diff_header

logger = logging.getLogger(__name__)

MAX_BUFFERED_LINES = 1024


@dataclass
class FilterResult:
    """What happened during one run of the filter."""

    sections: int = 0
    included: int = 0
    excluded_paths: List[str] = field(default_factory=list)
    binary_passthrough: bool = False
    broken_pipe: bool = False

    @property
    def excluded(self) -> int:
        return self.sections - self.included


class _Sink:
    """Writer wrapper that turns a closed reader into a flag instead of an error."""

    def __init__(self, writer: BinaryIO) -> None:
        self._writer = writer
        self.closed = False

    def write(self, data: bytes) -> bool:
        """Write *data*; return False once the reader has gone away."""
        if self.closed:
            return False
        try:
            self._writer.write(data)
        except BrokenPipeError:
            self.closed = True
            return False
        except OSError as exc:
            raise FilterError(f"Failed to write output: {exc}") from exc
        return True

    def write_lines(self, lines: Iterable[str]) -> bool:
        return self.write("".join(lines).encode("utf-8"))

    def flush(self) -> bool:
        if self.closed:
            return False
        try:
            self._writer.flush()
        except BrokenPipeError:
            self.closed = True
            return False
        except OSError as exc:
            raise FilterError(f"Failed to flush output: {exc}") from exc
        return True


def _is_binary(data: bytes) -> bool:
    if b"\x00" in data:
        return True
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return True
    return False


@dataclass(frozen=True)
class DiffFilter:
    """Decides which file sections of a diff survive and writes them out."""

    ignore_rules: Optional[IgnoreRules] = None
    vcs_patterns: Tuple[str, ...] = ()
    vcs_filtering_enabled: bool = False
    downstream_command: Optional[str] = None

    @classmethod
    def from_root(cls, root: Path, base_dir: Optional[Path] = None) -> "DiffFilter":
        """Build a filter using the ``.gitignore`` at *root*, if there is one."""
        return cls(ignore_rules=IgnoreRules.load(root, base_dir))

    def with_vcs_patterns(self, patterns: Iterable[str]) -> "DiffFilter":
        """Return a copy that drops sections matching *patterns*."""
        return dataclasses.replace(self, vcs_patterns=tuple(patterns), vcs_filtering_enabled=True)

    def with_downstream(self, command: str) -> "DiffFilter":
        """Return a copy that pipes its output through ``sh -c command``."""
        return dataclasses.replace(self, downstream_command=command)

    def is_vcs_file(self, path: str) -> bool:
        return is_vcs_path(path, self.vcs_patterns)

    def should_include(self, path: str) -> bool:
        """Return True if the section for *path* belongs in the output."""
        if self.vcs_filtering_enabled and self.is_vcs_file(path):
            return False
        if self.ignore_rules is None:
            return True
        return not self.ignore_rules.is_ignored(path)

    def process_diff(self, reader: BinaryIO, writer: Optional[BinaryIO] = None) -> FilterResult:
        """Filter the diff read from *reader*.

        Output goes to *writer*, or to the downstream command's stdin when one
        is configured (in which case *writer* is ignored).
        """
        if self.downstream_command is not None:
            return run_downstream(
                self.downstream_command,
                lambda stdin: self._process_direct(reader, stdin),
            )
        if writer is None:
            raise ValueError("a writer is required when no downstream command is set")
        return self._process_direct(reader, writer)

    def _has_vcs_section(self, text: str) -> bool:
        for line in text.split("\n"):
            if is_diff_header(line):
                path = extract_file_path(line)
                if path is not None and self.is_vcs_file(path):
                    return True
        return False

    def _process_direct(self, reader: BinaryIO, writer: BinaryIO) -> FilterResult:
        try:
            data = reader.read()
        except OSError as exc:
            raise FilterError(f"Failed to read input data: {exc}") from exc

        result = FilterResult()
        sink = _Sink(writer)
        if not data:
            return result

        text = data.decode("utf-8", errors="replace")

        # A section to drop for VCS reasons forces line processing even for binary input.
        if not (self.vcs_filtering_enabled and self._has_vcs_section(text)) and _is_binary(data):
            logger.debug("Binary content detected; passing %d bytes through", len(data))
            result.binary_passthrough = True
            sink.write(data)
            sink.flush()
            result.broken_pipe = sink.closed
            return result

        buffer: List[str] = []
        include = False
        for line in io.StringIO(text, newline="\n"):
            if is_diff_header(line):
                if include and buffer and not sink.write_lines(buffer):
                    break
                buffer = []
                path = extract_file_path(line)
                include = path is not None and self.should_include(path)
                result.sections += 1
                if include:
                    result.included += 1
                else:
                    result.excluded_paths.append(path if path is not None else line.rstrip("\r\n"))
                    logger.debug("Excluding section: %s", line.rstrip("\r\n"))
            elif result.sections == 0:
                if not sink.write(line.encode("utf-8")):
                    break
                continue

            if include:
                buffer.append(line)
                if len(buffer) >= MAX_BUFFERED_LINES:
                    if not sink.write_lines(buffer):
                        break
                    buffer = []

        if include and buffer:
            sink.write_lines(buffer)
        sink.flush()

        result.broken_pipe = sink.closed
        if result.broken_pipe:
            logger.debug("Output closed early; stopped writing")
        return result
