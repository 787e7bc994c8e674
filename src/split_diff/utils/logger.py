"""Leveled logging for Split Diff.

Lines look like ``12:30:01.512 [INFO   ] message``. They go to stderr, which
keeps stdout free for ``--plain`` output, and with SPLIT_DIFF_DEBUG=1 also to
a debug file in the temp directory. While the TUI owns the terminal the
launcher mutes stderr, leaving the file as the only sink.
"""

from __future__ import annotations

import os
import sys
import tempfile
from contextlib import contextmanager
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any, Iterator, TextIO

DEBUG_LOG_NAME = "split_diff_debug.log"


class LogLevel(IntEnum):
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40


class Logger:
    """Stderr logger with an optional file sink; ``log(...)`` is ``log.info(...)``."""

    def __init__(self):
        self.level = LogLevel.INFO
        self.console = True
        self.file_path: Path | None = None
        self._file: TextIO | None = None

        if os.environ.get("SPLIT_DIFF_DEBUG") == "1":
            self.level = LogLevel.DEBUG
            self.set_file_output(Path(tempfile.gettempdir()) / DEBUG_LOG_NAME)

        level_name = os.environ.get("LOG_LEVEL", "").upper()
        if level_name == "WARN":
            level_name = "WARNING"
        if level_name in LogLevel.__members__:
            self.level = LogLevel[level_name]

    def set_level(self, level: LogLevel) -> None:
        self.level = level

    def set_file_output(self, path: Path) -> None:
        """Append messages to ``path``; a file that cannot be opened is skipped."""
        self.close()
        try:
            self._file = open(path, "a", encoding="utf-8")
        except OSError:
            return
        self.file_path = path

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
        self._file = None
        self.file_path = None

    @contextmanager
    def muted_console(self) -> Iterator[None]:
        """Keep messages off stderr for the duration of the block."""
        previous, self.console = self.console, False
        try:
            yield
        finally:
            self.console = previous

    def _write(self, level: LogLevel, args: tuple[Any, ...], sep: str = " ") -> None:
        if level < self.level:
            return

        stamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        line = f"{stamp} [{level.name:7}] {sep.join(str(a) for a in args)}\n"
        streams = [self._file] if self._file is not None else []
        if self.console:
            streams.append(sys.stderr)

        for stream in streams:
            try:
                stream.write(line)
                stream.flush()
            except (OSError, ValueError):
                # A closed or broken sink never takes the caller down
                continue

    def debug(self, *args: Any, sep: str = " ") -> None:
        self._write(LogLevel.DEBUG, args, sep)

    def info(self, *args: Any, sep: str = " ") -> None:
        self._write(LogLevel.INFO, args, sep)

    def warning(self, *args: Any, sep: str = " ") -> None:
        self._write(LogLevel.WARNING, args, sep)

    def error(self, *args: Any, sep: str = " ") -> None:
        self._write(LogLevel.ERROR, args, sep)

    def __call__(self, *args: Any, sep: str = " ") -> None:
        self.info(*args, sep=sep)


log = Logger()
