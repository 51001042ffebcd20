"""
Log sink abstractions and concrete implementations.
"""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import IO, Any, Callable

from .formatters import ConsoleFormatter, FileFormatter
from .levels import DEFAULT_FILE_LOG_LEVEL, DEFAULT_LOG_LEVEL, LogLevel
from .styling import is_terminal_styled

# =============================================================================
# Sink Abstraction
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks. Every sink filters on its own level."""

    def __init__(self, level: LogLevel = DEFAULT_LOG_LEVEL):
        self._level = LogLevel.parse(level)

    @property
    def level(self) -> LogLevel:
        return self._level

    def set_level(self, level: LogLevel) -> None:
        self._level = LogLevel.parse(level)

    def accepts(self, level: LogLevel) -> bool:
        return level >= self._level

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class ConsoleSink(BaseSink):
    """Console sink writing ``DEBUG``/``INFO`` to stdout and every higher level to stderr.

    Args:
        level: Minimum level emitted by this sink
        styled: Pin ANSI styling on or off; ``None`` follows the terminal probe
        stdout: Stream for ``DEBUG``/``INFO`` (default: current sys.stdout)
        stderr: Stream for ``LOG``/``WARNING``/``ERROR`` (default: current sys.stderr)
    """

    def __init__(
        self,
        level: LogLevel = DEFAULT_LOG_LEVEL,
        *,
        styled: bool | None = None,
        stdout: Any = None,
        stderr: Any = None,
    ):
        super().__init__(level)
        self._styled = styled
        self._stdout = stdout
        self._stderr = stderr

    @property
    def styled(self) -> bool:
        return is_terminal_styled() if self._styled is None else self._styled

    def _stream_for(self, level: LogLevel) -> Any:
        if level > LogLevel.INFO:
            return sys.stderr if self._stderr is None else self._stderr
        return sys.stdout if self._stdout is None else self._stdout

    def emit(self, level: LogLevel, message: str) -> None:
        if not self.accepts(level):
            return

        output = ConsoleFormatter.format(level, message, use_color=self.styled)
        stream = self._stream_for(level)
        try:
            stream.write(output)
            stream.flush()
        except (OSError, ValueError):
            pass  # Closed or broken stream; console output is best effort

    def close(self) -> None:
        pass


# =============================================================================
# File Sink
# =============================================================================


class SinkState(str, Enum):
    """Lifecycle of a FileSink's output file."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FAILED = "failed"


class FileOpenPolicy(str, Enum):
    """What a FileSink does after failing to open its log file."""

    PERMANENT = "permanent"
    RETRY = "retry"


def _report(message: str) -> None:
    sys.stderr.write(f"###  Log Error: {message}  ###\n")
    sys.stderr.flush()


class FileSink(BaseSink):
    """Append-only daily file sink, initialized lazily on first write.

    A missing directory is created on demand; if that fails the next emit
    tries again. If the day's file cannot be opened the sink turns ``FAILED``
    and drops every later message silently (unless the policy is ``RETRY``).
    The file opened first is kept for the whole run; dates do not roll over.
    """

    def __init__(
        self,
        log_dir: str | Path = "logs",
        level: LogLevel = DEFAULT_FILE_LOG_LEVEL,
        *,
        open_policy: FileOpenPolicy = FileOpenPolicy.PERMANENT,
        clock: Callable[[], datetime] = datetime.now,
    ):
        super().__init__(level)
        self._log_dir = Path(log_dir)
        self._open_policy = FileOpenPolicy(open_policy)
        self._clock = clock
        self._state = SinkState.UNINITIALIZED
        self._dir_checked = False
        self._path: Path | None = None
        self._file: IO[str] | None = None
        self._lock = threading.Lock()

    @property
    def state(self) -> SinkState:
        return self._state

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    @property
    def path(self) -> Path | None:
        return self._path

    def set_log_dir(self, log_dir: str | Path) -> None:
        """Point the sink at another directory.

        An open file is closed and the next emit opens the day's file in the
        new directory, so calling this ends the reuse of the first handle for
        the rest of the run. A ``FAILED`` sink stays failed.
        """
        with self._lock:
            self._log_dir = Path(log_dir)
            if self._state == SinkState.FAILED:
                return
            self._close_file()
            self._dir_checked = False
            self._state = SinkState.UNINITIALIZED

    def _initialize(self) -> None:
        if not self._dir_checked:
            try:
                if not self._log_dir.exists():
                    self._log_dir.mkdir(parents=True, exist_ok=True)
            except (OSError, ValueError):
                _report(f'Could not create log directory "{self._log_dir.absolute()}"')
                return
            self._dir_checked = True

        path = self._log_dir / FileFormatter.filename(self._clock())
        try:
            self._file = open(path, "a", encoding="utf-8")
        except (OSError, ValueError):
            _report(f'Could not create/open log file "{path.absolute()}"')
            if self._open_policy == FileOpenPolicy.PERMANENT:
                self._state = SinkState.FAILED
            return

        self._path = path
        self._state = SinkState.READY

    def emit(self, level: LogLevel, logger_name: str, message: str) -> None:
        if not self.accepts(level) or self._state == SinkState.FAILED:
            return

        with self._lock:
            if self._state == SinkState.UNINITIALIZED:
                self._initialize()
            if self._state != SinkState.READY or self._file is None:
                return

            line = FileFormatter.format(level, logger_name, message, self._clock())
            try:
                self._file.write(line)
                self._file.flush()
            except (OSError, ValueError):
                pass  # Write failures are dropped like every other sink fault

    def _close_file(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def close(self) -> None:
        with self._lock:
            self._close_file()
            if self._state == SinkState.READY:
                self._state = SinkState.UNINITIALIZED
