"""
I/O redirection utilities.
"""

from typing import Any

from .core import Logger
from .levels import LogLevel


class StreamToLogger:
    """Redirects writes to a logger instance, one log call per line.

    Writes made while the logger is already emitting (for example a console
    sink writing to the very stream this object replaced) go straight to the
    original stream.
    """

    def __init__(self, logger: Logger, level: LogLevel, original_stream: Any):
        self.logger = logger
        self.level = level
        self.original_stream = original_stream
        self.linebuf = ""
        self._emitting = False

    def _emit(self, line: str) -> None:
        self._emitting = True
        try:
            self.logger.emit(self.level, line)
        finally:
            self._emitting = False

    def write(self, buf: str | bytes) -> int:
        if isinstance(buf, bytes):
            buf = buf.decode(self.encoding, errors="replace")

        if self._emitting:
            return self.original_stream.write(buf)

        for line in buf.splitlines(True):
            # If the line ends with a newline, log it immediately
            if line.endswith("\n"):
                self.linebuf += line.rstrip()
                if self.linebuf:
                    self._emit(self.linebuf)
                self.linebuf = ""
            else:
                self.linebuf += line
        return len(buf)

    def flush(self) -> None:
        if self._emitting:
            self.original_stream.flush()
            return
        if self.linebuf:
            line, self.linebuf = self.linebuf, ""
            self._emit(line)

    def isatty(self) -> bool:
        return False

    # Proxy all other methods to original stream
    def __getattr__(self, name: str) -> Any:
        return getattr(self.original_stream, name)

    @property
    def encoding(self) -> str:
        return getattr(self.original_stream, "encoding", None) or "utf-8"
