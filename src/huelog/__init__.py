"""
huelog: small, embeddable leveled logging.

Named loggers route messages to two kinds of sinks:
- console: stdout/stderr, ANSI-styled when the terminal supports it
- file: one append-only text file per day under a log directory

Each logger and each sink filters on its own level.

Usage:
    from huelog import LogLevel, get_logger

    log = get_logger("svc")
    log.set_level(LogLevel.WARNING)
    log.warning("retry %d of %d", 2, 5)
"""

from .core import (
    Logger,
    LoggerRegistry,
    configure_logging,
    get_logger,
    get_registry,
    reset_registry,
    set_global_debug_level,
)
from .exceptions import HuelogError, InvalidLevelError
from .levels import LogLevel, level_name
from .sinks import BaseSink, ConsoleSink, FileOpenPolicy, FileSink, SinkState
from .styling import Style, is_terminal_styled, set_terminal_styled, strip_ansi, style

__all__ = [
    "BaseSink",
    "ConsoleSink",
    "FileOpenPolicy",
    "FileSink",
    "HuelogError",
    "InvalidLevelError",
    "LogLevel",
    "Logger",
    "LoggerRegistry",
    "SinkState",
    "Style",
    "configure_logging",
    "get_logger",
    "get_registry",
    "is_terminal_styled",
    "level_name",
    "reset_registry",
    "set_global_debug_level",
    "set_terminal_styled",
    "strip_ansi",
    "style",
]
