"""
Log levels and their total order.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any

from .exceptions import InvalidLevelError


class LogLevel(IntEnum):
    """Severities in ascending order.

    ``LOG`` is the no-prefix level: it ranks between ``INFO`` and ``WARNING``
    but is rendered without a level tag or color, for decorative or
    pre-formatted output.
    """

    DEBUG = 0
    INFO = 1
    LOG = 2
    WARNING = 3
    ERROR = 4

    @property
    def display_name(self) -> str:
        return level_name(self)

    @classmethod
    def parse(cls, value: Any) -> LogLevel:
        """Coerce a level, an int rank or a case-insensitive name into a LogLevel."""
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise InvalidLevelError(value) from None
        if isinstance(value, str):
            level = _ALIASES.get(value.strip().lower())
            if level is not None:
                return level
        raise InvalidLevelError(value)


_ALIASES = {
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "log": LogLevel.LOG,
    "warn": LogLevel.WARNING,
    "warning": LogLevel.WARNING,
    "error": LogLevel.ERROR,
    "critical": LogLevel.ERROR,
    "fatal": LogLevel.ERROR,
}

_NAMES = {
    LogLevel.DEBUG: "DEBUG",
    LogLevel.INFO: "INFO",
    LogLevel.LOG: "",
    LogLevel.WARNING: "WARNING",
    LogLevel.ERROR: "ERROR",
}


def level_name(level: LogLevel) -> str:
    """Plain uppercase tag for a level; empty for ``LOG``."""
    return _NAMES[level]


def from_stdlib(levelno: int) -> LogLevel:
    """Map a standard library ``logging`` level number onto a LogLevel."""
    if levelno >= logging.ERROR:
        return LogLevel.ERROR
    if levelno >= logging.WARNING:
        return LogLevel.WARNING
    if levelno >= logging.INFO:
        return LogLevel.INFO
    return LogLevel.DEBUG


DEFAULT_LOG_LEVEL = LogLevel.INFO
DEFAULT_FILE_LOG_LEVEL = LogLevel.WARNING
