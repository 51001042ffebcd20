"""
Console and file line rendering.
"""

from __future__ import annotations

from datetime import datetime

from .levels import LogLevel, level_name
from .styling import RESET_SEQUENCE, Style, sgr, strip_ansi

# =============================================================================
# Console Formatter
# =============================================================================


class ConsoleFormatter:
    """Renders human-readable console lines.

    Plain:  ``WARNING: message``
    Styled: bold tag, then the level preset for the rest of the line, then reset.
    The ``LOG`` level prints only the message.
    """

    TAG_WIDTH = 9

    _LEVEL_STYLES = {
        LogLevel.DEBUG: Style.DEBUG,
        LogLevel.INFO: Style.INFO,
        LogLevel.WARNING: Style.WARNING,
        LogLevel.ERROR: Style.ERROR,
    }

    @classmethod
    def _tag(cls, level: LogLevel) -> str:
        return f"{level_name(level) + ':':<{cls.TAG_WIDTH}}"

    @classmethod
    def format_plain(cls, level: LogLevel, message: str) -> str:
        if level == LogLevel.LOG:
            return f"{message}\n"
        return f"{cls._tag(level)}{message}\n"

    @classmethod
    def format_styled(cls, level: LogLevel, message: str) -> str:
        if level == LogLevel.LOG:
            return f"{message}{RESET_SEQUENCE}\n"
        return "".join(
            [
                sgr(Style.BOLD),
                cls._tag(level),
                sgr(cls._LEVEL_STYLES[level]),
                message,
                RESET_SEQUENCE,
                "\n",
            ]
        )

    @classmethod
    def format(cls, level: LogLevel, message: str, *, use_color: bool) -> str:
        """Render a console line, falling back to plain text if styling fails."""
        if not use_color:
            return cls.format_plain(level, message)
        try:
            return cls.format_styled(level, message)
        except (KeyError, TypeError, ValueError):
            return cls.format_plain(level, message)


# =============================================================================
# File Formatter
# =============================================================================


class FileFormatter:
    """Renders unstyled, append-only file lines.

    Format: ``[YYYY-MM-DDTHH:MM:SS]LEVEL|logger|message``
    """

    TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
    FILENAME_FORMAT = "log_%Y-%m-%d.txt"

    @classmethod
    def filename(cls, now: datetime) -> str:
        return now.strftime(cls.FILENAME_FORMAT)

    @classmethod
    def format(cls, level: LogLevel, logger_name: str, message: str, now: datetime) -> str:
        timestamp = now.strftime(cls.TIMESTAMP_FORMAT)
        return f"[{timestamp}]{level_name(level)}|{logger_name}|{strip_ansi(message)}\n"
