"""
Loggers, the logger registry and the process-wide default registry.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

from .levels import DEFAULT_LOG_LEVEL, LogLevel
from .sinks import ConsoleSink, FileOpenPolicy, FileSink
from .styling import set_terminal_styled

if TYPE_CHECKING:
    from .config import LoggingSettings

# =============================================================================
# Logger
# =============================================================================


def _render(message: Any, args: tuple[Any, ...]) -> str:
    """Apply ``%``-style arguments; degrade instead of raising on bad input."""
    if not args:
        return str(message)
    # A lone mapping feeds named placeholders: "%(user)s", {"user": ...}
    values: Any = args[0] if len(args) == 1 and isinstance(args[0], Mapping) and args[0] else args
    try:
        return str(message) % values
    except (TypeError, ValueError, KeyError):
        return f"{message} {args!r}"


class Logger:
    """Named routing unit: a level gate in front of a console and a file sink.

    Loggers are created by ``LoggerRegistry.get_logger``. Each emit method
    accepts either a plain object or a ``%``-template followed by its
    arguments, e.g. ``logger.warning("retry %d of %d", 2, 5)``.
    """

    def __init__(
        self,
        name: str,
        *,
        level: LogLevel = DEFAULT_LOG_LEVEL,
        console_sink: ConsoleSink | None = None,
        file_sink: FileSink | None = None,
    ):
        self._name = name
        self._level = LogLevel.parse(level)
        self._console_sink = console_sink
        self._file_sink = file_sink

    def __repr__(self) -> str:
        return f"<Logger {self._name!r} level={self._level.name}>"

    @property
    def name(self) -> str:
        return self._name

    @property
    def level(self) -> LogLevel:
        return self._level

    def set_level(self, level: LogLevel) -> None:
        self._level = LogLevel.parse(level)

    def get_level(self) -> LogLevel:
        return self._level

    # -------------------------------------------------------------------------
    # Sink attachment
    # -------------------------------------------------------------------------

    @property
    def console_sink(self) -> ConsoleSink | None:
        return self._console_sink

    @property
    def file_sink(self) -> FileSink | None:
        return self._file_sink

    def set_console_sink(self, sink: ConsoleSink | None) -> None:
        """Attach a console sink, or detach with ``None`` (this logger only)."""
        self._console_sink = sink

    def set_file_sink(self, sink: FileSink | None) -> None:
        """Attach a file sink, or detach with ``None`` (this logger only)."""
        self._file_sink = sink

    # The level setters act on the attached sink, which may be a shared default.
    def set_console_level(self, level: LogLevel) -> None:
        if self._console_sink is not None:
            self._console_sink.set_level(level)

    def set_file_level(self, level: LogLevel) -> None:
        if self._file_sink is not None:
            self._file_sink.set_level(level)

    def set_file_log_dir(self, log_dir: str | Path) -> None:
        if self._file_sink is not None:
            self._file_sink.set_log_dir(log_dir)

    # -------------------------------------------------------------------------
    # Emitting
    # -------------------------------------------------------------------------

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self._level

    def emit(self, level: LogLevel, message: Any, *args: Any) -> None:
        if level < self._level:
            return

        text = _render(message, args)
        if self._console_sink is not None:
            self._console_sink.emit(level, text)
        if self._file_sink is not None:
            self._file_sink.emit(level, self._name, text)

    def debug(self, message: Any, *args: Any) -> None:
        self.emit(LogLevel.DEBUG, message, *args)

    def info(self, message: Any, *args: Any) -> None:
        self.emit(LogLevel.INFO, message, *args)

    def log(self, message: Any, *args: Any) -> None:
        """Emit at the no-prefix ``LOG`` level: no tag, no color."""
        self.emit(LogLevel.LOG, message, *args)

    def warning(self, message: Any, *args: Any) -> None:
        self.emit(LogLevel.WARNING, message, *args)

    warn = warning

    def error(self, message: Any, *args: Any) -> None:
        self.emit(LogLevel.ERROR, message, *args)


# =============================================================================
# Registry
# =============================================================================


class LoggerRegistry:
    """Name-to-Logger directory with get-or-create semantics.

    New loggers start at ``default_level`` and share the registry's default
    console and file sinks. Loggers are never removed.
    """

    def __init__(
        self,
        *,
        default_level: LogLevel = DEFAULT_LOG_LEVEL,
        console_sink: ConsoleSink | None = None,
        file_sink: FileSink | None = None,
    ):
        self._default_level = LogLevel.parse(default_level)
        self._console_sink = console_sink or ConsoleSink(self._default_level)
        self._file_sink = file_sink or FileSink()
        self._loggers: dict[str, Logger] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: LoggingSettings) -> LoggerRegistry:
        """Build a registry whose default sinks follow ``settings``."""
        console_sink = ConsoleSink(settings.effective_console_level)
        file_sink = FileSink(
            settings.log_dir,
            settings.file_level,
            open_policy=FileOpenPolicy(settings.file_open_policy),
        )
        return cls(
            default_level=settings.effective_level,
            console_sink=console_sink,
            file_sink=file_sink,
        )

    @property
    def default_level(self) -> LogLevel:
        return self._default_level

    @property
    def console_sink(self) -> ConsoleSink:
        return self._console_sink

    @property
    def file_sink(self) -> FileSink:
        return self._file_sink

    def get_logger(self, name: str) -> Logger:
        with self._lock:
            logger = self._loggers.get(name)
            if logger is None:
                logger = Logger(
                    name,
                    level=self._default_level,
                    console_sink=self._console_sink,
                    file_sink=self._file_sink,
                )
                self._loggers[name] = logger
            return logger

    def set_global_debug_level(self) -> None:
        """Open every known logger and its console sink to ``DEBUG``.

        Loggers created afterwards still start at the default level.
        """
        with self._lock:
            self._console_sink.set_level(LogLevel.DEBUG)
            for logger in self._loggers.values():
                logger.set_level(LogLevel.DEBUG)
                logger.set_console_level(LogLevel.DEBUG)

    def names(self) -> list[str]:
        with self._lock:
            return list(self._loggers)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._loggers

    def __len__(self) -> int:
        with self._lock:
            return len(self._loggers)

    def close(self) -> None:
        self._console_sink.close()
        self._file_sink.close()


# =============================================================================
# Global State
# =============================================================================

# Shared singleton for callers that do not pass a registry around.
_registry: LoggerRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> LoggerRegistry:
    """Return the process-wide registry, building it from settings on first use."""
    global _registry

    with _registry_lock:
        if _registry is None:
            from .config import LoggingSettings

            _registry = _build_registry(LoggingSettings())
        return _registry


def get_logger(name: str) -> Logger:
    """Get a logger from the process-wide registry."""
    return get_registry().get_logger(name)


def set_global_debug_level() -> None:
    get_registry().set_global_debug_level()


def _build_registry(settings: LoggingSettings) -> LoggerRegistry:
    if settings.style_mode == "always":
        set_terminal_styled(True)
    elif settings.style_mode == "never":
        set_terminal_styled(False)
    else:
        # "auto" drops any earlier pin so the terminal is probed again
        set_terminal_styled(None)
    return LoggerRegistry.from_settings(settings)


def configure_logging(settings: LoggingSettings | None = None, **overrides: Any) -> LoggerRegistry:
    """
    Replace the process-wide registry.

    Args:
        settings: Settings to build from; loaded from ``HUELOG_*`` env vars if omitted
        **overrides: Field overrides used when ``settings`` is omitted
                     (e.g. ``level="debug"``, ``log_dir="var/log"``)

    Returns:
        The new registry. Loggers handed out by the previous one keep
        working but are no longer reachable through ``get_logger``.
    """
    global _registry

    from .config import LoggingSettings

    settings = settings or LoggingSettings(**overrides)
    registry = _build_registry(settings)
    with _registry_lock:
        previous, _registry = _registry, registry
    if previous is not None:
        previous.close()
    return registry


def reset_registry() -> None:
    """Drop the process-wide registry (for tests)."""
    global _registry

    with _registry_lock:
        previous, _registry = _registry, None
    if previous is not None:
        previous.close()
