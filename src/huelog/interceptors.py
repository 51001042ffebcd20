"""
Interceptors for capturing standard library and structlog events.
"""

from __future__ import annotations

import logging
from typing import Iterable

import structlog
from structlog.typing import EventDict, WrappedLogger

from .core import LoggerRegistry, get_registry
from .levels import LogLevel, from_stdlib


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library logging records to huelog loggers.

    The huelog logger is the one registered under ``record.name``, so
    ``logging.getLogger("db.pool")`` ends up in ``get_logger("db.pool")``.
    """

    def __init__(self, registry: LoggerRegistry | None = None, level: int = logging.NOTSET):
        super().__init__(level)
        self._registry = registry

    @property
    def registry(self) -> LoggerRegistry:
        return get_registry() if self._registry is None else self._registry

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # Format message using stdlib's formatting (handles %s args)
            msg = self.format(record)
            logger = self.registry.get_logger(record.name or "root")
            logger.emit(from_stdlib(record.levelno), msg)
        except Exception:
            self.handleError(record)


def intercept_stdlib(
    names: Iterable[str] = (),
    *,
    level: int = logging.DEBUG,
    registry: LoggerRegistry | None = None,
) -> RedirectStdLibHandler:
    """Route stdlib loggers into huelog.

    Without ``names`` the root logger is intercepted; otherwise each named
    logger gets the handler and stops propagating to avoid double output.
    Existing handlers of the intercepted loggers are removed.
    """
    handler = RedirectStdLibHandler(registry)
    names = list(names)

    if not names:
        root_logger = logging.getLogger()
        root_logger.handlers = [handler]
        root_logger.setLevel(level)
        return handler

    for name in names:
        lg = logging.getLogger(name)
        lg.handlers = [handler]
        lg.setLevel(level)
        lg.propagate = False
    return handler


# =============================================================================
# Structlog Processor
# =============================================================================

_STRUCTLOG_LEVELS = {
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "msg": LogLevel.LOG,
    "warn": LogLevel.WARNING,
    "warning": LogLevel.WARNING,
    "error": LogLevel.ERROR,
    "exception": LogLevel.ERROR,
    "critical": LogLevel.ERROR,
    "fatal": LogLevel.ERROR,
}


class HuelogRenderer:
    """Final structlog processor that hands events to huelog loggers.

    The logger name comes from the ``logger`` key (see
    ``structlog.stdlib.add_logger_name``) or ``_name``, falling back to
    ``default_logger``. Remaining keys are appended as ``key=value`` pairs.
    The event is then dropped so structlog prints nothing itself.
    """

    EXCLUDED_KEYS = {"event", "logger", "_name", "level"}

    def __init__(self, registry: LoggerRegistry | None = None, default_logger: str = "root"):
        self._registry = registry
        self._default_logger = default_logger

    def _render_message(self, event_dict: EventDict) -> str:
        message = str(event_dict.get("event", ""))
        extras = [f"{k}={v}" for k, v in event_dict.items() if k not in self.EXCLUDED_KEYS]
        if extras:
            message = f"{message} " + " ".join(extras)
        return message

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        registry = get_registry() if self._registry is None else self._registry
        name = event_dict.get("logger") or event_dict.get("_name") or self._default_logger
        level = _STRUCTLOG_LEVELS.get(str(event_dict.get("level", method_name)).lower(), LogLevel.INFO)

        registry.get_logger(str(name)).emit(level, self._render_message(event_dict))
        raise structlog.DropEvent


__all__ = ["RedirectStdLibHandler", "intercept_stdlib", "HuelogRenderer"]
