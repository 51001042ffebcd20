"""
Exception hierarchy for huelog.

Emit methods never raise; these exceptions only signal configuration misuse,
such as an unknown level name passed to settings or to ``LogLevel.parse``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class HuelogError(Exception):
    """Root of all huelog exceptions."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class InvalidLevelError(HuelogError, ValueError):
    """Raised when a value cannot be mapped onto a log level."""

    def __init__(self, value: Any) -> None:
        super().__init__(
            f"Unknown log level: {value!r}",
            code="INVALID_LEVEL",
            details={"value": value},
        )
