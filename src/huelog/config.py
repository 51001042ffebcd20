"""
Logging Configuration.

Read by ``configure_logging()`` and by the first ``get_logger()`` call that
builds the process-wide registry. Explicitly constructed registries never
look at the environment.

Usage:
    # HUELOG_LEVEL=debug HUELOG_LOG_DIR=var/log python app.py
    from huelog.config import LoggingSettings

    settings = LoggingSettings()
    settings.effective_level  # LogLevel.DEBUG
"""

from typing import Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .levels import DEFAULT_FILE_LOG_LEVEL, DEFAULT_LOG_LEVEL, LogLevel
from .sinks import FileOpenPolicy

StyleMode = Literal["auto", "always", "never"]


class LoggingSettings(BaseSettings):
    """Logging infrastructure configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HUELOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: Optional[LogLevel] = Field(
        default=None,
        description="Default level of new loggers (INFO, or DEBUG when debug is set)",
    )
    console_level: Optional[LogLevel] = Field(
        default=None,
        description="Level of the default console sink (defaults to the logger level)",
    )
    file_level: LogLevel = Field(default=DEFAULT_FILE_LOG_LEVEL, description="Level of the default file sink")
    log_dir: str = Field(default="logs", description="Directory of the default file sink")
    style_mode: StyleMode = Field(default="auto", description="ANSI styling: auto, always, never")
    file_open_policy: FileOpenPolicy = Field(
        default=FileOpenPolicy.PERMANENT,
        description="Whether a failed log file open disables the file sink for good",
    )
    debug: bool = Field(default=False, description="Debug build: lowers the default level to DEBUG")

    @field_validator("level", "console_level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        return LogLevel.parse(value)

    @field_validator("file_level", mode="before")
    @classmethod
    def _parse_file_level(cls, value: Any) -> Any:
        # An empty HUELOG_FILE_LEVEL means "unset"
        if value is None or value == "":
            return DEFAULT_FILE_LOG_LEVEL
        return LogLevel.parse(value)

    @property
    def effective_level(self) -> LogLevel:
        if self.level is not None:
            return self.level
        return LogLevel.DEBUG if self.debug else DEFAULT_LOG_LEVEL

    @property
    def effective_console_level(self) -> LogLevel:
        if self.console_level is not None:
            return self.console_level
        return self.effective_level
