import io
from datetime import datetime

import pytest

from huelog import ConsoleSink, FileSink, LoggerRegistry, LogLevel
from huelog.core import reset_registry
from huelog.styling import set_terminal_styled

FIXED_NOW = datetime(2024, 3, 5, 14, 7, 9)


@pytest.fixture(autouse=True)
def isolate_logging(tmp_path, monkeypatch):
    """
    Every test runs in its own working directory with plain (unstyled) output
    and a fresh process-wide registry, so the default ``logs/`` directory and
    HUELOG_* variables from the host never leak in.
    """
    monkeypatch.chdir(tmp_path)
    for key in ("LEVEL", "CONSOLE_LEVEL", "FILE_LEVEL", "LOG_DIR", "STYLE_MODE", "FILE_OPEN_POLICY", "DEBUG"):
        monkeypatch.delenv(f"HUELOG_{key}", raising=False)
    set_terminal_styled(False)
    reset_registry()
    yield
    reset_registry()
    set_terminal_styled(None)


@pytest.fixture
def out_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def err_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console_sink(out_stream, err_stream) -> ConsoleSink:
    return ConsoleSink(LogLevel.DEBUG, styled=False, stdout=out_stream, stderr=err_stream)


@pytest.fixture
def file_sink(tmp_path) -> FileSink:
    sink = FileSink(tmp_path / "logs", LogLevel.WARNING, clock=lambda: FIXED_NOW)
    yield sink
    sink.close()


@pytest.fixture
def registry(console_sink, file_sink) -> LoggerRegistry:
    return LoggerRegistry(console_sink=console_sink, file_sink=file_sink)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW
