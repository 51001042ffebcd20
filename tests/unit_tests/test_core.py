"""
Logger 与 LoggerRegistry 单元测试

测试两级过滤、格式化、通道禁用、注册表幂等性以及全局调试开关。
"""

from __future__ import annotations

import threading

import pytest

from huelog import ConsoleSink, FileSink, Logger, LoggerRegistry, LogLevel, SinkState
from huelog import core


class TestRegistry:
    """注册表 get-or-create 测试"""

    def test_same_name_same_logger(self, registry) -> None:
        first = registry.get_logger("x")
        second = registry.get_logger("x")
        assert first is second

        first.set_level(LogLevel.ERROR)
        assert second.level is LogLevel.ERROR

    def test_names_are_case_sensitive(self, registry) -> None:
        assert registry.get_logger("svc") is not registry.get_logger("SVC")
        assert sorted(registry.names()) == ["SVC", "svc"]

    def test_new_logger_defaults(self, registry, console_sink, file_sink) -> None:
        logger = registry.get_logger("fresh")
        assert logger.name == "fresh"
        assert logger.level is LogLevel.INFO
        assert logger.console_sink is console_sink
        assert logger.file_sink is file_sink

    def test_registry_builds_default_sinks(self) -> None:
        registry = LoggerRegistry()
        assert registry.console_sink.level is LogLevel.INFO
        assert registry.file_sink.level is LogLevel.WARNING
        assert str(registry.file_sink.log_dir) == "logs"

    def test_custom_default_level(self) -> None:
        registry = LoggerRegistry(default_level=LogLevel.DEBUG)
        assert registry.get_logger("a").level is LogLevel.DEBUG
        assert registry.console_sink.level is LogLevel.DEBUG

    def test_contains_and_len(self, registry) -> None:
        assert len(registry) == 0
        assert "a" not in registry
        registry.get_logger("a")
        assert "a" in registry
        assert len(registry) == 1

    def test_concurrent_get_or_create(self, registry) -> None:
        """多线程同时创建同名 logger 只产生一个实例"""
        seen: list[Logger] = []
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            seen.append(registry.get_logger("shared"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(seen) == 8
        assert all(logger is seen[0] for logger in seen)
        assert len(registry) == 1

    def test_membership_while_loggers_are_created(self, registry) -> None:
        """并发创建期间 len/in 与 names() 一致"""
        names = [f"svc{i}" for i in range(50)]
        barrier = threading.Barrier(2)
        sizes: list[int] = []
        hits: list[bool] = []

        def creator() -> None:
            barrier.wait()
            for name in names:
                registry.get_logger(name)

        def reader() -> None:
            barrier.wait()
            for _ in range(200):
                sizes.append(len(registry))
                hits.append("svc0" in registry)

        threads = [threading.Thread(target=creator), threading.Thread(target=reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sizes == sorted(sizes)
        assert hits == sorted(hits)
        assert len(registry) == len(names)
        assert all(name in registry for name in names)
        assert sorted(registry.names()) == sorted(names)


class TestRouting:
    """两级过滤测试：logger 级别先于 sink 级别"""

    @pytest.mark.parametrize("logger_level", list(LogLevel))
    @pytest.mark.parametrize("sink_level", list(LogLevel))
    @pytest.mark.parametrize("message_level", list(LogLevel))
    def test_message_reaches_sink_iff_both_gates_pass(
        self, logger_level, sink_level, message_level, out_stream, err_stream
    ) -> None:
        sink = ConsoleSink(sink_level, styled=False, stdout=out_stream, stderr=err_stream)
        logger = Logger("gate", level=logger_level, console_sink=sink)

        logger.emit(message_level, "m")

        written = out_stream.getvalue() + err_stream.getvalue()
        assert bool(written) == (message_level >= logger_level and message_level >= sink_level)

    def test_sinks_filter_independently(self, registry, err_stream, file_sink) -> None:
        logger = registry.get_logger("split")
        logger.set_level(LogLevel.DEBUG)
        file_sink.set_level(LogLevel.ERROR)

        logger.warning("console only")
        logger.error("both")

        assert err_stream.getvalue() == "WARNING: console only\nERROR:   both\n"
        assert file_sink.path.read_text(encoding="utf-8").splitlines() == ["[2024-03-05T14:07:09]ERROR|split|both"]

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            ("debug", "DEBUG:   m\n"),
            ("info", "INFO:    m\n"),
            ("log", "m\n"),
            ("warning", "WARNING: m\n"),
            ("warn", "WARNING: m\n"),
            ("error", "ERROR:   m\n"),
        ],
    )
    def test_level_methods(self, registry, out_stream, err_stream, method, expected) -> None:
        logger = registry.get_logger("methods")
        logger.set_level(LogLevel.DEBUG)
        getattr(logger, method)("m")
        assert out_stream.getvalue() + err_stream.getvalue() == expected


class TestFormatting:
    """printf 风格格式化测试"""

    @pytest.fixture
    def logger(self, registry) -> Logger:
        return registry.get_logger("fmt")

    def test_template_with_args(self, logger, out_stream) -> None:
        logger.info("This is an %s message #%d", "info", 3)
        assert out_stream.getvalue() == "INFO:    This is an info message #3\n"

    def test_mapping_template(self, logger, out_stream) -> None:
        logger.info("%(user)s logged in", {"user": "ada"})
        assert out_stream.getvalue() == "INFO:    ada logged in\n"

    def test_literal_percent_without_args(self, logger, out_stream) -> None:
        logger.info("100% done")
        assert out_stream.getvalue() == "INFO:    100% done\n"

    def test_non_string_message(self, logger, out_stream) -> None:
        logger.info(42)
        assert out_stream.getvalue() == "INFO:    42\n"

    def test_bad_arguments_degrade(self, logger, out_stream) -> None:
        """参数不匹配时不抛异常"""
        logger.info("count=%d", "many")
        logger.info("%s and %s", "one")
        assert out_stream.getvalue().splitlines() == [
            "INFO:    count=%d ('many',)",
            "INFO:    %s and %s ('one',)",
        ]

    def test_formatting_skipped_when_filtered(self, logger) -> None:
        class Exploding:
            def __str__(self) -> str:
                raise AssertionError("rendered a filtered message")

        logger.set_level(LogLevel.ERROR)
        logger.info("%s", Exploding())


class TestSinkAttachment:
    """通道禁用与替换测试"""

    def test_detach_file_sink_only_affects_one_logger(self, registry, file_sink) -> None:
        quiet = registry.get_logger("quiet")
        loud = registry.get_logger("loud")

        quiet.set_file_sink(None)
        quiet.error("not in file")
        loud.error("in file")

        assert quiet.file_sink is None
        assert loud.file_sink is file_sink
        assert file_sink.path.read_text(encoding="utf-8").splitlines() == ["[2024-03-05T14:07:09]ERROR|loud|in file"]

    def test_detach_console_sink(self, registry, err_stream) -> None:
        logger = registry.get_logger("mute")
        logger.set_console_sink(None)
        logger.error("silent")
        assert err_stream.getvalue() == ""

    def test_detached_channel_ignores_level_setters(self, registry) -> None:
        logger = registry.get_logger("bare")
        logger.set_console_sink(None)
        logger.set_file_sink(None)

        logger.set_console_level(LogLevel.DEBUG)
        logger.set_file_level(LogLevel.DEBUG)
        logger.set_file_log_dir("elsewhere")
        logger.error("nowhere")

    def test_owned_sink(self, registry, out_stream, tmp_path, fixed_now) -> None:
        own_file = FileSink(tmp_path / "own", LogLevel.DEBUG, clock=lambda: fixed_now)
        logger = registry.get_logger("owner")
        logger.set_file_sink(own_file)

        logger.info("mine")

        assert own_file.path.read_text(encoding="utf-8") == "[2024-03-05T14:07:09]INFO|owner|mine\n"
        assert registry.file_sink.state is SinkState.UNINITIALIZED
        own_file.close()

    def test_sink_level_setters_reach_shared_sink(self, registry, console_sink, file_sink) -> None:
        registry.get_logger("a").set_console_level(LogLevel.ERROR)
        registry.get_logger("b").set_file_level(LogLevel.DEBUG)
        assert console_sink.level is LogLevel.ERROR
        assert file_sink.level is LogLevel.DEBUG

    def test_set_file_log_dir(self, registry, file_sink, tmp_path) -> None:
        registry.get_logger("a").set_file_log_dir(tmp_path / "moved")
        assert file_sink.log_dir == tmp_path / "moved"


class TestGlobalDebugLevel:
    """全局调试开关测试"""

    def test_opens_existing_loggers(self, registry, out_stream, console_sink) -> None:
        console_sink.set_level(LogLevel.WARNING)
        logger = registry.get_logger("existing")
        owned_console = ConsoleSink(LogLevel.ERROR, styled=False, stdout=out_stream)
        other = registry.get_logger("owned")
        other.set_console_sink(owned_console)

        registry.set_global_debug_level()

        assert console_sink.level is LogLevel.DEBUG
        assert owned_console.level is LogLevel.DEBUG
        assert logger.level is LogLevel.DEBUG
        logger.debug("visible")
        assert out_stream.getvalue() == "DEBUG:   visible\n"

    def test_not_retroactive_for_future_loggers(self, registry) -> None:
        registry.get_logger("before")
        registry.set_global_debug_level()
        assert registry.get_logger("after").level is LogLevel.INFO

    def test_file_sink_untouched(self, registry, file_sink) -> None:
        registry.get_logger("a")
        registry.set_global_debug_level()
        assert file_sink.level is LogLevel.WARNING


class TestProcessRegistry:
    """进程级单例测试"""

    def test_get_logger_uses_singleton(self) -> None:
        assert core.get_logger("app") is core.get_registry().get_logger("app")
        assert core.get_registry() is core.get_registry()

    def test_singleton_defaults(self) -> None:
        registry = core.get_registry()
        assert registry.default_level is LogLevel.INFO
        assert registry.file_sink.level is LogLevel.WARNING

    def test_configure_logging_replaces_singleton(self, tmp_path) -> None:
        old = core.get_registry()
        registry = core.configure_logging(level="debug", log_dir=str(tmp_path / "var"), file_open_policy="retry")

        assert registry is not old
        assert core.get_registry() is registry
        assert registry.default_level is LogLevel.DEBUG
        assert registry.file_sink.log_dir == tmp_path / "var"

    def test_configure_logging_style_mode(self) -> None:
        from huelog.styling import is_terminal_styled

        core.configure_logging(style_mode="always")
        assert is_terminal_styled() is True
        core.configure_logging(style_mode="never")
        assert is_terminal_styled() is False

    def test_global_debug_level_shortcut(self) -> None:
        logger = core.get_logger("svc")
        core.set_global_debug_level()
        assert logger.level is LogLevel.DEBUG

    def test_reset_closes_file_sink(self, tmp_path) -> None:
        registry = core.configure_logging(log_dir=str(tmp_path / "var"))
        registry.get_logger("svc").error("boom")
        assert registry.file_sink.state is SinkState.READY

        core.reset_registry()
        assert registry.file_sink.state is SinkState.UNINITIALIZED
