from __future__ import annotations

import logging
import sys
from typing import Iterator

import pytest

from lib_devlog.adapters.logging_bridge import DevLogFormatter, DevLogHandler, record_from_logging
from lib_devlog.application.use_cases.render import RecordRenderer
from lib_devlog.domain.context import ContextBinder, ContextFrame
from lib_devlog.domain.levels import LogLevel
from lib_devlog.domain.rendered import RenderedBlock
from lib_devlog.domain.values import ErrorValue, Integer, String


class RecordingSink:
    supports_color = False

    def __init__(self) -> None:
        self.blocks: list[RenderedBlock] = []
        self.flushed = 0

    def write(self, block: RenderedBlock) -> None:
        self.blocks.append(block)

    def flush(self) -> None:
        self.flushed += 1


def _log_record(name: str = "app.server", level: int = logging.INFO, msg: str = "Server started", **extra: object) -> logging.LogRecord:
    return logging.makeLogRecord({"name": name, "levelno": level, "msg": msg, **extra})


@pytest.fixture
def isolated_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("lib_devlog.tests.bridge")
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    try:
        yield logger
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.propagate = True


def test_dotted_logger_name_becomes_module_path() -> None:
    record = record_from_logging(_log_record())
    assert record.module_path == "app::server"
    assert record.level is LogLevel.INFO


def test_root_logger_has_no_module_path() -> None:
    assert record_from_logging(_log_record(name="root")).module_path == ""


def test_custom_separator_is_used_for_module_path() -> None:
    assert record_from_logging(_log_record(), separator="/").module_path == "app/server"


def test_extra_attributes_become_ordered_fields() -> None:
    record = record_from_logging(_log_record(port=8000, environment="DEV"))
    assert record.fields == (("port", Integer(8000)), ("environment", String("DEV")))


def test_message_arguments_are_interpolated() -> None:
    log_record = logging.makeLogRecord({"name": "app", "levelno": logging.WARNING, "msg": "%s users", "args": (3,)})
    record = record_from_logging(log_record)
    assert record.message == "3 users"
    assert record.level is LogLevel.WARN


def test_broken_interpolation_keeps_raw_message() -> None:
    log_record = logging.makeLogRecord({"name": "app", "msg": "%d users", "args": ("many",)})
    assert record_from_logging(log_record).message == "%d users"


def test_exception_info_becomes_cause_field() -> None:
    try:
        raise KeyError("users")
    except KeyError:
        log_record = _log_record(level=logging.ERROR, msg="lookup failed", exc_info=sys.exc_info())

    record = record_from_logging(log_record)

    key, value = record.fields[-1]
    assert key == "cause"
    assert isinstance(value, ErrorValue)
    assert value.message == "KeyError: 'users'"


def test_context_stack_and_metadata_are_carried() -> None:
    frames = (ContextFrame("request", {"id": 42}),)
    log_record = _log_record()
    record = record_from_logging(log_record, context_stack=frames)
    assert record.context_stack == frames
    assert record.thread_name == log_record.threadName
    assert record.thread_id == log_record.thread
    assert record.timestamp is not None
    assert record.timestamp.tzinfo is not None


def test_handler_writes_rendered_block(isolated_logger: logging.Logger, plain_renderer: RecordRenderer) -> None:
    sink = RecordingSink()
    isolated_logger.addHandler(DevLogHandler(plain_renderer, sink))

    isolated_logger.info("Server started", extra={"port": 8000, "environment": "DEV"})

    assert [block.text for block in sink.blocks] == [
        "INFO  (lib_devlog::tests::bridge) Server started port=8000 environment=DEV",
    ]


def test_handler_uses_binder_snapshot(isolated_logger: logging.Logger, plain_renderer: RecordRenderer) -> None:
    sink = RecordingSink()
    binder = ContextBinder()
    isolated_logger.addHandler(DevLogHandler(plain_renderer, sink, binder=binder))

    with binder.bind("request", id=42):
        isolated_logger.info("handled")

    assert sink.blocks[0].text == "INFO  (request::lib_devlog::tests::bridge) handled id=42"


def test_handler_level_filters_records(isolated_logger: logging.Logger, plain_renderer: RecordRenderer) -> None:
    sink = RecordingSink()
    isolated_logger.addHandler(DevLogHandler(plain_renderer, sink, level=logging.WARNING))

    isolated_logger.info("quiet")
    isolated_logger.warning("loud")

    assert [block.text for block in sink.blocks] == ["WARN  (lib_devlog::tests::bridge) loud"]


def test_failing_sink_is_reported_through_handle_error(
    isolated_logger: logging.Logger,
    plain_renderer: RecordRenderer,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    class BrokenSink(RecordingSink):
        def write(self, block: RenderedBlock) -> None:
            raise OSError("stream closed")

    handler = DevLogHandler(plain_renderer, BrokenSink())
    reported: list[logging.LogRecord] = []
    monkeypatch.setattr(handler, "handleError", reported.append)
    isolated_logger.addHandler(handler)

    isolated_logger.error("lost")

    assert len(reported) == 1


def test_reentrant_emit_is_dropped(isolated_logger: logging.Logger, plain_renderer: RecordRenderer) -> None:
    class EchoingSink(RecordingSink):
        def write(self, block: RenderedBlock) -> None:
            super().write(block)
            isolated_logger.info("echo")

    sink = EchoingSink()
    isolated_logger.addHandler(DevLogHandler(plain_renderer, sink))

    isolated_logger.info("first")

    assert [block.text for block in sink.blocks] == ["INFO  (lib_devlog::tests::bridge) first"]


def test_handler_flush_reaches_sink(plain_renderer: RecordRenderer) -> None:
    sink = RecordingSink()
    DevLogHandler(plain_renderer, sink).flush()
    assert sink.flushed == 1


def test_formatter_returns_rendered_text(plain_renderer: RecordRenderer) -> None:
    formatter = DevLogFormatter(plain_renderer)
    assert formatter.format(_log_record(port=8000)) == "INFO  (app::server) Server started port=8000"
