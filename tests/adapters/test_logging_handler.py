from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from lib_log_sentry.adapters.logging_handler import SentryLoggingHandler, entry_from_record
from lib_log_sentry.domain.configuration import StackTraceConfiguration
from lib_log_sentry.domain.levels import LogLevel
from lib_log_sentry.hook import SentryHook
from tests.fakes import RecordingTransport


@pytest.fixture
def app_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("tests.payments")
    previous_level, previous_propagate = logger.level, logger.propagate
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(previous_level)
    logger.propagate = previous_propagate


def _attach(logger: logging.Logger, hook: SentryHook) -> SentryLoggingHandler:
    handler = SentryLoggingHandler(hook)
    logger.addHandler(handler)
    return handler


def test_entry_from_record_collects_extras_and_caller() -> None:
    record = logging.LogRecord("svc", logging.ERROR, "/srv/app.py", 12, "charge %s failed", ("card",), None, func="charge")
    record.user = "alice"

    entry = entry_from_record(record)

    assert entry.level is LogLevel.ERROR
    assert entry.message == "charge card failed"
    assert entry.data == {"user": "alice"}
    assert entry.caller is not None
    assert (entry.caller.file, entry.caller.line, entry.caller.function) == ("/srv/app.py", 12, "charge")
    assert entry.timestamp.utcoffset() is not None


def test_entry_from_record_takes_error_from_exc_info() -> None:
    try:
        raise ValueError("declined")
    except ValueError as exc:
        record = logging.LogRecord("svc", logging.ERROR, "/srv/app.py", 1, "boom", (), (type(exc), exc, exc.__traceback__))

    assert isinstance(entry_from_record(record).error, ValueError)


def test_handler_routes_default_levels_only(app_logger: logging.Logger) -> None:
    transport = RecordingTransport()
    handler = _attach(app_logger, SentryHook(transport))

    app_logger.info("not routed")
    app_logger.warning("careful")
    app_logger.error("failed", extra={"order_id": 7})
    app_logger.log(LogLevel.PANIC.value, "panic")

    assert handler.routed_levels == frozenset({LogLevel.WARN, LogLevel.ERROR, LogLevel.FATAL, LogLevel.PANIC})
    assert [event.level.value for event in transport.events] == ["warning", "error", "fatal"]
    assert transport.events[1].extra == {"order_id": 7}
    assert '"msg": "failed"' in transport.events[1].message


def test_handler_reads_levels_once(app_logger: logging.Logger) -> None:
    transport = RecordingTransport()
    hook = SentryHook(transport, levels=[LogLevel.ERROR])
    handler = _attach(app_logger, hook)

    app_logger.warning("ignored")
    app_logger.error("sent")

    assert handler.hook is hook
    assert len(transport.events) == 1


def test_handler_ignores_sdk_and_own_loggers() -> None:
    transport = RecordingTransport()
    handler = SentryLoggingHandler(SentryHook(transport))

    for name in ("sentry_sdk.errors", "lib_log_sentry.hook"):
        handler.handle(logging.LogRecord(name, logging.ERROR, __file__, 1, "loop", (), None))

    assert transport.events == []


def test_handler_reports_unexpected_failures_via_handle_error(app_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch) -> None:
    class _ExplodingHook:
        def levels(self) -> list[LogLevel]:
            return [LogLevel.ERROR]

        def fire(self, entry) -> None:
            raise RuntimeError("hook failure")

    handler = SentryLoggingHandler(_ExplodingHook())  # type: ignore[arg-type]
    failures: list[logging.LogRecord] = []
    monkeypatch.setattr(handler, "handleError", failures.append)
    app_logger.addHandler(handler)

    app_logger.error("boom")

    assert [record.getMessage() for record in failures] == ["boom"]


def test_default_skip_points_trace_at_logging_call_site(app_logger: logging.Logger) -> None:
    transport = RecordingTransport()
    _attach(app_logger, SentryHook(transport, stacktrace=StackTraceConfiguration(enable=True)))

    app_logger.error("with trace")

    (event,) = transport.events
    (descriptor,) = event.exceptions
    assert descriptor.stacktrace is not None
    innermost = descriptor.stacktrace.frames[-1]
    assert innermost.function.endswith("test_default_skip_points_trace_at_logging_call_site")
    assert descriptor.type == "with trace"
    assert descriptor.value.endswith("test_logging_handler.py")
