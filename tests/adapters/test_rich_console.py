from __future__ import annotations

from datetime import datetime, timezone
from io import StringIO

import pytest
from rich.console import Console

from lib_log_sentry.adapters.console import RichConsoleTransport
from lib_log_sentry.domain.events import ExceptionDescriptor, RemoteEvent
from lib_log_sentry.domain.levels import SentryLevel
from lib_log_sentry.domain.stacktrace import Frame, Stacktrace


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, width=160, color_system=None)


def _event(**overrides) -> RemoteEvent:
    values = {
        "message": '{"msg": "payment [declined]"}\n',
        "timestamp": datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc),
        "level": SentryLevel.ERROR,
        "tags": {"service": "api", "region": "eu"},
    }
    values.update(overrides)
    return RemoteEvent(**values)


def test_rich_console_renders_summary_line(record_console: Console) -> None:
    event_id = RichConsoleTransport(console=record_console).capture_event(_event())

    output = record_console.export_text()
    assert "2025-09-23T12:00:00+00:00" in output
    assert "ERROR" in output
    assert "[python]" in output
    assert event_id[:8] in output
    assert 'payment [declined]' in output


def test_rich_console_renders_tags(record_console: Console) -> None:
    RichConsoleTransport(console=record_console).capture_event(_event())

    output = record_console.export_text()
    assert "service" in output
    assert "api" in output
    assert output.index("region") < output.index("service")


def test_rich_console_renders_exception_frames(record_console: Console) -> None:
    frames = (
        Frame(function="main", module="app", filename="app.py", abs_path="/srv/app.py", lineno=3, in_app=True),
        Frame(function="charge", module="lib", filename="lib.py", abs_path="/srv/lib.py", lineno=9),
    )
    event = _event(exceptions=(ExceptionDescriptor("boom", "/srv/app.py", Stacktrace(frames=frames)),))

    RichConsoleTransport(console=record_console).capture_event(event)

    output = record_console.export_text()
    assert "exception 'boom': /srv/app.py" in output
    assert "* app.py:3 in main" in output
    assert "lib.py:9 in charge" in output
    assert output.index("app.py:3") < output.index("lib.py:9")


def test_rich_console_can_hide_frames(record_console: Console) -> None:
    event = _event(exceptions=(ExceptionDescriptor("boom", "", Stacktrace(frames=())),))

    RichConsoleTransport(console=record_console, show_frames=False).capture_event(event)

    assert "exception" not in record_console.export_text()


def test_rich_console_generates_distinct_event_ids(record_console: Console) -> None:
    transport = RichConsoleTransport(console=record_console, no_color=True)

    first = transport.capture_event(_event(tags={}))
    second = transport.capture_event(_event(tags={}))

    assert first != second
    assert len(first) == 32
    transport.flush(1.0)
    transport.close()
