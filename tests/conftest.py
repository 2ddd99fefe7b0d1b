from __future__ import annotations

import os
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from lib_log_sentry.domain.entry import Caller, LogEntry
from lib_log_sentry.domain.levels import LogLevel
from tests.fakes import RecordingTransport


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop Sentry settings inherited from the developer shell."""

    for name in list(os.environ):
        if name == "SENTRY_DSN" or name.startswith("LOG_SENTRY_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def make_entry() -> Callable[..., LogEntry]:
    def factory(
        message: str = "boom",
        level: LogLevel = LogLevel.ERROR,
        *,
        data: dict[str, Any] | None = None,
        error: BaseException | None = None,
        caller: Caller | None = Caller(file="/srv/app/payments.py", line=42, function="charge"),
    ) -> LogEntry:
        return LogEntry(
            timestamp=datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc),
            level=level,
            message=message,
            caller=caller,
            data=data if data is not None else {},
            error=error,
        )

    return factory
