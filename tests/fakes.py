"""Test doubles shared across the suite."""

from __future__ import annotations

import threading
from typing import Any

from lib_log_sentry.application.ports.transport import TransportPort
from lib_log_sentry.domain.entry import LogEntry
from lib_log_sentry.domain.events import RemoteEvent


class RecordingTransport(TransportPort):
    """Transport keeping every call in memory."""

    def __init__(self) -> None:
        self.events: list[RemoteEvent] = []
        self.scopes: list[Any] = []
        self.flushes: list[float] = []
        self.closed: list[float | None] = []
        self._lock = threading.Lock()

    def capture_event(self, event: RemoteEvent, *, hint: dict[str, Any] | None = None, scope: Any | None = None) -> str | None:
        with self._lock:
            self.events.append(event)
            self.scopes.append(scope)
        return f"evt-{len(self.events)}"

    def flush(self, timeout: float) -> None:
        with self._lock:
            self.flushes.append(timeout)

    def close(self, timeout: float | None = None) -> None:
        self.closed.append(timeout)


class FailingTransport(RecordingTransport):
    """Transport whose submission and flush always raise."""

    def capture_event(self, event: RemoteEvent, *, hint: dict[str, Any] | None = None, scope: Any | None = None) -> str | None:
        raise ConnectionError("sentry unreachable")

    def flush(self, timeout: float) -> None:
        raise TimeoutError("flush timed out")


class BlockingTransport(RecordingTransport):
    """Transport that blocks inside ``capture_event`` until released."""

    def __init__(self) -> None:
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()

    def capture_event(self, event: RemoteEvent, *, hint: dict[str, Any] | None = None, scope: Any | None = None) -> str | None:
        self.entered.set()
        if not self.release.wait(timeout=5.0):  # pragma: no cover - defensive
            raise AssertionError("BlockingTransport was never released")
        return super().capture_event(event, hint=hint, scope=scope)


class FailingFormatter:
    def format(self, entry: LogEntry) -> bytes:
        raise RuntimeError("formatter exploded")
