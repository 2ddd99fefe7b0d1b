"""Port describing how log entries are rendered into an event body."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_sentry.domain.entry import LogEntry


@runtime_checkable
class FormatterPort(Protocol):
    """Render a log entry to bytes. Implementations may raise."""

    def format(self, entry: LogEntry) -> bytes:
        """Return the rendered body for ``entry``."""


__all__ = ["FormatterPort"]
