"""Log entry handed to the hook by the logging framework.

Purpose
-------
Provide a framework-neutral, read-only view of a single log record so the
hook never depends on :class:`logging.LogRecord` internals.

Contents
--------
* :class:`Caller` - source location that emitted the record.
* :class:`LogEntry` - timestamp, level, message, caller, data and error.
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Produced by :mod:`lib_log_sentry.adapters.logging_handler` (or by host code
calling :meth:`SentryHook.fire` directly) and consumed by the hook, the
formatters and the stack trace resolver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class Caller:
    """Source location of the logging call."""

    file: str
    line: int
    function: str | None = None


@dataclass(slots=True, frozen=True)
class LogEntry:
    """Immutable log entry passed to :meth:`SentryHook.fire`.

    Attributes
    ----------
    timestamp:
        Time of the record in timezone-aware UTC.
    level:
        :class:`LogLevel` severity of the record.
    message:
        Rendered message text.
    caller:
        Optional :class:`Caller` describing where the record was emitted.
    data:
        Arbitrary key/value pairs. The mapping is held by reference so the
        event built from this entry shares it.
    error:
        Optional exception associated with the record.
    """

    timestamp: datetime
    level: LogLevel
    message: str
    caller: Caller | None = None
    data: dict[str, Any] = field(default_factory=dict)
    error: BaseException | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))


__all__ = ["Caller", "LogEntry"]
