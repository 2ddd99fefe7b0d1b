"""Remote event describing what is submitted to the error tracker.

Purpose
-------
Provide a transport-neutral representation of a Sentry event so the hook can
build events without importing :mod:`sentry_sdk`.

Contents
--------
* :class:`ExceptionDescriptor` - type/value pair with an optional trace.
* :class:`RemoteEvent` - message, severity, tags, extra and exceptions.

System Role
-----------
Built once per :meth:`SentryHook.fire` call and rendered through
:meth:`RemoteEvent.to_payload` by the transports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from .breadcrumbs import Breadcrumbs
from .levels import SentryLevel
from .stacktrace import Stacktrace

PLATFORM = "python"


@dataclass(slots=True, frozen=True)
class ExceptionDescriptor:
    """Exception entry of an event."""

    type: str
    value: str
    stacktrace: Stacktrace | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type, "value": self.value}
        if self.stacktrace is not None:
            data["stacktrace"] = self.stacktrace.to_dict()
        return data


@dataclass(slots=True, frozen=True)
class RemoteEvent:
    """Event submitted to the remote error tracker.

    Attributes
    ----------
    message:
        Body rendered by the configured formatter.
    timestamp:
        Timestamp of the originating log entry.
    level:
        :class:`SentryLevel` severity.
    platform:
        Identifier of the host runtime, always ``"python"``.
    extra:
        Entry data, shared with the entry rather than copied.
    tags:
        Configured tag mapping.
    exceptions:
        Exception descriptors; empty when no stack trace was attached.
    breadcrumbs:
        Optional breadcrumb collection.
    """

    message: str
    timestamp: datetime
    level: SentryLevel
    platform: str = PLATFORM
    extra: dict[str, Any] = field(default_factory=dict)
    tags: Mapping[str, str] = field(default_factory=dict)
    exceptions: tuple[ExceptionDescriptor, ...] = ()
    breadcrumbs: Breadcrumbs | None = None

    def to_payload(self) -> dict[str, Any]:
        """Render the event as a Sentry event dictionary.

        Examples
        --------
        >>> from datetime import timezone
        >>> event = RemoteEvent('boom', datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), SentryLevel.ERROR)
        >>> payload = event.to_payload()
        >>> payload['level'], payload['platform'], payload['message']
        ('error', 'python', 'boom')
        """

        payload: dict[str, Any] = {
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "level": self.level.value,
            "platform": self.platform,
            "extra": self.extra,
            "tags": dict(self.tags),
        }
        if self.exceptions:
            payload["exception"] = {"values": [exc.to_dict() for exc in self.exceptions]}
        if self.breadcrumbs is not None:
            payload[self.breadcrumbs.interface] = self.breadcrumbs.to_dict()
        return payload


__all__ = ["ExceptionDescriptor", "PLATFORM", "RemoteEvent"]
