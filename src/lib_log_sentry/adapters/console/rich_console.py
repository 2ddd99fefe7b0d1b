"""Rich-powered console transport implementing :class:`TransportPort`.

Purpose
-------
Render events to a terminal instead of sending them, so hook configuration can
be checked locally (``lib_log_sentry send --dry-run``) without a DSN.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :class:`RichConsoleTransport` - transport printing events with Rich.
"""

from __future__ import annotations

from typing import Any, Mapping
from uuid import uuid4

from rich.console import Console
from rich.table import Table
from rich.text import Text

from lib_log_sentry.application.ports.transport import TransportPort
from lib_log_sentry.domain.events import RemoteEvent
from lib_log_sentry.domain.levels import SentryLevel

#: Default Rich styles keyed by :class:`SentryLevel`.
_STYLE_MAP: Mapping[SentryLevel, str] = {
    SentryLevel.DEBUG: "dim",
    SentryLevel.INFO: "cyan",
    SentryLevel.WARNING: "yellow",
    SentryLevel.ERROR: "red",
    SentryLevel.FATAL: "bold red",
}


class RichConsoleTransport(TransportPort):
    """Print events using Rich; nothing leaves the process."""

    def __init__(self, *, console: Console | None = None, no_color: bool = False, show_frames: bool = True) -> None:
        self._console = console if console is not None else Console(no_color=no_color)
        self._no_color = no_color
        self._show_frames = show_frames

    def capture_event(self, event: RemoteEvent, *, hint: dict[str, Any] | None = None, scope: Any | None = None) -> str | None:
        """Render ``event`` and return a locally generated event id.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from io import StringIO
        >>> console = Console(file=StringIO(), record=True)
        >>> event = RemoteEvent('boom', datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), SentryLevel.ERROR, tags={'svc': 'api'})
        >>> event_id = RichConsoleTransport(console=console).capture_event(event)
        >>> 'boom' in console.export_text() and len(event_id) == 32
        True
        """
        event_id = uuid4().hex
        style = "" if self._no_color else _STYLE_MAP.get(event.level, "")
        self._console.print(self._format_line(event, event_id), style=style, highlight=False, markup=False)
        if event.tags:
            self._console.print(self._tag_table(event))
        if self._show_frames:
            for descriptor in event.exceptions:
                self._console.print(f"  exception {descriptor.type!r}: {descriptor.value}", highlight=False, markup=False)
                if descriptor.stacktrace is None:
                    continue
                for frame in descriptor.stacktrace.frames:
                    marker = "*" if frame.in_app else " "
                    self._console.print(f"   {marker} {frame.filename}:{frame.lineno} in {frame.function}", highlight=False, markup=False)
        return event_id

    def flush(self, timeout: float) -> None:
        self._console.file.flush()

    def close(self, timeout: float | None = None) -> None:
        self._console.file.flush()

    @staticmethod
    def _format_line(event: RemoteEvent, event_id: str) -> str:
        """Return a one-line summary of ``event``."""
        message = event.message.rstrip("\n")
        return f"{event.timestamp.isoformat()} {event.level.value.upper():>8} [{event.platform}] {event_id[:8]} {message}"

    @staticmethod
    def _tag_table(event: RemoteEvent) -> Table:
        table = Table("tag", "value", show_header=True, box=None, pad_edge=False)
        for key, value in sorted(event.tags.items()):
            table.add_row(Text(key), Text(value))
        return table


__all__ = ["RichConsoleTransport"]
