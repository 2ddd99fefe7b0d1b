"""Formatters rendering log entries into event bodies.

Purpose
-------
Implement :class:`FormatterPort` for the two body styles the hook supports:
a JSON object (the default) and a ``str.format`` text template.

Contents
--------
* :class:`JSONFormatter` - one JSON object per entry, data keys at top level.
* :class:`TextFormatter` - template rendering through
  :func:`build_format_payload`.
* ``DEFAULT_TEXT_TEMPLATE`` constant.
"""

from __future__ import annotations

import json
from typing import Any

from lib_log_sentry.application.ports.formatter import FormatterPort
from lib_log_sentry.domain.entry import LogEntry

from ._formatting import build_format_payload

DEFAULT_TEXT_TEMPLATE = "{timestamp} {LEVEL:>5} {message}{data_fields}"

_RESERVED_KEYS = ("time", "level", "msg", "error", "func", "file")


class JSONFormatter(FormatterPort):
    """Render entries as JSON objects.

    Entry data is merged into the top-level object. Keys that clash with the
    fixed ``time``/``level``/``msg``/``error``/``func``/``file`` fields are
    kept under a ``fields.`` prefix.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_sentry.domain.levels import LogLevel
    >>> entry = LogEntry(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.ERROR, 'boom', data={'msg': 'x'})
    >>> JSONFormatter().format(entry)
    b'{"fields.msg": "x", "level": "error", "msg": "boom", "time": "2025-09-30T12:00:00+00:00"}\\n'
    """

    def __init__(self, *, sort_keys: bool = True, ensure_ascii: bool = False) -> None:
        self._sort_keys = sort_keys
        self._ensure_ascii = ensure_ascii

    def format(self, entry: LogEntry) -> bytes:
        document: dict[str, Any] = {}
        for key, value in entry.data.items():
            target = f"fields.{key}" if key in _RESERVED_KEYS else key
            document[target] = str(value) if isinstance(value, BaseException) else value
        document["time"] = entry.timestamp.isoformat()
        document["level"] = entry.level.severity
        document["msg"] = entry.message
        if entry.error is not None:
            document["error"] = str(entry.error)
        if entry.caller is not None:
            document["file"] = f"{entry.caller.file}:{entry.caller.line}"
            if entry.caller.function:
                document["func"] = entry.caller.function
        rendered = json.dumps(document, sort_keys=self._sort_keys, ensure_ascii=self._ensure_ascii, default=str)
        return (rendered + "\n").encode("utf-8")


class TextFormatter(FormatterPort):
    """Render entries through a ``str.format`` template.

    Available placeholders are those produced by
    :func:`lib_log_sentry.adapters._formatting.build_format_payload`.
    An unknown placeholder raises :class:`KeyError` at format time.
    """

    def __init__(self, template: str = DEFAULT_TEXT_TEMPLATE) -> None:
        self._template = template

    @property
    def template(self) -> str:
        return self._template

    def format(self, entry: LogEntry) -> bytes:
        return self._template.format(**build_format_payload(entry)).encode("utf-8")


__all__ = ["DEFAULT_TEXT_TEMPLATE", "JSONFormatter", "TextFormatter"]
