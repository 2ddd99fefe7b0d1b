"""Utilities that normalise log entries into template-friendly dictionaries.

Why
---
The text formatter accepts ``str.format`` placeholders and the JSON formatter
serialises the same fields. Producing the payload in one place keeps both
formatters in sync.

Contents
--------
* :func:`build_format_payload` – generate placeholder values for a log entry.
"""

from __future__ import annotations

from typing import Any

from lib_log_sentry.domain.entry import LogEntry


def _normalise_data_fields(data: dict[str, Any]) -> str:
    pairs = {key: value for key, value in data.items() if value not in (None, {})}
    if not pairs:
        return ""
    return " " + " ".join(f"{key}={value}" for key, value in sorted(pairs.items()))


def build_format_payload(entry: LogEntry) -> dict[str, Any]:
    """Return the mapping of placeholders exposed to format templates."""

    level_text = entry.level.severity.upper()
    caller = entry.caller

    payload: dict[str, Any] = {
        "timestamp": entry.timestamp.isoformat(),
        "YYYY": f"{entry.timestamp.year:04d}",
        "MM": f"{entry.timestamp.month:02d}",
        "DD": f"{entry.timestamp.day:02d}",
        "hh": f"{entry.timestamp.hour:02d}",
        "mm": f"{entry.timestamp.minute:02d}",
        "ss": f"{entry.timestamp.second:02d}",
        "level": entry.level.severity,
        "LEVEL": level_text,
        "level_enum": entry.level,
        "sentry_level": entry.level.sentry_level.value,
        "message": entry.message,
        "data": dict(entry.data),
        "data_fields": _normalise_data_fields(entry.data),
        "file": caller.file if caller is not None else "",
        "line": caller.line if caller is not None else "",
        "func": (caller.function or "") if caller is not None else "",
        "error": str(entry.error) if entry.error is not None else "",
    }
    return payload


__all__ = ["build_format_payload"]
