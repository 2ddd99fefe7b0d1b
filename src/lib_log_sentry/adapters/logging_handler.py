"""Bridge from stdlib :mod:`logging` to :class:`SentryHook`.

Purpose
-------
Register a hook with the standard logging framework: records are converted to
:class:`LogEntry` objects and passed to :meth:`SentryHook.fire` when their
level is one the hook asked for.

Contents
--------
* :func:`entry_from_record` - ``LogRecord`` to :class:`LogEntry`.
* :class:`SentryLoggingHandler` - :class:`logging.Handler` subclass.

System Role
-----------
The hook's levels are read once, when the handler is created, mirroring how a
logging framework registers hooks. Records from the SDK's own loggers and from
this package are ignored so reporting never feeds back into itself.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from lib_log_sentry.domain.entry import Caller, LogEntry
from lib_log_sentry.domain.levels import LogLevel

if TYPE_CHECKING:
    from lib_log_sentry.hook import SentryHook

_IGNORED_LOGGER_PREFIXES = ("sentry_sdk", "lib_log_sentry")

_RESERVED_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


def entry_from_record(record: logging.LogRecord) -> LogEntry:
    """Convert ``record`` into a :class:`LogEntry`.

    Attributes added through ``extra=`` become the entry's data; the exception
    from ``exc_info`` becomes the entry's error.
    """

    data: dict[str, Any] = {key: value for key, value in vars(record).items() if key not in _RESERVED_RECORD_ATTRS}
    error: BaseException | None = None
    if record.exc_info and record.exc_info[1] is not None:
        error = record.exc_info[1]
    caller = None
    if record.pathname:
        caller = Caller(file=record.pathname, line=record.lineno, function=record.funcName)
    return LogEntry(
        timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        level=LogLevel.from_python_level(record.levelno),
        message=record.getMessage(),
        caller=caller,
        data=data,
        error=error,
    )


class SentryLoggingHandler(logging.Handler):
    """Forward routed log records to a :class:`SentryHook`."""

    def __init__(self, hook: "SentryHook", level: int = logging.NOTSET) -> None:
        super().__init__(level=level)
        self._hook = hook
        self._levels = frozenset(hook.levels())

    @property
    def hook(self) -> "SentryHook":
        return self._hook

    @property
    def routed_levels(self) -> frozenset[LogLevel]:
        return self._levels

    def emit(self, record: logging.LogRecord) -> None:
        if record.name.startswith(_IGNORED_LOGGER_PREFIXES):
            return
        try:
            entry = entry_from_record(record)
            if entry.level not in self._levels:
                return
            self._hook.fire(entry)
        except Exception:  # noqa: BLE001
            self.handleError(record)


__all__ = ["SentryLoggingHandler", "entry_from_record"]
