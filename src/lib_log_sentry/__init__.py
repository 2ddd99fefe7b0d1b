"""Public package surface of the Sentry logging hook.

Quick start::

    import logging
    import lib_log_sentry

    lib_log_sentry.init("https://key@o0.ingest.sentry.io/0", tags={"service": "api"})
    logging.getLogger(__name__).error("payment failed")
    lib_log_sentry.shutdown()

For full control build a :class:`SentryHook` and register a
:class:`SentryLoggingHandler` yourself.
"""

from __future__ import annotations

from .adapters import JSONFormatter, RichConsoleTransport, SentryLoggingHandler, SentryTransport, TextFormatter
from .application.use_cases import capture_stacktrace, find_stacktrace
from .domain import (
    Caller,
    ConfigurationError,
    LogEntry,
    LogLevel,
    RemoteEvent,
    SentryLevel,
    StackTraceConfiguration,
    Stacktrace,
    TracedError,
    wrap,
)
from .hook import SentryHook, new_async_sentry_hook, new_sentry_hook
from .runtime import get_hook, init, inspect_runtime, shutdown

__all__ = [
    "Caller",
    "ConfigurationError",
    "JSONFormatter",
    "LogEntry",
    "LogLevel",
    "RemoteEvent",
    "RichConsoleTransport",
    "SentryHook",
    "SentryLevel",
    "SentryLoggingHandler",
    "SentryTransport",
    "StackTraceConfiguration",
    "Stacktrace",
    "TextFormatter",
    "TracedError",
    "capture_stacktrace",
    "find_stacktrace",
    "get_hook",
    "init",
    "inspect_runtime",
    "new_async_sentry_hook",
    "new_sentry_hook",
    "shutdown",
    "wrap",
]
