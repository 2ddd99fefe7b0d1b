"""Concrete adapters: formatters, transports and the logging bridge."""

from __future__ import annotations

from .console import RichConsoleTransport
from .formatters import JSONFormatter, TextFormatter
from .logging_handler import SentryLoggingHandler, entry_from_record
from .sentry_transport import SentryTransport, create_client

__all__ = [
    "JSONFormatter",
    "RichConsoleTransport",
    "SentryLoggingHandler",
    "SentryTransport",
    "TextFormatter",
    "create_client",
    "entry_from_record",
]
