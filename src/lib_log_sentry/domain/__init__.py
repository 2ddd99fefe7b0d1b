"""Domain entities and value objects used by the Sentry bridge."""

from __future__ import annotations

from .breadcrumbs import Breadcrumb, Breadcrumbs
from .configuration import DEFAULT_LEVELS, HookConfig, StackTraceConfiguration
from .entry import Caller, LogEntry
from .errors import ConfigurationError, TracedError, wrap
from .events import ExceptionDescriptor, RemoteEvent
from .levels import LogLevel, SentryLevel, to_sentry_level
from .stacktrace import Frame, Stacktrace

__all__ = [
    "Breadcrumb",
    "Breadcrumbs",
    "Caller",
    "ConfigurationError",
    "DEFAULT_LEVELS",
    "ExceptionDescriptor",
    "Frame",
    "HookConfig",
    "LogEntry",
    "LogLevel",
    "RemoteEvent",
    "SentryLevel",
    "Stacktrace",
    "StackTraceConfiguration",
    "TracedError",
    "to_sentry_level",
    "wrap",
]
