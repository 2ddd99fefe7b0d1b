"""Immutable hook configuration.

Purpose
-------
Capture every option accepted by :class:`lib_log_sentry.hook.SentryHook` in
frozen dataclasses so the configuration can be shared across threads without
locking.

Contents
--------
* :class:`StackTraceConfiguration` - when and how stack traces are attached.
* :class:`HookConfig` - timeouts, level routing and tags.
* ``DEFAULT_LEVELS`` constant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .levels import LogLevel

# Severities routed to the hook when neither ``levels`` nor ``level`` is configured.
DEFAULT_LEVELS: tuple[LogLevel, ...] = (LogLevel.WARN, LogLevel.FATAL, LogLevel.ERROR, LogLevel.PANIC)


@dataclass(slots=True, frozen=True)
class StackTraceConfiguration:
    """Stack trace options.

    Attributes
    ----------
    enable:
        Whether stack traces are attached at all.
    level:
        Minimum entry level that triggers a capture.
    skip:
        Innermost frames dropped from an ambient capture.
    context:
        Source lines recorded around each frame.
    in_app_prefixes:
        Module prefixes marking a frame as ``in_app``.
    send_exception_type:
        Whether the exception descriptor carries a type.
    switch_exception_type_and_message:
        Swap the descriptor's type and value.
    include_error_breadcrumb:
        Add a breadcrumb per link of the entry's error chain.
    prefer_error_trace:
        Resolve the entry's error chain before falling back to an ambient
        capture.
    """

    enable: bool = False
    level: LogLevel = LogLevel.WARN
    skip: int = 6
    context: int = 0
    in_app_prefixes: tuple[str, ...] = ()
    send_exception_type: bool = True
    switch_exception_type_and_message: bool = False
    include_error_breadcrumb: bool = False
    prefer_error_trace: bool = False

    def __post_init__(self) -> None:
        if self.skip < 0:
            raise ValueError("skip must be >= 0")
        if self.context < 0:
            raise ValueError("context must be >= 0")
        object.__setattr__(self, "in_app_prefixes", tuple(self.in_app_prefixes))

    def applies_to(self, level: LogLevel) -> bool:
        """Return ``True`` when an entry at ``level`` should carry a stack trace."""

        return self.enable and level.at_least(self.level)


@dataclass(slots=True, frozen=True)
class HookConfig:
    """Options frozen at hook construction.

    ``levels`` is resolved by :meth:`resolve_levels`: explicit levels win,
    otherwise ``DEFAULT_LEVELS`` apply. ``level`` is a stored threshold only;
    it neither changes ``levels`` nor filters entries.
    """

    timeout: float = 0.1
    flush_timeout: float = 3.0
    levels: tuple[LogLevel, ...] = DEFAULT_LEVELS
    level: LogLevel | None = None
    tags: Mapping[str, str] = field(default_factory=dict)
    stacktrace: StackTraceConfiguration = field(default_factory=StackTraceConfiguration)
    asynchronous: bool = False

    def __post_init__(self) -> None:
        if self.timeout < 0:
            raise ValueError("timeout must be >= 0")
        if self.flush_timeout < 0:
            raise ValueError("flush_timeout must be >= 0")
        object.__setattr__(self, "levels", tuple(self.levels))
        object.__setattr__(self, "tags", MappingProxyType({str(key): str(value) for key, value in self.tags.items()}))

    @staticmethod
    def resolve_levels(levels: list[LogLevel] | tuple[LogLevel, ...] | None) -> tuple[LogLevel, ...]:
        """Return ``levels`` as a tuple, or ``DEFAULT_LEVELS`` when unset."""

        if levels is not None:
            return tuple(levels)
        return DEFAULT_LEVELS


__all__ = ["DEFAULT_LEVELS", "HookConfig", "StackTraceConfiguration"]
