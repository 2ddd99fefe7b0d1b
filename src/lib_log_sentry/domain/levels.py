"""Log level abstractions for both sides of the Sentry bridge.

Purpose
-------
Offer a domain-specific representation of log severities on the logging side
(:class:`LogLevel`) and on the Sentry side (:class:`SentryLevel`), together
with the static translation table between them.

Contents
--------
* :class:`LogLevel` enum with conversion helpers for :mod:`logging` integers.
* :class:`SentryLevel` enum carrying the wire strings Sentry expects.
* ``_SEVERITY_MAP`` constant mapping every :class:`LogLevel` onto a
  :class:`SentryLevel`.

System Role
-----------
Used by :class:`lib_log_sentry.hook.SentryHook` to translate entry severities
and by the logging bridge to turn ``LogRecord.levelno`` into domain levels.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Ordered severities accepted from the logging framework.

    Numeric values line up with :mod:`logging` so ``FATAL`` equals
    ``logging.CRITICAL``. ``TRACE`` and ``PANIC`` extend the stdlib range
    below ``DEBUG`` and above ``CRITICAL``.
    """

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50
    PANIC = 60

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured payloads."""

        return self.name.lower()

    @property
    def sentry_level(self) -> "SentryLevel":
        """Return the Sentry severity this level is reported as."""

        return _SEVERITY_MAP[self]

    def at_least(self, threshold: "LogLevel") -> bool:
        """Return ``True`` when this level is as severe as ``threshold`` or more.

        Examples
        --------
        >>> LogLevel.ERROR.at_least(LogLevel.WARN)
        True
        >>> LogLevel.INFO.at_least(LogLevel.WARN)
        False
        """

        return self.value >= threshold.value

    def to_python_level(self) -> int:
        """Return the :mod:`logging` integer matching this level."""

        return self.value

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        normalized = _NAME_ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging integer into the closest :class:`LogLevel`.

        Custom integers between two known levels fall to the lower one; values
        below ``TRACE`` are reported as ``TRACE``.

        Examples
        --------
        >>> LogLevel.from_python_level(logging.CRITICAL)
        <LogLevel.FATAL: 50>
        >>> LogLevel.from_python_level(25)
        <LogLevel.INFO: 20>
        >>> LogLevel.from_python_level(0)
        <LogLevel.TRACE: 5>
        """

        selected = cls.TRACE
        for candidate in cls:
            if candidate.value <= level:
                selected = candidate
        return selected


class SentryLevel(Enum):
    """Severities understood by the Sentry event schema."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


# Static, total translation from logging severities to Sentry severities.
_SEVERITY_MAP = {
    LogLevel.TRACE: SentryLevel.DEBUG,
    LogLevel.DEBUG: SentryLevel.DEBUG,
    LogLevel.INFO: SentryLevel.INFO,
    LogLevel.WARN: SentryLevel.WARNING,
    LogLevel.ERROR: SentryLevel.ERROR,
    LogLevel.FATAL: SentryLevel.FATAL,
    LogLevel.PANIC: SentryLevel.FATAL,
}

_NAME_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
}

logging.addLevelName(LogLevel.TRACE.value, "TRACE")
logging.addLevelName(LogLevel.PANIC.value, "PANIC")


def to_sentry_level(level: LogLevel) -> SentryLevel:
    """Return the Sentry severity for ``level``."""

    return _SEVERITY_MAP[level]


__all__ = ["LogLevel", "SentryLevel", "to_sentry_level"]
