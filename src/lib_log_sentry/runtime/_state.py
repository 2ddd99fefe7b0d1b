"""Process-wide holder for the runtime assembled by :func:`lib_log_sentry.init`.

Installing and releasing happen under one lock so concurrent ``init`` or
``shutdown`` calls cannot both succeed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Callable

from lib_log_sentry.adapters.logging_handler import SentryLoggingHandler
from lib_log_sentry.hook import SentryHook

_NOT_INITIALISED = "lib_log_sentry.init() must be called before using the runtime API"


@dataclass(slots=True)
class SentryRuntime:
    """Hook, handler and shutdown routine wired to one logger."""

    hook: SentryHook
    handler: SentryLoggingHandler
    logger: logging.Logger
    shutdown: Callable[[], None]
    dsn_configured: bool


_active: SentryRuntime | None = None
_lock = RLock()


def install_runtime(runtime: SentryRuntime) -> None:
    """Make ``runtime`` the active runtime.

    Raises
    ------
    RuntimeError
        When another runtime is still active.
    """

    global _active
    with _lock:
        if _active is not None:
            raise RuntimeError("lib_log_sentry is already initialised; call shutdown() first")
        _active = runtime


def release_runtime() -> SentryRuntime:
    """Detach and return the active runtime; raise when there is none."""

    global _active
    with _lock:
        if _active is None:
            raise RuntimeError(_NOT_INITIALISED)
        runtime, _active = _active, None
        return runtime


def current_runtime() -> SentryRuntime:
    with _lock:
        if _active is None:
            raise RuntimeError(_NOT_INITIALISED)
        return _active


def is_initialised() -> bool:
    with _lock:
        return _active is not None


__all__ = [
    "SentryRuntime",
    "current_runtime",
    "install_runtime",
    "is_initialised",
    "release_runtime",
]
