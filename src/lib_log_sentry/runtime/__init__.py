"""Runtime façade attaching a :class:`SentryHook` to stdlib logging.

Purpose
-------
Expose a stable entry point (``init``, ``shutdown``, ``get_hook``,
``inspect_runtime``) so host applications can enable Sentry reporting with a
single call instead of assembling transport, hook and handler themselves.

Contents
--------
* ``init`` – composition root: settings, transport, hook, logging handler.
* ``shutdown`` – drain, flush, close and detach.
* ``get_hook`` / ``inspect_runtime`` – accessors for the live runtime.

System Role
-----------
Outer shell of the package. Configuration precedence is environment variable
over call argument (see :mod:`lib_log_sentry.config`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Mapping, Sequence

from lib_log_sentry.adapters.logging_handler import SentryLoggingHandler
from lib_log_sentry.adapters.sentry_transport import SentryTransport
from lib_log_sentry.application.ports.formatter import FormatterPort
from lib_log_sentry.application.ports.transport import TransportPort
from lib_log_sentry.application.use_cases.shutdown import create_shutdown
from lib_log_sentry.config import enable_dotenv, settings_from_env
from lib_log_sentry.domain.configuration import StackTraceConfiguration
from lib_log_sentry.domain.levels import LogLevel
from lib_log_sentry.hook import SentryHook

from ._state import SentryRuntime, current_runtime, install_runtime, is_initialised, release_runtime


@dataclass(frozen=True)
class RuntimeSnapshot:
    """Immutable view over the active runtime."""

    logger_name: str
    levels: tuple[LogLevel, ...]
    asynchronous: bool
    tags: Mapping[str, str]
    flush_timeout: float
    stacktrace_enabled: bool
    dsn_configured: bool


def init(
    dsn: str | None = None,
    *,
    logger: str | logging.Logger | None = None,
    levels: Sequence[LogLevel | str] | None = None,
    level: LogLevel | str | None = None,
    timeout: float = 0.1,
    flush_timeout: float = 3.0,
    tags: Mapping[str, str] | None = None,
    formatter: FormatterPort | None = None,
    stacktrace: StackTraceConfiguration | None = None,
    asynchronous: bool = False,
    transport: TransportPort | None = None,
    dotenv: bool = False,
) -> SentryHook:
    """Create a hook and attach it to ``logger`` (the root logger by default).

    Parameters
    ----------
    dsn:
        Sentry DSN; ``SENTRY_DSN`` overrides it. Ignored when ``transport`` is
        given.
    logger:
        Logger (or logger name) receiving the handler.
    levels, level, timeout, flush_timeout, tags, asynchronous:
        Hook options; ``LOG_SENTRY_*`` variables override them.
    formatter, stacktrace:
        Passed through to :class:`SentryHook`. ``LOG_SENTRY_STACKTRACE``
        overrides ``stacktrace.enable``.
    transport:
        Explicit transport, e.g. :class:`RichConsoleTransport` for dry runs.
    dotenv:
        Load the nearest ``.env`` before reading the environment.

    Raises
    ------
    RuntimeError
        When a runtime is already active.
    ConfigurationError
        When the DSN is invalid.
    """

    if is_initialised():
        raise RuntimeError("lib_log_sentry is already initialised; call shutdown() first")
    if dotenv:
        enable_dotenv()

    settings = settings_from_env(
        dsn=dsn,
        levels=levels,
        level=level,
        timeout=timeout,
        flush_timeout=flush_timeout,
        tags=tags,
        stacktrace_enabled=stacktrace.enable if stacktrace is not None else False,
        asynchronous=asynchronous,
    )
    if stacktrace is None:
        stacktrace = StackTraceConfiguration(enable=settings.stacktrace_enabled)
    elif stacktrace.enable != settings.stacktrace_enabled:
        stacktrace = replace(stacktrace, enable=settings.stacktrace_enabled)

    if transport is None:
        transport = SentryTransport.from_dsn(settings.dsn, timeout=settings.timeout)

    hook = SentryHook(
        transport,
        timeout=settings.timeout,
        flush_timeout=settings.flush_timeout,
        levels=settings.levels,
        level=settings.level,
        tags=settings.tags,
        formatter=formatter,
        stacktrace=stacktrace,
        asynchronous=settings.asynchronous,
    )
    target = logger if isinstance(logger, logging.Logger) else logging.getLogger(logger)
    handler = SentryLoggingHandler(hook)
    install_runtime(
        SentryRuntime(
            hook=hook,
            handler=handler,
            logger=target,
            shutdown=create_shutdown(drain=hook.flush, transport=transport, timeout=settings.timeout),
            dsn_configured=settings.dsn is not None,
        )
    )
    target.addHandler(handler)
    return hook


def get_hook() -> SentryHook:
    """Return the hook created by :func:`init`."""

    return current_runtime().hook


def inspect_runtime() -> RuntimeSnapshot:
    """Return a read-only snapshot of the current runtime state."""

    runtime = current_runtime()
    config = runtime.hook.config
    return RuntimeSnapshot(
        logger_name=runtime.logger.name,
        levels=config.levels,
        asynchronous=config.asynchronous,
        tags=MappingProxyType(dict(config.tags)),
        flush_timeout=config.flush_timeout,
        stacktrace_enabled=config.stacktrace.enable,
        dsn_configured=runtime.dsn_configured,
    )


def shutdown() -> None:
    """Detach the handler, drain the hook and close the transport.

    Raises
    ------
    RuntimeError
        When no runtime is active.
    """

    runtime = release_runtime()
    runtime.logger.removeHandler(runtime.handler)
    try:
        runtime.shutdown()
    finally:
        runtime.handler.close()


__all__ = ["RuntimeSnapshot", "get_hook", "init", "inspect_runtime", "shutdown"]
