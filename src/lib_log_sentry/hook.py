"""Hook forwarding log entries to Sentry.

Purpose
-------
Implement the two operations a logging framework needs from a hook:
:meth:`SentryHook.fire` (handle one entry) and :meth:`SentryHook.levels`
(which severities to route), plus the asynchronous-mode :meth:`flush` barrier.

Contents
--------
* :class:`SentryHook` - configuration holder and entry handler.
* :func:`new_sentry_hook` / :func:`new_async_sentry_hook` - DSN-based
  constructors.
* ``_WaitGroup`` - counter tracking in-flight :meth:`fire` calls.

System Role
-----------
Central piece of the package. :class:`SentryLoggingHandler` feeds it from
stdlib logging; :func:`lib_log_sentry.runtime.init` wires it to a logger.

Failure Policy
--------------
:meth:`fire` never raises. Formatter failures produce an empty message body.
An error chain that cannot be rendered or traced costs the event its
breadcrumbs or falls back to the current stack. Transport failures are dropped.
Every swallowed failure is logged on this module's logger at DEBUG level.
"""

from __future__ import annotations

import logging
import sys
import threading
import types
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from lib_log_sentry.adapters.formatters import JSONFormatter
from lib_log_sentry.adapters.sentry_transport import SentryTransport
from lib_log_sentry.application.ports.formatter import FormatterPort
from lib_log_sentry.application.ports.transport import TransportPort
from lib_log_sentry.application.use_cases.resolve_stacktrace import capture_stacktrace, find_stacktrace, iter_error_chain
from lib_log_sentry.domain.breadcrumbs import Breadcrumb, Breadcrumbs
from lib_log_sentry.domain.configuration import HookConfig, StackTraceConfiguration
from lib_log_sentry.domain.entry import LogEntry
from lib_log_sentry.domain.events import ExceptionDescriptor, RemoteEvent
from lib_log_sentry.domain.levels import LogLevel, to_sentry_level
from lib_log_sentry.domain.stacktrace import Stacktrace

logger = logging.getLogger(__name__)


class _WaitGroup:
    """Count outstanding work and let callers wait for it to reach zero."""

    def __init__(self) -> None:
        self._count = 0
        self._cond = threading.Condition()

    def add(self, delta: int = 1) -> None:
        with self._cond:
            self._count += delta
            if self._count < 0:
                raise ValueError("negative wait group counter")
            if self._count == 0:
                self._cond.notify_all()

    def done(self) -> None:
        self.add(-1)

    def wait(self) -> None:
        with self._cond:
            while self._count:
                self._cond.wait()


class SentryHook:
    """Forward log entries to a transport as Sentry events.

    Parameters
    ----------
    transport:
        Implementation of :class:`TransportPort`, typically
        :class:`SentryTransport`.
    timeout:
        Seconds granted to the transport when the hook is closed.
    flush_timeout:
        Seconds passed to ``transport.flush`` after every event.
    levels:
        Severities routed to the hook. Defaults to WARN, FATAL, ERROR, PANIC.
    level:
        Severity threshold kept on :attr:`config`. It does not change
        :meth:`levels` and :meth:`fire` does not filter on it.
    tags:
        Tags attached to every event.
    formatter:
        :class:`FormatterPort` rendering the event body. Defaults to
        :class:`JSONFormatter`.
    stacktrace:
        :class:`StackTraceConfiguration`; stack traces are disabled by default.
    scope:
        Submission scope used when :meth:`fire` is not given one. ``None``
        lets the transport use its ambient current scope.
    asynchronous:
        Track in-flight :meth:`fire` calls so :meth:`flush` can wait for them.
    """

    def __init__(
        self,
        transport: TransportPort,
        *,
        timeout: float = 0.1,
        flush_timeout: float = 3.0,
        levels: Sequence[LogLevel] | None = None,
        level: LogLevel | str | None = None,
        tags: Mapping[str, str] | None = None,
        formatter: FormatterPort | None = None,
        stacktrace: StackTraceConfiguration | None = None,
        scope: Any | None = None,
        asynchronous: bool = False,
    ) -> None:
        min_level = LogLevel.from_name(level) if isinstance(level, str) else level
        self._config = HookConfig(
            timeout=timeout,
            flush_timeout=flush_timeout,
            levels=HookConfig.resolve_levels(levels),
            level=min_level,
            tags=dict(tags or {}),
            stacktrace=stacktrace if stacktrace is not None else StackTraceConfiguration(),
            asynchronous=asynchronous,
        )
        self._transport = transport
        self._formatter: FormatterPort = formatter if formatter is not None else JSONFormatter()
        self._scope = scope
        self._lock = threading.Lock()
        self._pending = _WaitGroup()

    @classmethod
    def from_dsn(cls, dsn: str | None, *, timeout: float = 0.1, **options: Any) -> "SentryHook":
        """Create a hook with a fresh :class:`SentryTransport` for ``dsn``.

        Raises
        ------
        ConfigurationError
            When the DSN is rejected by the SDK.
        """
        transport = SentryTransport.from_dsn(dsn, timeout=timeout)
        return cls(transport, timeout=timeout, **options)

    @property
    def config(self) -> HookConfig:
        return self._config

    @property
    def transport(self) -> TransportPort:
        return self._transport

    @property
    def formatter(self) -> FormatterPort:
        return self._formatter

    @property
    def asynchronous(self) -> bool:
        return self._config.asynchronous

    def levels(self) -> list[LogLevel]:
        """Return the configured levels."""

        return list(self._config.levels)

    def fire(self, entry: LogEntry, *, scope: Any | None = None) -> None:
        """Send ``entry`` to the transport. Never raises.

        Parameters
        ----------
        entry:
            Log entry to report.
        scope:
            Submission scope for this call; overrides the hook's scope.
        """

        origin = sys._getframe(1)
        try:
            if not self._config.asynchronous:
                self._fire(entry, scope, origin)
                return
            with self._lock:
                self._pending.add()
            try:
                self._fire(entry, scope, origin)
            finally:
                self._pending.done()
        finally:
            del origin

    def flush(self) -> None:
        """Wait for in-flight :meth:`fire` calls; a no-op unless asynchronous.

        While waiting the hook lock is held, so new :meth:`fire` calls block
        until the flush completes.
        """

        if not self._config.asynchronous:
            return
        with self._lock:
            self._pending.wait()

    def close(self, timeout: float | None = None) -> None:
        """Flush pending calls and close the transport."""

        self.flush()
        self._transport.close(timeout if timeout is not None else self._config.timeout)

    def find_stacktrace(self, error: BaseException | None) -> Stacktrace | None:
        """Resolve the trace of ``error``'s chain with this hook's frame settings."""

        settings = self._config.stacktrace
        return find_stacktrace(error, context_lines=settings.context, in_app_prefixes=settings.in_app_prefixes)

    def build_event(self, entry: LogEntry, *, origin: types.FrameType | None = None) -> RemoteEvent:
        """Translate ``entry`` into the :class:`RemoteEvent` :meth:`fire` submits.

        ``origin`` is the frame ambient stack captures start from; it defaults
        to the caller of this method.
        """

        if origin is None:
            origin = sys._getframe(1)
        try:
            return self._build_event(entry, origin)
        finally:
            del origin

    def _fire(self, entry: LogEntry, scope: Any | None, origin: types.FrameType) -> None:
        event = self._build_event(entry, origin)
        effective_scope = scope if scope is not None else self._scope
        try:
            self._transport.capture_event(event, scope=effective_scope)
        except Exception:  # noqa: BLE001
            logger.debug("Transport rejected event; dropping it", exc_info=True)
        try:
            self._transport.flush(self._config.flush_timeout)
        except Exception:  # noqa: BLE001
            logger.debug("Transport flush failed", exc_info=True)

    def _build_event(self, entry: LogEntry, origin: types.FrameType) -> RemoteEvent:
        exceptions: tuple[ExceptionDescriptor, ...] = ()
        settings = self._config.stacktrace
        if settings.applies_to(entry.level):
            trace = self._stacktrace_for(entry, origin, settings)
            if trace is not None:
                exceptions = (self._exception_descriptor(entry, trace, settings),)

        breadcrumbs = None
        if settings.include_error_breadcrumb and entry.error is not None:
            try:
                breadcrumbs = _error_breadcrumbs(entry.error, entry.timestamp, to_sentry_level(entry.level).value)
            except Exception:  # noqa: BLE001
                logger.debug("Could not describe error chain; sending without breadcrumbs", exc_info=True)

        return RemoteEvent(
            message=self._render(entry),
            timestamp=entry.timestamp,
            level=to_sentry_level(entry.level),
            extra=entry.data,
            tags=self._config.tags,
            exceptions=exceptions,
            breadcrumbs=breadcrumbs,
        )

    def _render(self, entry: LogEntry) -> str:
        try:
            return self._formatter.format(entry).decode("utf-8", errors="replace")
        except Exception:  # noqa: BLE001
            logger.debug("Formatter failed; sending an empty message body", exc_info=True)
            return ""

    def _stacktrace_for(self, entry: LogEntry, origin: types.FrameType, settings: StackTraceConfiguration) -> Stacktrace | None:
        if settings.prefer_error_trace and entry.error is not None:
            try:
                trace = self.find_stacktrace(entry.error)
            except Exception:  # noqa: BLE001
                logger.debug("Error chain trace unavailable; capturing the current stack", exc_info=True)
                trace = None
            if trace is not None:
                return trace
        try:
            return capture_stacktrace(
                origin=origin,
                skip=settings.skip,
                context_lines=settings.context,
                in_app_prefixes=settings.in_app_prefixes,
            )
        except Exception:  # noqa: BLE001
            logger.debug("Stack capture failed; sending without a trace", exc_info=True)
            return None

    @staticmethod
    def _exception_descriptor(entry: LogEntry, trace: Stacktrace, settings: StackTraceConfiguration) -> ExceptionDescriptor:
        exc_type = entry.message
        value = entry.caller.file if entry.caller is not None else ""
        if settings.switch_exception_type_and_message:
            exc_type, value = value, exc_type
        if not settings.send_exception_type:
            exc_type = ""
        return ExceptionDescriptor(type=exc_type, value=value, stacktrace=trace)


def _error_breadcrumbs(error: BaseException, timestamp: datetime, level: str) -> Breadcrumbs:
    """Return one breadcrumb per link of ``error``'s chain, innermost first."""

    chain = list(iter_error_chain(error))
    crumbs = [
        Breadcrumb(
            timestamp=timestamp.astimezone(timezone.utc),
            type="error",
            message=str(link),
            category=type(link).__name__,
            level=level,
        )
        for link in reversed(chain)
    ]
    return Breadcrumbs(values=tuple(crumbs))


def new_sentry_hook(dsn: str | None, **options: Any) -> SentryHook:
    """Create a synchronous hook for ``dsn``."""

    return SentryHook.from_dsn(dsn, **options)


def new_async_sentry_hook(dsn: str | None, **options: Any) -> SentryHook:
    """Create a hook for ``dsn`` in asynchronous mode."""

    options["asynchronous"] = True
    return SentryHook.from_dsn(dsn, **options)


__all__ = ["SentryHook", "new_async_sentry_hook", "new_sentry_hook"]
