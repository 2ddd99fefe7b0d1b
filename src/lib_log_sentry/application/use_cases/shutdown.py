"""Shutdown orchestration for the Sentry bridge.

Purpose
-------
Provide a unified shutdown routine that drains in-flight hook calls and then
closes the transport. :meth:`TransportPort.close` flushes buffered events
before releasing the client, so no separate flush call is made.
"""

from __future__ import annotations

from typing import Callable

from lib_log_sentry.application.ports.transport import TransportPort


def create_shutdown(
    *,
    drain: Callable[[], None] | None,
    transport: TransportPort | None,
    timeout: float | None,
) -> Callable[[], None]:
    """Return a callable performing the shutdown sequence."""

    def shutdown() -> None:
        """Drain hook calls, then close (and thereby flush) the transport."""
        if drain is not None:
            drain()
        if transport is not None:
            transport.close(timeout)

    return shutdown


__all__ = ["create_shutdown"]
