"""Port describing the client that delivers events to the error tracker."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from lib_log_sentry.domain.events import RemoteEvent


@runtime_checkable
class TransportPort(Protocol):
    """Submit events to a remote error-tracking service."""

    def capture_event(self, event: RemoteEvent, *, hint: dict[str, Any] | None = None, scope: Any | None = None) -> str | None:
        """Submit ``event`` and return the remote event identifier, if any.

        ``scope`` is the submission identity; ``None`` selects the transport's
        ambient current scope.
        """

    def flush(self, timeout: float) -> None:
        """Wait up to ``timeout`` seconds for buffered events to be sent."""

    def close(self, timeout: float | None = None) -> None:
        """Flush and release the underlying client."""


__all__ = ["TransportPort"]
