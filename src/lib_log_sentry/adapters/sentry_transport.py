"""Sentry transport adapter implementing :class:`TransportPort`.

Purpose
-------
Wrap :class:`sentry_sdk.Client` so the hook submits :class:`RemoteEvent`
objects without touching the SDK directly.

Contents
--------
* :func:`create_client` - build a standalone client from a DSN.
* :class:`SentryTransport` - event submission, flushing and shutdown.

System Role
-----------
Default transport assembled by :meth:`SentryHook.from_dsn` and by
:func:`lib_log_sentry.runtime.init`. The client is created with default
integrations disabled so the SDK does not install its own logging handler
next to ours.
"""

from __future__ import annotations

import logging
from typing import Any

import sentry_sdk
from sentry_sdk.utils import BadDsn

from lib_log_sentry.application.ports.transport import TransportPort
from lib_log_sentry.domain.errors import ConfigurationError
from lib_log_sentry.domain.events import RemoteEvent

logger = logging.getLogger(__name__)


def create_client(dsn: str | None, **options: Any) -> sentry_sdk.Client:
    """Return a standalone Sentry client for ``dsn``.

    An empty or ``None`` DSN yields a client that accepts events and drops
    them, which keeps local runs and tests offline.

    Raises
    ------
    ConfigurationError
        When the SDK rejects ``dsn``.
    """

    options.setdefault("default_integrations", False)
    try:
        return sentry_sdk.Client(dsn=dsn or None, **options)
    except BadDsn as exc:
        raise ConfigurationError(f"Invalid Sentry DSN: {exc}") from exc


class SentryTransport(TransportPort):
    """Submit events through a :class:`sentry_sdk.Client`."""

    def __init__(self, client: sentry_sdk.Client, *, timeout: float = 0.1) -> None:
        """Bind the transport to ``client``.

        Parameters
        ----------
        client:
            Initialised SDK client.
        timeout:
            Default deadline (seconds) for :meth:`close` when called without
            an explicit timeout.
        """
        self._client = client
        self._timeout = timeout

    @classmethod
    def from_dsn(cls, dsn: str | None, *, timeout: float = 0.1, **options: Any) -> "SentryTransport":
        return cls(create_client(dsn, **options), timeout=timeout)

    @property
    def client(self) -> sentry_sdk.Client:
        return self._client

    def capture_event(self, event: RemoteEvent, *, hint: dict[str, Any] | None = None, scope: Any | None = None) -> str | None:
        """Submit ``event``; ``scope=None`` falls back to the SDK's current scope."""
        if scope is None:
            scope = sentry_sdk.get_current_scope()
        return self._client.capture_event(event.to_payload(), hint=hint, scope=scope)

    def flush(self, timeout: float) -> None:
        self._client.flush(timeout=timeout)

    def close(self, timeout: float | None = None) -> None:
        effective = timeout if timeout is not None else self._timeout
        logger.debug("Closing Sentry client (timeout=%s)", effective)
        self._client.close(timeout=effective)


__all__ = ["SentryTransport", "create_client"]
