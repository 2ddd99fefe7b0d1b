"""Capabilities the stack trace resolver probes on each link of an error chain.

Purpose
-------
Name the three duck-typed capabilities an error may offer so resolution can
dispatch on protocol satisfaction rather than on concrete exception types.

Contents
--------
* :class:`HasNativeTrace` - ``get_stacktrace()`` returns a ready :class:`Stacktrace`.
* :class:`HasRawTrace` - ``stack_trace()`` returns raw frames, newest first.
* :class:`HasCause` - ``cause()`` returns the wrapped error.

System Role
-----------
Consumed by :mod:`lib_log_sentry.application.use_cases.resolve_stacktrace`.
:class:`lib_log_sentry.domain.errors.TracedError` implements the latter two.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from lib_log_sentry.domain.stacktrace import Stacktrace


@runtime_checkable
class HasNativeTrace(Protocol):
    def get_stacktrace(self) -> Stacktrace | None: ...


@runtime_checkable
class HasRawTrace(Protocol):
    def stack_trace(self) -> Sequence[Any]: ...


@runtime_checkable
class HasCause(Protocol):
    def cause(self) -> BaseException | None: ...


__all__ = ["HasCause", "HasNativeTrace", "HasRawTrace"]
