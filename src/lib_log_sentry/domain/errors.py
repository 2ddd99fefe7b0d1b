"""Exceptions that remember where they were created.

:class:`TracedError` records the raw call stack at construction time and
exposes it through ``stack_trace()``, together with an explicit ``cause()``.
Both are the capabilities the stack trace resolver looks for on an error
chain, so wrapping a low-level error keeps the location of the wrap.
"""

from __future__ import annotations

import sys
import traceback


class ConfigurationError(ValueError):
    """Raised when the hook or its transport cannot be constructed."""


class TracedError(Exception):
    """Exception carrying the raw stack captured when it was created.

    The stack is stored newest frame first.

    Examples
    --------
    >>> err = TracedError("boom")
    >>> err.stack_trace()[0].name
    '<module>'
    >>> err.cause() is None
    True
    """

    def __init__(self, message: str, *, cause: BaseException | None = None, skip: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self._cause = cause
        # frame 0 is this __init__, frame 1 the constructor call site
        frame = sys._getframe(1 + skip)
        self._stack = list(reversed(traceback.extract_stack(frame)))
        if cause is not None:
            self.__cause__ = cause

    def stack_trace(self) -> list[traceback.FrameSummary]:
        return list(self._stack)

    def cause(self) -> BaseException | None:
        return self._cause

    def __str__(self) -> str:
        if self._cause is None:
            return self.message
        return f"{self.message}: {self._cause}"


def wrap(error: BaseException | None, message: str) -> TracedError | None:
    """Annotate ``error`` with ``message`` and the stack at the call site.

    Returns ``None`` when ``error`` is ``None`` so call sites can wrap
    unconditionally.
    """

    if error is None:
        return None
    return TracedError(message, cause=error, skip=1)


__all__ = ["ConfigurationError", "TracedError", "wrap"]
