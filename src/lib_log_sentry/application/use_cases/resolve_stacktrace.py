"""Stack trace resolution for error chains and for the current call stack.

Purpose
-------
Find the most informative stack trace available for an error and convert raw
Python frames into the native :class:`Stacktrace` value object.

Contents
--------
* :func:`find_stacktrace` - walk a chain of wrapped errors.
* :func:`convert_stacktrace` - raw frames (newest first) to a native trace
  (oldest first).
* :func:`capture_stacktrace` - ambient capture of the running call stack.

System Role
-----------
Used by :class:`lib_log_sentry.hook.SentryHook` when stack traces are enabled
and available to host code that wants a trace for a wrapped error.

Resolution Rules
----------------
Every link of the chain is probed; a later (more deeply wrapped) link that
offers a trace replaces whatever an earlier link offered, so the deepest
trace-capable link wins. A link offering ``get_stacktrace()`` supplies a ready
native trace. Otherwise ``stack_trace()`` or a Python ``__traceback__`` supply
raw frames. The walk continues through ``cause()`` or ``__cause__`` and stops
at the first link exposing neither.
"""

from __future__ import annotations

import inspect
import linecache
import logging
import os
import sys
import traceback
import types
from collections.abc import Iterable, Sequence
from typing import Any

from lib_log_sentry.application.ports.errors import HasCause, HasNativeTrace, HasRawTrace
from lib_log_sentry.domain.stacktrace import Frame, Stacktrace

logger = logging.getLogger(__name__)


def find_stacktrace(
    error: BaseException | None,
    *,
    context_lines: int = 0,
    in_app_prefixes: Sequence[str] = (),
) -> Stacktrace | None:
    """Return the trace of the deepest trace-capable link of ``error``'s chain.

    Parameters
    ----------
    error:
        Head of the error chain; ``None`` yields ``None``.
    context_lines:
        Source lines to record above and below each converted frame.
    in_app_prefixes:
        Module (or path) prefixes marking converted frames as ``in_app``.

    Returns
    -------
    Stacktrace | None
        Native trace ordered oldest call first, or ``None`` when no link of
        the chain exposes a trace.

    Examples
    --------
    >>> find_stacktrace(None) is None
    True
    >>> find_stacktrace(ValueError("never raised")) is None
    True
    """

    stacktrace: Stacktrace | None = None
    raw_frames: Sequence[Any] | None = None
    seen: set[int] = set()
    current: Any = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, HasNativeTrace):
            stacktrace = current.get_stacktrace()
            raw_frames = None
        else:
            raw = _raw_frames_of(current)
            if raw is not None:
                stacktrace = None
                raw_frames = raw
        current = _cause_of(current)

    if raw_frames is not None:
        stacktrace = convert_stacktrace(raw_frames, context_lines=context_lines, in_app_prefixes=in_app_prefixes)
    return stacktrace


def convert_stacktrace(
    raw_frames: Iterable[Any],
    *,
    context_lines: int = 0,
    in_app_prefixes: Sequence[str] = (),
) -> Stacktrace:
    """Convert raw frames captured newest first into a trace ordered oldest first.

    Accepted raw frames are :class:`types.TracebackType`,
    :class:`types.FrameType`, :class:`inspect.FrameInfo` and
    :class:`traceback.FrameSummary`. Anything else is skipped.

    Examples
    --------
    >>> import traceback
    >>> newest_first = [traceback.FrameSummary('b.py', 2, 'inner'), traceback.FrameSummary('a.py', 1, 'outer')]
    >>> [frame.function for frame in convert_stacktrace(newest_first).frames]
    ['outer', 'inner']
    """

    frames: list[Frame] = []
    for raw in raw_frames:
        frame = _resolve_frame(raw, context_lines=context_lines, in_app_prefixes=in_app_prefixes)
        if frame is not None:
            frames.append(frame)
    frames.reverse()
    return Stacktrace(frames=tuple(frames))


def capture_stacktrace(
    *,
    origin: types.FrameType | None = None,
    skip: int = 0,
    context_lines: int = 0,
    in_app_prefixes: Sequence[str] = (),
) -> Stacktrace | None:
    """Capture the running call stack.

    Parameters
    ----------
    origin:
        Innermost frame to start from; defaults to the caller of this function.
    skip:
        Number of innermost frames (starting at ``origin``) to drop.
    context_lines / in_app_prefixes:
        Forwarded to :func:`convert_stacktrace`.

    Returns
    -------
    Stacktrace | None
        ``None`` when ``skip`` drops every frame.
    """

    frame = origin if origin is not None else sys._getframe(1)
    raw: list[types.FrameType] = []
    while frame is not None:
        raw.append(frame)
        frame = frame.f_back
    try:
        remaining = raw[skip:]
        if not remaining:
            return None
        return convert_stacktrace(remaining, context_lines=context_lines, in_app_prefixes=in_app_prefixes)
    finally:
        del raw, frame


def iter_error_chain(error: BaseException | None) -> Iterable[BaseException]:
    """Yield ``error`` and every cause reachable from it, outermost first."""

    seen: set[int] = set()
    current: Any = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = _cause_of(current)


def _raw_frames_of(error: Any) -> Sequence[Any] | None:
    """Return raw frames of ``error`` newest first, or ``None`` when it has none."""

    if isinstance(error, HasRawTrace):
        return error.stack_trace()
    tb = getattr(error, "__traceback__", None)
    if tb is None:
        return None
    entries: list[types.TracebackType] = []
    while tb is not None:
        entries.append(tb)
        tb = tb.tb_next
    entries.reverse()
    return entries


def _cause_of(error: Any) -> Any:
    if isinstance(error, HasCause):
        return error.cause()
    return getattr(error, "__cause__", None)


def _resolve_frame(raw: Any, *, context_lines: int, in_app_prefixes: Sequence[str]) -> Frame | None:
    """Resolve function, module, file and line information for one raw frame."""

    if isinstance(raw, types.TracebackType):
        return _frame_from_code(raw.tb_frame, raw.tb_lineno, raw.tb_lasti, context_lines, in_app_prefixes)
    if isinstance(raw, inspect.FrameInfo):
        return _frame_from_code(raw.frame, raw.lineno, raw.frame.f_lasti, context_lines, in_app_prefixes)
    if isinstance(raw, types.FrameType):
        return _frame_from_code(raw, raw.f_lineno, raw.f_lasti, context_lines, in_app_prefixes)
    if isinstance(raw, traceback.FrameSummary):
        return _build_frame(
            function=raw.name,
            module=None,
            filename=raw.filename,
            lineno=raw.lineno,
            pc=None,
            context_lines=context_lines,
            in_app_prefixes=in_app_prefixes,
            module_globals=None,
        )
    logger.debug("Skipping unsupported raw frame %r", raw)
    return None


def _frame_from_code(
    frame: types.FrameType,
    lineno: int | None,
    pc: int | None,
    context_lines: int,
    in_app_prefixes: Sequence[str],
) -> Frame:
    code = frame.f_code
    module_globals = frame.f_globals
    return _build_frame(
        function=getattr(code, "co_qualname", code.co_name),
        module=module_globals.get("__name__"),
        filename=code.co_filename,
        lineno=lineno,
        pc=pc,
        context_lines=context_lines,
        in_app_prefixes=in_app_prefixes,
        module_globals=module_globals,
    )


def _build_frame(
    *,
    function: str,
    module: str | None,
    filename: str,
    lineno: int | None,
    pc: int | None,
    context_lines: int,
    in_app_prefixes: Sequence[str],
    module_globals: dict[str, Any] | None,
) -> Frame:
    abs_path = filename if filename.startswith("<") else os.path.abspath(filename)
    pre_context: tuple[str, ...] = ()
    context_line: str | None = None
    post_context: tuple[str, ...] = ()
    if context_lines > 0 and lineno is not None:
        pre_context, context_line, post_context = _source_context(filename, lineno, context_lines, module_globals)
    return Frame(
        function=function,
        module=module,
        filename=filename,
        abs_path=abs_path,
        lineno=lineno,
        pc=pc,
        in_app=_is_in_app(module, abs_path, in_app_prefixes),
        pre_context=pre_context,
        context_line=context_line,
        post_context=post_context,
    )


def _source_context(
    filename: str,
    lineno: int,
    context_lines: int,
    module_globals: dict[str, Any] | None,
) -> tuple[tuple[str, ...], str | None, tuple[str, ...]]:
    lines = linecache.getlines(filename, module_globals)
    if not lines or lineno > len(lines):
        return (), None, ()
    index = lineno - 1
    start = max(0, index - context_lines)
    stop = min(len(lines), index + context_lines + 1)
    pre = tuple(line.rstrip("\n") for line in lines[start:index])
    post = tuple(line.rstrip("\n") for line in lines[index + 1 : stop])
    return pre, lines[index].rstrip("\n"), post


def _is_in_app(module: str | None, abs_path: str, in_app_prefixes: Sequence[str]) -> bool:
    for prefix in in_app_prefixes:
        if module is not None and module.startswith(prefix):
            return True
        if abs_path.startswith(prefix):
            return True
    return False


__all__ = ["capture_stacktrace", "convert_stacktrace", "find_stacktrace", "iter_error_chain"]
