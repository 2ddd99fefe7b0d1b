"""Use cases built on top of the domain and ports."""

from __future__ import annotations

from .resolve_stacktrace import capture_stacktrace, convert_stacktrace, find_stacktrace, iter_error_chain
from .shutdown import create_shutdown

__all__ = [
    "capture_stacktrace",
    "convert_stacktrace",
    "create_shutdown",
    "find_stacktrace",
    "iter_error_chain",
]
