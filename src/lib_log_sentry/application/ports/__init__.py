"""Protocols separating the hook from its collaborators."""

from __future__ import annotations

from .errors import HasCause, HasNativeTrace, HasRawTrace
from .formatter import FormatterPort
from .transport import TransportPort

__all__ = [
    "FormatterPort",
    "HasCause",
    "HasNativeTrace",
    "HasRawTrace",
    "TransportPort",
]
