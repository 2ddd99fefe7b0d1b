"""Native stack trace value objects in the shape Sentry consumes.

Frames are stored oldest call first, the order Sentry renders them in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True, frozen=True)
class Frame:
    """Single resolved stack frame.

    Attributes
    ----------
    function:
        Qualified function name executing in the frame.
    module:
        Dotted module name when it could be resolved, else ``None``.
    filename:
        Path as recorded by the code object.
    abs_path:
        Absolute path of ``filename``.
    lineno:
        Line number being executed.
    pc:
        Bytecode offset of the last executed instruction, when known.
    in_app:
        ``True`` when the frame matched a configured in-app prefix.
    pre_context / context_line / post_context:
        Optional source lines around ``lineno``.
    """

    function: str
    module: str | None
    filename: str
    abs_path: str
    lineno: int | None
    pc: int | None = None
    in_app: bool = False
    pre_context: tuple[str, ...] = ()
    context_line: str | None = None
    post_context: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialise the frame using Sentry's frame attribute names."""

        data: dict[str, Any] = {
            "function": self.function,
            "filename": self.filename,
            "abs_path": self.abs_path,
            "lineno": self.lineno,
            "in_app": self.in_app,
        }
        if self.module is not None:
            data["module"] = self.module
        if self.pc is not None:
            data["instruction_addr"] = hex(self.pc)
        if self.context_line is not None:
            data["pre_context"] = list(self.pre_context)
            data["context_line"] = self.context_line
            data["post_context"] = list(self.post_context)
        return data


@dataclass(slots=True, frozen=True)
class Stacktrace:
    """Ordered collection of frames, oldest call first."""

    frames: tuple[Frame, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "frames", tuple(self.frames))

    def __len__(self) -> int:
        return len(self.frames)

    def to_dict(self) -> dict[str, Any]:
        return {"frames": [frame.to_dict() for frame in self.frames]}


__all__ = ["Frame", "Stacktrace"]
