"""Breadcrumb records attached to events for additional error context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(slots=True, frozen=True)
class Breadcrumb:
    """One contextual record preceding an event."""

    timestamp: datetime
    type: str
    message: str
    category: str
    level: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "timestamp": int(self.timestamp.astimezone(timezone.utc).timestamp()),
            "type": self.type,
            "message": self.message,
            "category": self.category,
            "level": self.level,
        }
        if self.data is not None:
            data["data"] = self.data
        return data


@dataclass(slots=True, frozen=True)
class Breadcrumbs:
    """Ordered breadcrumb collection."""

    values: tuple[Breadcrumb, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))

    @property
    def interface(self) -> str:
        """Return the event attribute the collection is stored under."""

        return "breadcrumbs"

    def to_dict(self) -> dict[str, Any]:
        return {"values": [crumb.to_dict() for crumb in self.values]}


__all__ = ["Breadcrumb", "Breadcrumbs"]
