"""Saved filter and date range entities."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range; either bound may be open."""

    start: Optional[date]
    end: Optional[date]

    def contains(self, value: date) -> bool:
        if self.start is not None and value < self.start:
            return False
        if self.end is not None and value > self.end:
            return False
        return True

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }


@dataclass
class SavedFilter:
    """
    A named list-screen filter configuration, scoped to one entity name.

    ``config`` holds the search term, active field filters, selected
    period preset, custom date bounds and sort order as plain JSON.
    """

    entity_name: str
    name: str
    config: dict[str, Any] = field(default_factory=dict)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "entity_name": self.entity_name,
            "name": self.name,
            "config": self.config,
            "created_at": self.created_at.isoformat() + "Z",
        }
