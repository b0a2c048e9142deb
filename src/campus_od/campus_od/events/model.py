from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Mapping

from ..common.datetime_utils import from_iso, parse_iso_date, to_iso


@dataclass(frozen=True)
class Event:
    """Campus event. Created and maintained by staff, read-only for students."""

    event_id: int
    title: str
    description: str
    date: date
    time: time
    department: str
    created_by: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "title": self.title,
            "description": self.description,
            "date": self.date.strftime("%Y-%m-%d"),
            "time": self.time.strftime("%H:%M"),
            "department": self.department,
            "createdBy": self.created_by,
            "createdAt": to_iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Event":
        return cls(
            event_id=int(data["id"]),
            title=data["title"],
            description=data["description"],
            date=parse_iso_date(data["date"]),
            time=datetime.strptime(data["time"], "%H:%M").time(),
            department=data["department"],
            created_by=data["createdBy"],
            created_at=from_iso(data["createdAt"]),
        )
