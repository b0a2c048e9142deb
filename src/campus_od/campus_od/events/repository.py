from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from .model import Event


class EventRepository(Protocol):
    def list_events(self, *, department: Optional[str] = None) -> Sequence[Event]:
        """Events ordered by date then time."""

        raise NotImplementedError

    def get(self, *, event_id: int) -> Optional[Event]:
        raise NotImplementedError

    def create(
        self,
        *,
        title: str,
        description: str,
        event_date: date,
        event_time: time,
        department: str,
        created_by: str,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        event_id: int,
        title: str,
        description: str,
        event_date: date,
        event_time: time,
        department: str,
    ) -> bool:
        raise NotImplementedError

    def delete(self, *, event_id: int) -> bool:
        raise NotImplementedError
