from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional, Sequence

from .model import Event
from .repository import EventRepository


class MemoryEventRepository(EventRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._next_id = 1
        self._events: dict[int, Event] = {}

    def list_events(self, *, department: Optional[str] = None) -> Sequence[Event]:
        items = [e for e in list(self._events.values()) if not department or e.department == department]
        items.sort(key=lambda e: (e.date, e.time, e.event_id))
        return items

    def get(self, *, event_id: int) -> Optional[Event]:
        return self._events.get(int(event_id))

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
        with self._lock:
            event_id = self._next_id
            self._next_id += 1
            self._events[event_id] = Event(
                event_id=event_id,
                title=title,
                description=description,
                date=event_date,
                time=event_time,
                department=department,
                created_by=created_by,
                created_at=created_at,
            )
            return event_id

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
        with self._lock:
            current = self._events.get(int(event_id))
            if not current:
                return False
            self._events[int(event_id)] = replace(
                current,
                title=title,
                description=description,
                date=event_date,
                time=event_time,
                department=department,
            )
            return True

    def delete(self, *, event_id: int) -> bool:
        with self._lock:
            return self._events.pop(int(event_id), None) is not None
