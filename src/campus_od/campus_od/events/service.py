from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import FieldErrors, parse_date, parse_time
from ..core.constants import UPCOMING_WINDOW_DAYS
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import Account, Staff
from .model import Event
from .repository import EventRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventForm:
    title: str
    description: str
    date: str
    time: str
    department: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EventForm":
        return cls(
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            date=str(data.get("date") or ""),
            time=str(data.get("time") or ""),
            department=str(data.get("department") or ""),
        )


class EventService:
    def __init__(self, events: EventRepository, *, clock: Callable = now_utc):
        self._events = events
        self._clock = clock

    @staticmethod
    def _require_staff(actor: Account) -> Staff:
        if not isinstance(actor, Staff):
            raise AuthorizationError("Only staff can manage events")
        return actor

    @staticmethod
    def _clean(form: EventForm) -> dict:
        errors = FieldErrors()
        errors.check(bool(form.title.strip()), "title", "Title is required")
        errors.check(bool(form.description.strip()), "description", "Description is required")
        errors.check(bool(form.department.strip()), "department", "Department is required")

        event_date = event_time = None
        try:
            event_date = parse_date(form.date, "Date")
        except ValidationError as e:
            errors.add("date", str(e))
        try:
            event_time = parse_time(form.time, "Time")
        except ValidationError as e:
            errors.add("time", str(e))

        errors.raise_if_any()
        return {
            "title": form.title.strip(),
            "description": form.description.strip(),
            "event_date": event_date,
            "event_time": event_time,
            "department": form.department.strip(),
        }

    def list_events(self, *, department: Optional[str] = None) -> Sequence[Event]:
        return self._events.list_events(department=department or None)

    def get_event(self, event_id: int) -> Event:
        event = self._events.get(event_id=int(event_id))
        if not event:
            raise NotFoundError("Event not found")
        return event

    def create_event(self, actor: Account, form: EventForm) -> Event:
        staff = self._require_staff(actor)
        values = self._clean(form)
        event_id = self._events.create(created_by=staff.staff_id, created_at=self._clock(), **values)
        logger.info("event %s created by %s", event_id, staff.staff_id)
        return self.get_event(event_id)

    def update_event(self, actor: Account, event_id: int, form: EventForm) -> Event:
        staff = self._require_staff(actor)
        values = self._clean(form)
        if not self._events.update(event_id=int(event_id), **values):
            raise NotFoundError("Event not found")
        logger.info("event %s updated by %s", event_id, staff.staff_id)
        return self.get_event(event_id)

    def delete_event(self, actor: Account, event_id: int) -> None:
        staff = self._require_staff(actor)
        if not self._events.delete(event_id=int(event_id)):
            raise NotFoundError("Event not found")
        logger.info("event %s deleted by %s", event_id, staff.staff_id)

    def summary(self, *, today: Optional[date] = None, department: Optional[str] = None) -> dict:
        today = today or self._clock().date()
        week_end = today + timedelta(days=UPCOMING_WINDOW_DAYS)
        events = self.list_events(department=department)
        return {
            "upcoming": sum(1 for e in events if e.date > today),
            "thisWeek": sum(1 for e in events if today < e.date <= week_end),
            "total": len(events),
        }
