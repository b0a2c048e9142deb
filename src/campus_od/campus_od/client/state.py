from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..events.model import Event
from ..od_requests.model import ODRequest
from ..users.model import Student


@dataclass
class AppState:
    """Domain data the client currently shows, kept apart from the session."""

    events: list[Event] = field(default_factory=list)
    od_requests: list[ODRequest] = field(default_factory=list)
    top_students: list[Student] = field(default_factory=list)
    loading: set[str] = field(default_factory=set)
    error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return bool(self.loading)

    def is_loading_kind(self, kind: str) -> bool:
        return kind in self.loading

    def set_events(self, events: Iterable[Event]) -> None:
        self.events = list(events)

    def add_event(self, event: Event) -> None:
        self.events.append(event)

    def replace_event(self, event: Event) -> None:
        self.events = [event if e.event_id == event.event_id else e for e in self.events]

    def remove_event(self, event_id: int) -> None:
        self.events = [e for e in self.events if e.event_id != event_id]

    def set_od_requests(self, requests: Iterable[ODRequest]) -> None:
        self.od_requests = list(requests)

    def add_od_request(self, request: ODRequest) -> None:
        # newest first, like the server listing
        self.od_requests.insert(0, request)

    def update_od_request(self, request: ODRequest) -> None:
        self.od_requests = [request if r.request_id == request.request_id else r for r in self.od_requests]

    def set_top_students(self, students: Iterable[Student]) -> None:
        self.top_students = list(students)

    def set_loading(self, loading: bool, kind: str = "default") -> None:
        """Track loads per kind so one finishing load does not hide another."""

        if loading:
            self.loading.add(kind)
        else:
            self.loading.discard(kind)

    def set_error(self, error: Optional[str]) -> None:
        self.error = error

    def reset(self) -> None:
        self.events = []
        self.od_requests = []
        self.top_students = []
        self.loading = set()
        self.error = None
