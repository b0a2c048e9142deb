from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import LeaveType, ODCategory, ODStatus
from .model import ODRequest
from .repository import ODRequestRepository


class MemoryODRequestRepository(ODRequestRepository):
    def __init__(self):
        self._lock = threading.Lock()
        self._next_id = 1
        self._items: dict[int, ODRequest] = {}

    def create(
        self,
        *,
        student_id: int,
        student_name: str,
        title: str,
        description: str,
        leave_type: LeaveType,
        category: ODCategory,
        department: str,
        event_name: Optional[str],
        date_from: date,
        date_to: date,
        file_url: Optional[str],
        submitted_at: datetime,
    ) -> int:
        with self._lock:
            request_id = self._next_id
            self._next_id += 1
            self._items[request_id] = ODRequest(
                request_id=request_id,
                student_id=int(student_id),
                student_name=student_name,
                title=title,
                description=description,
                leave_type=leave_type,
                category=category,
                department=department,
                date_from=date_from,
                date_to=date_to,
                status=ODStatus.PENDING,
                submitted_at=submitted_at,
                event_name=event_name,
                file_url=file_url,
            )
            return request_id

    def get(self, *, request_id: int) -> Optional[ODRequest]:
        return self._items.get(int(request_id))

    def list_requests(
        self,
        *,
        student_id: Optional[int] = None,
        statuses: Optional[Iterable[ODStatus]] = None,
        limit: int = 200,
    ) -> Sequence[ODRequest]:
        allowed = set(statuses) if statuses is not None else None
        items = [
            r
            for r in list(self._items.values())
            if (student_id is None or r.student_id == int(student_id)) and (allowed is None or r.status in allowed)
        ]
        items.sort(key=lambda r: (r.submitted_at, r.request_id), reverse=True)
        return items[: int(limit)]

    def decide(
        self,
        *,
        request_id: int,
        expected_status: ODStatus,
        status: ODStatus,
        tutor_comments: Optional[str],
        hod_comments: Optional[str],
        decided_at: datetime,
    ) -> bool:
        with self._lock:
            req = self._items.get(int(request_id))
            if not req or req.status != expected_status:
                return False
            self._items[int(request_id)] = replace(
                req,
                status=status,
                tutor_comments=tutor_comments,
                hod_comments=hod_comments,
                decided_at=decided_at,
            )
            return True

    def count_by_status(self) -> dict[ODStatus, int]:
        counts = {s: 0 for s in ODStatus}
        for r in list(self._items.values()):
            counts[r.status] += 1
        return counts
