from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import LeaveType, ODCategory, ODStatus
from .model import ODRequest


class ODRequestRepository(Protocol):
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
        """Insert a new request in the pending state and return its id."""

        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[ODRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        student_id: Optional[int] = None,
        statuses: Optional[Iterable[ODStatus]] = None,
        limit: int = 200,
    ) -> Sequence[ODRequest]:
        """Newest first."""

        raise NotImplementedError

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
        """Store a decision only if the request is still in `expected_status`."""

        raise NotImplementedError

    def count_by_status(self) -> dict[ODStatus, int]:
        raise NotImplementedError
