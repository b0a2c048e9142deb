from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import from_iso, parse_iso_date, to_iso
from ..core.enums import LeaveType, ODCategory, ODStatus


@dataclass(frozen=True)
class ODRequest:
    request_id: int
    student_id: int
    student_name: str
    title: str
    description: str
    leave_type: LeaveType
    category: ODCategory
    department: str
    date_from: date
    date_to: date
    status: ODStatus
    submitted_at: datetime
    event_name: Optional[str] = None
    file_url: Optional[str] = None
    tutor_comments: Optional[str] = None
    hod_comments: Optional[str] = None
    decided_at: Optional[datetime] = None

    @property
    def days(self) -> int:
        return (self.date_to - self.date_from).days + 1

    def to_dict(self) -> dict:
        out = {
            "id": self.request_id,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "title": self.title,
            "description": self.description,
            "type": self.leave_type.value,
            "category": self.category.value,
            "department": self.department,
            "dateFrom": self.date_from.strftime("%Y-%m-%d"),
            "dateTo": self.date_to.strftime("%Y-%m-%d"),
            "status": self.status.value,
            "submittedAt": to_iso(self.submitted_at),
        }
        optional = {
            "eventName": self.event_name,
            "fileUrl": self.file_url,
            "tutorComments": self.tutor_comments,
            "hodComments": self.hod_comments,
            "decidedAt": to_iso(self.decided_at) if self.decided_at else None,
        }
        out.update({k: v for k, v in optional.items() if v is not None})
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ODRequest":
        return cls(
            request_id=int(data["id"]),
            student_id=int(data["studentId"]),
            student_name=data["studentName"],
            title=data["title"],
            description=data["description"],
            leave_type=LeaveType(data["type"]),
            category=ODCategory(data["category"]),
            department=data["department"],
            date_from=parse_iso_date(data["dateFrom"]),
            date_to=parse_iso_date(data["dateTo"]),
            status=ODStatus(data["status"]),
            submitted_at=from_iso(data["submittedAt"]),
            event_name=data.get("eventName"),
            file_url=data.get("fileUrl"),
            tutor_comments=data.get("tutorComments"),
            hod_comments=data.get("hodComments"),
            decided_at=from_iso(data["decidedAt"]) if data.get("decidedAt") else None,
        )
