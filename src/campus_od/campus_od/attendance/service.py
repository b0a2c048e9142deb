from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_TOP_STUDENTS
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import Account, Staff, Student
from ..users.repository import UserRepository
from .ranking import attendance_percentage, rank_label


class AttendanceService:
    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def summary_for(student: Student) -> dict:
        snap = student.attendance
        pct = attendance_percentage(snap)
        return {
            "studentId": student.user_id,
            "totalDays": snap.total_days,
            "presentDays": snap.present_days,
            "absentDays": snap.absent_days,
            "percentage": round(pct, 1),
            "rank": rank_label(pct),
            "leavesRemaining": snap.leaves_remaining,
        }

    def my_summary(self, actor: Account) -> dict:
        if not isinstance(actor, Student):
            raise AuthorizationError("Only students have an attendance record")
        return self.summary_for(actor)

    def top_students(
        self,
        actor: Account,
        *,
        limit: int = DEFAULT_TOP_STUDENTS,
        department: Optional[str] = None,
    ) -> Sequence[Student]:
        """Students ordered by attendance percentage, best first."""

        if not isinstance(actor, Staff):
            raise AuthorizationError("Only staff can view top students")
        if int(limit) <= 0:
            raise ValidationError("Limit must be positive")

        students = list(self._users.list_students(department=department))
        students.sort(key=lambda s: (-attendance_percentage(s.attendance), -s.attendance.present_days, s.name))
        return students[: int(limit)]
