from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from ..core.enums import InstitutionType, Role, ShiftSlot, StaffRole
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceSnapshot:
    """Attendance counters of a student at a point in time.

    `percentage` is always derived from the day counts. `recorded_percentage`
    keeps a frozen value imported from an older system and is informational
    only.
    """

    total_days: int
    present_days: int
    absent_days: int
    leaves_remaining: int = 0
    recorded_percentage: Optional[float] = None

    def __post_init__(self):
        counts = (self.total_days, self.present_days, self.absent_days, self.leaves_remaining)
        if any(int(c) < 0 for c in counts):
            raise ValidationError("Attendance counts cannot be negative")
        if self.present_days + self.absent_days != self.total_days:
            raise ValidationError("Present and absent days must add up to total days")

    @classmethod
    def empty(cls) -> "AttendanceSnapshot":
        return cls(total_days=0, present_days=0, absent_days=0, leaves_remaining=0)

    @property
    def percentage(self) -> float:
        if self.total_days == 0:
            return 0.0
        return self.present_days / self.total_days * 100

    def to_dict(self) -> dict:
        return {
            "totalDays": self.total_days,
            "presentDays": self.present_days,
            "absentDays": self.absent_days,
            "percentage": round(self.percentage, 1),
            "leavesRemaining": self.leaves_remaining,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AttendanceSnapshot":
        return cls(
            total_days=int(data["totalDays"]),
            present_days=int(data["presentDays"]),
            absent_days=int(data["absentDays"]),
            leaves_remaining=int(data.get("leavesRemaining", 0)),
        )


@dataclass(frozen=True)
class Student:
    user_id: int
    name: str
    email: str
    institution_type: InstitutionType
    reg_no: str
    department: str
    degree_name: str
    stream: str
    shift: ShiftSlot
    year: int
    attendance: AttendanceSnapshot = field(default_factory=AttendanceSnapshot.empty)

    @property
    def role(self) -> Role:
        return Role.STUDENT

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "institutionType": self.institution_type.value,
            "regNo": self.reg_no,
            "department": self.department,
            "degreeName": self.degree_name,
            "stream": self.stream,
            "shift": self.shift.value,
            "year": self.year,
            "attendance": self.attendance.to_dict(),
        }


@dataclass(frozen=True)
class Staff:
    user_id: int
    name: str
    email: str
    institution_type: InstitutionType
    staff_id: str
    department: str
    shift: ShiftSlot
    staff_role: StaffRole

    @property
    def role(self) -> Role:
        return Role.STAFF

    @property
    def is_hod(self) -> bool:
        return self.staff_role == StaffRole.HOD

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "institutionType": self.institution_type.value,
            "staffId": self.staff_id,
            "department": self.department,
            "shift": self.shift.value,
            "staffRole": self.staff_role.value,
        }


Account = Union[Student, Staff]


def account_from_dict(data: Mapping[str, Any]) -> Account:
    """Rebuild an account from its wire shape, dispatching on `role`."""

    role = Role(data["role"])
    if role == Role.STUDENT:
        return Student(
            user_id=int(data["id"]),
            name=data["name"],
            email=data["email"],
            institution_type=InstitutionType(data["institutionType"]),
            reg_no=data["regNo"],
            department=data["department"],
            degree_name=data["degreeName"],
            stream=data["stream"],
            shift=ShiftSlot(data["shift"]),
            year=int(data["year"]),
            attendance=AttendanceSnapshot.from_dict(data["attendance"]),
        )
    return Staff(
        user_id=int(data["id"]),
        name=data["name"],
        email=data["email"],
        institution_type=InstitutionType(data["institutionType"]),
        staff_id=data["staffId"],
        department=data["department"],
        shift=ShiftSlot(data["shift"]),
        staff_role=StaffRole(data["staffRole"]),
    )
