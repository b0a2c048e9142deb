from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account kind used for authorization."""

    STUDENT = "student"
    STAFF = "staff"


class StaffRole(str, Enum):
    """Staff approval level. HOD ranks above tutor."""

    TUTOR = "tutor"
    HOD = "hod"


class InstitutionType(str, Enum):
    SCHOOL = "school"
    COLLEGE = "college"


class ShiftSlot(str, Enum):
    MORNING = "morning"
    EVENING = "evening"


class ODStatus(str, Enum):
    """States of the OD approval workflow."""

    PENDING = "pending"
    APPROVED_BY_TUTOR = "approved_by_tutor"
    APPROVED_BY_HOD = "approved_by_hod"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in {ODStatus.APPROVED_BY_HOD, ODStatus.REJECTED}


class LeaveType(str, Enum):
    MEDICAL = "medical"
    PERSONAL = "personal"
    OFFICIAL = "official"
    ACADEMIC = "academic"


class ODCategory(str, Enum):
    INTERCOLLEGE = "intercollege"
    INTRACOLLEGE = "intracollege"
    OTHER = "other"


class ODAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
