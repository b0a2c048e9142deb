from __future__ import annotations

import pytest

from src.campus_od.campus_od.core.enums import InstitutionType, ShiftSlot, StaffRole
from src.campus_od.campus_od.core.exceptions import ValidationError
from src.campus_od.campus_od.users.model import AttendanceSnapshot, Staff, Student, account_from_dict


def test_snapshot_counts_must_add_up():
    with pytest.raises(ValidationError):
        AttendanceSnapshot(total_days=10, present_days=8, absent_days=1)


def test_snapshot_rejects_negative_counts():
    with pytest.raises(ValidationError):
        AttendanceSnapshot(total_days=0, present_days=1, absent_days=-1)


def test_percentage_is_derived_from_counts():
    snap = AttendanceSnapshot(total_days=180, present_days=162, absent_days=18, recorded_percentage=42.0)

    assert snap.percentage == pytest.approx(90.0)
    assert snap.to_dict()["percentage"] == 90.0


def test_percentage_is_zero_without_days():
    assert AttendanceSnapshot.empty().percentage == 0.0


def test_accounts_rebuild_from_wire_shape():
    student = Student(
        user_id=1,
        name="John Doe",
        email="john@example.com",
        institution_type=InstitutionType.COLLEGE,
        reg_no="CS2021010",
        department="Computer Science",
        degree_name="Bachelor of Technology (B.Tech)",
        stream="Computer Science and Engineering",
        shift=ShiftSlot.MORNING,
        year=3,
        attendance=AttendanceSnapshot(total_days=180, present_days=162, absent_days=18, leaves_remaining=12),
    )
    staff = Staff(
        user_id=2,
        name="Dr. Arun Kumar",
        email="hod@example.com",
        institution_type=InstitutionType.COLLEGE,
        staff_id="CSH001",
        department="Computer Science",
        shift=ShiftSlot.MORNING,
        staff_role=StaffRole.HOD,
    )

    assert account_from_dict(student.to_dict()) == student
    assert account_from_dict(staff.to_dict()) == staff
    assert staff.to_dict()["role"] == "staff"
