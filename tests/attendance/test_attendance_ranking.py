from __future__ import annotations

import pytest

from src.campus_od.campus_od.attendance.ranking import rank_label
from src.campus_od.campus_od.attendance.service import AttendanceService
from src.campus_od.campus_od.core.enums import InstitutionType, ShiftSlot, StaffRole
from src.campus_od.campus_od.core.exceptions import AuthorizationError, ValidationError
from src.campus_od.campus_od.users.model import AttendanceSnapshot, Staff, Student


def _student(user_id: int, name: str, present: int, total: int, department: str = "Computer Science") -> Student:
    return Student(
        user_id=user_id,
        name=name,
        email=f"{name.lower()}@example.com",
        institution_type=InstitutionType.COLLEGE,
        reg_no=f"CS{user_id:06d}",
        department=department,
        degree_name="B.Tech",
        stream="CSE",
        shift=ShiftSlot.MORNING,
        year=2,
        attendance=AttendanceSnapshot(total_days=total, present_days=present, absent_days=total - present),
    )


def _staff(role: StaffRole = StaffRole.TUTOR) -> Staff:
    return Staff(
        user_id=100,
        name="Priya",
        email="tutor@example.com",
        institution_type=InstitutionType.COLLEGE,
        staff_id="CST001",
        department="Computer Science",
        shift=ShiftSlot.MORNING,
        staff_role=role,
    )


class FakeUsersRepo:
    def __init__(self, students):
        self._students = list(students)

    def list_students(self, *, department=None):
        return [s for s in self._students if not department or s.department == department]


@pytest.mark.parametrize(
    "pct,label",
    [
        (100.0, "Excellent"),
        (95.0, "Excellent"),
        (94.9, "Good"),
        (85.0, "Good"),
        (84.9, "Average"),
        (75.0, "Average"),
        (74.9, "Below Average"),
        (0.0, "Below Average"),
    ],
)
def test_rank_label_boundaries(pct, label):
    assert rank_label(pct) == label


def test_summary_for_student():
    svc = AttendanceService(FakeUsersRepo([]))
    john = _student(1, "John", present=162, total=180)

    summary = svc.my_summary(john)

    assert summary["percentage"] == 90.0
    assert summary["rank"] == "Good"
    assert summary["absentDays"] == 18


def test_summary_for_new_student_is_zero():
    svc = AttendanceService(FakeUsersRepo([]))

    summary = svc.my_summary(_student(1, "New", present=0, total=0))

    assert summary["percentage"] == 0.0
    assert summary["rank"] == "Below Average"


def test_staff_has_no_attendance_summary():
    svc = AttendanceService(FakeUsersRepo([]))

    with pytest.raises(AuthorizationError):
        svc.my_summary(_staff())


def test_top_students_ordered_by_percentage_then_present_days():
    students = [
        _student(1, "John", present=162, total=180),
        _student(2, "Alice", present=175, total=180),
        _student(3, "Bob", present=90, total=100),
        _student(4, "Jane", present=150, total=180),
    ]
    svc = AttendanceService(FakeUsersRepo(students))

    top = svc.top_students(_staff(), limit=3)

    # John and Bob tie at 90%, John has more present days
    assert [s.name for s in top] == ["Alice", "John", "Bob"]


def test_top_students_filters_department():
    students = [
        _student(1, "John", present=162, total=180),
        _student(2, "Jane", present=170, total=180, department="Electronics"),
    ]
    svc = AttendanceService(FakeUsersRepo(students))

    top = svc.top_students(_staff(StaffRole.HOD), department="Electronics")

    assert [s.name for s in top] == ["Jane"]


def test_top_students_only_for_staff_and_positive_limit():
    student = _student(1, "John", present=162, total=180)
    svc = AttendanceService(FakeUsersRepo([student]))

    with pytest.raises(AuthorizationError):
        svc.top_students(student)
    with pytest.raises(ValidationError):
        svc.top_students(_staff(), limit=0)
