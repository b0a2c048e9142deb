"""Demo accounts, events and OD requests for local development.

Works against any repository implementation, so the same data seeds the
in-memory backend and a fresh MySQL database. Seeding is idempotent: accounts
are keyed by email and the rest is only added when the tables are empty.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone

from werkzeug.security import generate_password_hash

from ..core.enums import InstitutionType, LeaveType, ODCategory, ODStatus, ShiftSlot, StaffRole
from ..events.repository import EventRepository
from ..od_requests.repository import ODRequestRepository
from ..users.model import AttendanceSnapshot
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

_STUDENTS = [
    ("John Doe", "john@example.com", "CS2021010", "Computer Science", (180, 162, 18, 12)),
    ("Jane Smith", "jane@example.com", "EE2021015", "Electronics", (180, 150, 30, 8)),
    ("Alice Johnson", "alice@example.com", "CS2021001", "Computer Science", (180, 175, 5, 25)),
    ("Bob Wilson", "bob@example.com", "EE2021002", "Electronics", (180, 172, 8, 22)),
]

_STAFF = [
    ("Priya Raman", "tutor@example.com", "CST001", StaffRole.TUTOR),
    ("Dr. Arun Kumar", "hod@example.com", "CSH001", StaffRole.HOD),
]


def seed_demo(users: UserRepository, events: EventRepository, od_requests: ODRequestRepository) -> None:
    password_hash = generate_password_hash(DEMO_PASSWORD)
    student_ids: dict[str, int] = {}

    for name, email, reg_no, department, (total, present, absent, leaves) in _STUDENTS:
        existing = users.get_by_email(email)
        if existing:
            student_ids[email] = existing.user_id
            continue
        student_ids[email] = users.create_student(
            name=name,
            email=email,
            password_hash=password_hash,
            institution_type=InstitutionType.COLLEGE,
            reg_no=reg_no,
            department=department,
            degree_name="Bachelor of Technology (B.Tech)",
            stream="Computer Science and Engineering",
            shift=ShiftSlot.MORNING,
            year=3,
            attendance=AttendanceSnapshot(
                total_days=total,
                present_days=present,
                absent_days=absent,
                leaves_remaining=leaves,
            ),
        )

    for name, email, staff_id, staff_role in _STAFF:
        if users.get_by_email(email):
            continue
        users.create_staff(
            name=name,
            email=email,
            password_hash=password_hash,
            institution_type=InstitutionType.COLLEGE,
            staff_id=staff_id,
            department="Computer Science",
            shift=ShiftSlot.MORNING,
            staff_role=staff_role,
        )

    if not events.list_events():
        events.create(
            title="Annual Sports Day",
            description="Inter-department sports competition",
            event_date=date(2025, 2, 15),
            event_time=time(9, 0),
            department="All Departments",
            created_by="admin",
            created_at=datetime(2025, 1, 10, 8, 0, tzinfo=timezone.utc),
        )
        events.create(
            title="Technical Symposium",
            description="Technical paper presentations and competitions",
            event_date=date(2025, 2, 20),
            event_time=time(10, 0),
            department="Computer Science",
            created_by="CST001",
            created_at=datetime(2025, 1, 12, 10, 0, tzinfo=timezone.utc),
        )

    if not od_requests.list_requests(limit=1):
        od_requests.create(
            student_id=student_ids["john@example.com"],
            student_name="John Doe",
            title="Medical Appointment",
            description="Regular health checkup",
            leave_type=LeaveType.MEDICAL,
            category=ODCategory.OTHER,
            department="Computer Science",
            event_name=None,
            date_from=date(2025, 1, 20),
            date_to=date(2025, 1, 20),
            file_url=None,
            submitted_at=datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc),
        )
        family_id = od_requests.create(
            student_id=student_ids["jane@example.com"],
            student_name="Jane Smith",
            title="Family Function",
            description="Sister's wedding ceremony",
            leave_type=LeaveType.PERSONAL,
            category=ODCategory.OTHER,
            department="Electronics",
            event_name=None,
            date_from=date(2025, 1, 25),
            date_to=date(2025, 1, 27),
            file_url=None,
            submitted_at=datetime(2025, 1, 18, 14, 0, tzinfo=timezone.utc),
        )
        od_requests.decide(
            request_id=family_id,
            expected_status=ODStatus.PENDING,
            status=ODStatus.APPROVED_BY_TUTOR,
            tutor_comments="Approved for family emergency",
            hod_comments=None,
            decided_at=datetime(2025, 1, 19, 10, 0, tzinfo=timezone.utc),
        )

    logger.info("demo data ready")
