from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.campus_od.campus_od.core.enums import InstitutionType, ShiftSlot, StaffRole
from src.campus_od.campus_od.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.campus_od.campus_od.events.memory_event_repository import MemoryEventRepository
from src.campus_od.campus_od.events.service import EventForm, EventService
from src.campus_od.campus_od.users.model import AttendanceSnapshot, Staff, Student

NOW = datetime(2025, 2, 10, 9, 0, tzinfo=timezone.utc)


def _staff() -> Staff:
    return Staff(
        user_id=5,
        name="Priya",
        email="tutor@example.com",
        institution_type=InstitutionType.COLLEGE,
        staff_id="CST001",
        department="Computer Science",
        shift=ShiftSlot.MORNING,
        staff_role=StaffRole.TUTOR,
    )


def _student() -> Student:
    return Student(
        user_id=1,
        name="John",
        email="john@example.com",
        institution_type=InstitutionType.COLLEGE,
        reg_no="CS2021010",
        department="Computer Science",
        degree_name="B.Tech",
        stream="CSE",
        shift=ShiftSlot.MORNING,
        year=3,
        attendance=AttendanceSnapshot.empty(),
    )


def _form(**overrides) -> EventForm:
    data = {
        "title": "Technical Symposium",
        "description": "Paper presentations",
        "date": "2025-02-20",
        "time": "10:00",
        "department": "Computer Science",
    }
    data.update(overrides)
    return EventForm.from_mapping(data)


def _service() -> EventService:
    return EventService(MemoryEventRepository(), clock=lambda: NOW)


def test_staff_creates_event():
    svc = _service()

    event = svc.create_event(_staff(), _form())

    assert event.event_id == 1
    assert event.created_by == "CST001"
    assert event.created_at == NOW
    assert event.date == date(2025, 2, 20)
    assert event.to_dict()["time"] == "10:00"


def test_student_cannot_create_event():
    svc = _service()

    with pytest.raises(AuthorizationError):
        svc.create_event(_student(), _form())


def test_create_event_validates_fields():
    svc = _service()

    with pytest.raises(ValidationError) as exc:
        svc.create_event(_staff(), _form(title=" ", date="20-02-2025", time="25:00"))

    assert set(exc.value.fields) == {"title", "date", "time"}


def test_update_and_delete_event():
    svc = _service()
    staff = _staff()
    event = svc.create_event(staff, _form())

    updated = svc.update_event(staff, event.event_id, _form(title="Tech Fest"))
    assert updated.title == "Tech Fest"
    assert updated.created_at == event.created_at

    svc.delete_event(staff, event.event_id)
    with pytest.raises(NotFoundError):
        svc.get_event(event.event_id)


def test_update_unknown_event_raises_not_found():
    svc = _service()

    with pytest.raises(NotFoundError):
        svc.update_event(_staff(), 99, _form())
    with pytest.raises(NotFoundError):
        svc.delete_event(_staff(), 99)


def test_list_filters_by_department_and_sorts_by_date():
    svc = _service()
    staff = _staff()
    svc.create_event(staff, _form(title="Later", date="2025-03-01"))
    svc.create_event(staff, _form(title="Sooner", date="2025-02-12"))
    svc.create_event(staff, _form(title="Other dept", department="Electronics"))

    assert [e.title for e in svc.list_events(department="Computer Science")] == ["Sooner", "Later"]
    assert len(svc.list_events()) == 3


def test_summary_counts_upcoming_and_this_week():
    svc = _service()
    staff = _staff()
    svc.create_event(staff, _form(date="2025-02-01"))  # past
    svc.create_event(staff, _form(date="2025-02-10"))  # today
    svc.create_event(staff, _form(date="2025-02-12"))  # this week
    svc.create_event(staff, _form(date="2025-02-17"))  # last day of the window
    svc.create_event(staff, _form(date="2025-03-01"))  # later

    summary = svc.summary()

    assert summary == {"upcoming": 3, "thisWeek": 2, "total": 5}
