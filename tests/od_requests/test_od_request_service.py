from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone

import pytest

from src.campus_od.campus_od.core.enums import InstitutionType, ODAction, ODStatus, ShiftSlot, StaffRole
from src.campus_od.campus_od.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.campus_od.campus_od.od_requests.memory_od_request_repository import MemoryODRequestRepository
from src.campus_od.campus_od.od_requests.service import ODRequestForm, ODRequestService
from src.campus_od.campus_od.users.model import AttendanceSnapshot, Staff, Student

NOW = datetime(2025, 1, 18, 14, 0, tzinfo=timezone.utc)


def _student(user_id: int = 1, name: str = "John Doe") -> Student:
    return Student(
        user_id=user_id,
        name=name,
        email=f"student{user_id}@example.com",
        institution_type=InstitutionType.COLLEGE,
        reg_no=f"CS{user_id:07d}",
        department="Computer Science",
        degree_name="B.Tech",
        stream="CSE",
        shift=ShiftSlot.MORNING,
        year=3,
        attendance=AttendanceSnapshot.empty(),
    )


def _staff(role: StaffRole) -> Staff:
    return Staff(
        user_id=50 if role == StaffRole.TUTOR else 60,
        name=role.value,
        email=f"{role.value}@example.com",
        institution_type=InstitutionType.COLLEGE,
        staff_id="CST001" if role == StaffRole.TUTOR else "CSH001",
        department="Computer Science",
        shift=ShiftSlot.MORNING,
        staff_role=role,
    )


def _form(**overrides) -> ODRequestForm:
    data = {
        "title": "Symposium",
        "description": "Paper presentation at a national symposium",
        "type": "academic",
        "category": "intercollege",
        "department": "Computer Science",
        "eventName": "Techfest 2025",
        "dateFrom": "2025-01-25",
        "dateTo": "2025-01-27",
    }
    data.update(overrides)
    return ODRequestForm.from_mapping(data)


def _service(repo=None) -> ODRequestService:
    return ODRequestService(repo or MemoryODRequestRepository(), clock=lambda: NOW)


def test_student_submits_pending_request():
    svc = _service()

    req = svc.submit(_student(), _form())

    assert req.status == ODStatus.PENDING
    assert req.student_name == "John Doe"
    assert req.event_name == "Techfest 2025"
    assert req.days == 3
    assert req.submitted_at == NOW
    assert "tutorComments" not in req.to_dict()


def test_staff_cannot_submit():
    svc = _service()

    with pytest.raises(AuthorizationError):
        svc.submit(_staff(StaffRole.TUTOR), _form())


def test_submit_validates_fields_and_date_order():
    svc = _service()

    with pytest.raises(ValidationError) as exc:
        svc.submit(_student(), _form(title="", type="vacation", dateFrom="2025-01-27", dateTo="2025-01-25"))

    assert set(exc.value.fields) == {"title", "type", "dateTo"}


def test_scenario_tutor_then_hod_approval():
    svc = _service()
    req = svc.submit(_student(), _form())

    after_tutor = svc.approve(_staff(StaffRole.TUTOR), req.request_id, "ok")
    assert after_tutor.status == ODStatus.APPROVED_BY_TUTOR
    assert after_tutor.tutor_comments == "ok"

    after_hod = svc.approve(_staff(StaffRole.HOD), req.request_id, "confirmed")
    assert after_hod.status == ODStatus.APPROVED_BY_HOD
    assert after_hod.hod_comments == "confirmed"

    stored = svc.get_request(_student(), req.request_id)
    assert stored.status == ODStatus.APPROVED_BY_HOD
    assert stored.tutor_comments == "ok"


def test_tutor_cannot_act_on_tutor_approved_request():
    svc = _service()
    req = svc.submit(_student(), _form())
    svc.approve(_staff(StaffRole.TUTOR), req.request_id, "ok")

    with pytest.raises(AuthorizationError):
        svc.reject(_staff(StaffRole.TUTOR), req.request_id, "changed my mind")

    assert svc.get_request(_staff(StaffRole.HOD), req.request_id).status == ODStatus.APPROVED_BY_TUTOR


def test_hod_cannot_skip_tutor():
    svc = _service()
    req = svc.submit(_student(), _form())

    with pytest.raises(AuthorizationError):
        svc.approve(_staff(StaffRole.HOD), req.request_id, "fast track")


def test_empty_comment_refused_before_any_change():
    svc = _service()
    req = svc.submit(_student(), _form())

    with pytest.raises(ValidationError):
        svc.reject(_staff(StaffRole.TUTOR), req.request_id, "   ")
    with pytest.raises(ValidationError):
        # checked before the request is even looked up
        svc.reject(_staff(StaffRole.TUTOR), 999, "")

    assert svc.get_request(_student(), req.request_id).status == ODStatus.PENDING


def test_student_cannot_decide():
    svc = _service()
    req = svc.submit(_student(), _form())

    with pytest.raises(AuthorizationError):
        svc.approve(_student(), req.request_id, "self approved")


def test_approver_role_must_match_account():
    svc = _service()
    req = svc.submit(_student(), _form())

    with pytest.raises(AuthorizationError):
        svc.approve(_staff(StaffRole.TUTOR), req.request_id, "ok", approver_role="hod")
    with pytest.raises(ValidationError):
        svc.approve(_staff(StaffRole.TUTOR), req.request_id, "ok", approver_role="dean")

    updated = svc.approve(_staff(StaffRole.TUTOR), req.request_id, "ok", approver_role="tutor")
    assert updated.status == ODStatus.APPROVED_BY_TUTOR


def test_unknown_request_raises_not_found():
    svc = _service()

    with pytest.raises(NotFoundError):
        svc.approve(_staff(StaffRole.TUTOR), 42, "ok")
    with pytest.raises(NotFoundError):
        svc.get_request(_staff(StaffRole.HOD), 42)


class StaleReadRepo(MemoryODRequestRepository):
    """Returns the request as it was before another reviewer decided it."""

    def __init__(self):
        super().__init__()
        self.snapshot = None

    def get(self, *, request_id):
        if self.snapshot is not None:
            return self.snapshot
        return super().get(request_id=request_id)


def test_concurrent_decision_is_not_overwritten():
    repo = StaleReadRepo()
    svc = _service(repo)
    req = svc.submit(_student(), _form())

    repo.snapshot = replace(req)
    svc.reject(_staff(StaffRole.TUTOR), req.request_id, "first reviewer")

    with pytest.raises(ValidationError):
        svc.approve(_staff(StaffRole.TUTOR), req.request_id, "second reviewer")

    repo.snapshot = None
    stored = repo.get(request_id=req.request_id)
    assert stored.status == ODStatus.REJECTED
    assert stored.tutor_comments == "first reviewer"


def test_listing_respects_role():
    svc = _service()
    john, jane = _student(1, "John"), _student(2, "Jane")
    first = svc.submit(john, _form(title="First"))
    second = svc.submit(jane, _form(title="Second"))
    third = svc.submit(john, _form(title="Third"))
    svc.reject(_staff(StaffRole.TUTOR), third.request_id, "not eligible")
    svc.approve(_staff(StaffRole.TUTOR), second.request_id, "ok")

    assert {r.request_id for r in svc.list_requests(john)} == {first.request_id, third.request_id}
    assert {r.request_id for r in svc.list_requests(_staff(StaffRole.TUTOR))} == {first.request_id, second.request_id}
    assert len(svc.list_requests(_staff(StaffRole.HOD))) == 3
    assert [r.request_id for r in svc.list_requests(_staff(StaffRole.HOD), student_id=2)] == [second.request_id]

    with pytest.raises(AuthorizationError):
        svc.list_requests(john, student_id=2)
    with pytest.raises(AuthorizationError):
        svc.get_request(jane, first.request_id)
    with pytest.raises(AuthorizationError):
        svc.get_request(_staff(StaffRole.TUTOR), third.request_id)


def test_status_counts_for_staff():
    svc = _service()
    req = svc.submit(_student(), _form())
    svc.submit(_student(), _form())
    svc.decide(_staff(StaffRole.TUTOR), req.request_id, ODAction.APPROVE, "ok")

    counts = svc.status_counts(_staff(StaffRole.HOD))

    assert counts == {"pending": 1, "approved_by_tutor": 1, "approved_by_hod": 0, "rejected": 0}
    with pytest.raises(AuthorizationError):
        svc.status_counts(_student())
