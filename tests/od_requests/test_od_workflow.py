from __future__ import annotations

from datetime import date, datetime, timezone
from itertools import product

import pytest

from src.campus_od.campus_od.core.enums import InstitutionType, LeaveType, ODAction, ODCategory, ODStatus, ShiftSlot, StaffRole
from src.campus_od.campus_od.core.exceptions import AuthorizationError, ValidationError
from src.campus_od.campus_od.od_requests.model import ODRequest
from src.campus_od.campus_od.od_requests.workflow import apply_decision, can_approve, find_transition, visible_to
from src.campus_od.campus_od.users.model import Staff

DECIDED_AT = datetime(2025, 1, 19, 10, 0, tzinfo=timezone.utc)

ALLOWED = {
    (ODStatus.PENDING, StaffRole.TUTOR, ODAction.APPROVE): ODStatus.APPROVED_BY_TUTOR,
    (ODStatus.PENDING, StaffRole.TUTOR, ODAction.REJECT): ODStatus.REJECTED,
    (ODStatus.APPROVED_BY_TUTOR, StaffRole.HOD, ODAction.APPROVE): ODStatus.APPROVED_BY_HOD,
    (ODStatus.APPROVED_BY_TUTOR, StaffRole.HOD, ODAction.REJECT): ODStatus.REJECTED,
}


def _staff(role: StaffRole) -> Staff:
    return Staff(
        user_id=10,
        name=role.value,
        email=f"{role.value}@example.com",
        institution_type=InstitutionType.COLLEGE,
        staff_id="CS0001",
        department="Computer Science",
        shift=ShiftSlot.MORNING,
        staff_role=role,
    )


def _request(status: ODStatus = ODStatus.PENDING, request_id: int = 1) -> ODRequest:
    return ODRequest(
        request_id=request_id,
        student_id=1,
        student_name="John Doe",
        title="Medical Appointment",
        description="Regular health checkup",
        leave_type=LeaveType.MEDICAL,
        category=ODCategory.OTHER,
        department="Computer Science",
        date_from=date(2025, 1, 20),
        date_to=date(2025, 1, 20),
        status=status,
        submitted_at=datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc),
    )


@pytest.mark.parametrize("status,role,action", list(product(ODStatus, StaffRole, ODAction)))
def test_transition_table_is_exhaustive(status, role, action):
    req = _request(status)
    staff = _staff(role)
    expected = ALLOWED.get((status, role, action))

    if expected is None:
        assert find_transition(status, role, action) is None
        with pytest.raises(AuthorizationError):
            apply_decision(req, staff, action, "looks fine", decided_at=DECIDED_AT)
    else:
        updated = apply_decision(req, staff, action, "looks fine", decided_at=DECIDED_AT)
        assert updated.status == expected
        assert updated.decided_at == DECIDED_AT
        # input request is left as it was
        assert req.status == status


def test_tutor_comment_goes_to_tutor_field():
    updated = apply_decision(_request(), _staff(StaffRole.TUTOR), ODAction.APPROVE, " ok ", decided_at=DECIDED_AT)

    assert updated.tutor_comments == "ok"
    assert updated.hod_comments is None


def test_hod_comment_keeps_tutor_comment():
    after_tutor = apply_decision(_request(), _staff(StaffRole.TUTOR), ODAction.APPROVE, "ok", decided_at=DECIDED_AT)

    after_hod = apply_decision(after_tutor, _staff(StaffRole.HOD), ODAction.APPROVE, "confirmed", decided_at=DECIDED_AT)

    assert after_hod.status == ODStatus.APPROVED_BY_HOD
    assert after_hod.tutor_comments == "ok"
    assert after_hod.hod_comments == "confirmed"


@pytest.mark.parametrize("comments", [None, "", "   "])
def test_blank_comment_is_refused(comments):
    with pytest.raises(ValidationError):
        apply_decision(_request(), _staff(StaffRole.TUTOR), ODAction.REJECT, comments, decided_at=DECIDED_AT)


def test_can_approve_matches_role_and_status():
    tutor = _staff(StaffRole.TUTOR)
    hod = _staff(StaffRole.HOD)

    assert can_approve(_request(ODStatus.PENDING), tutor)
    assert not can_approve(_request(ODStatus.PENDING), hod)
    assert can_approve(_request(ODStatus.APPROVED_BY_TUTOR), hod)
    assert not can_approve(_request(ODStatus.APPROVED_BY_TUTOR), tutor)
    assert not can_approve(_request(ODStatus.REJECTED), hod)


def test_tutor_sees_only_open_requests_hod_sees_all():
    requests = [_request(status, request_id=i) for i, status in enumerate(ODStatus, start=1)]

    tutor_view = visible_to(_staff(StaffRole.TUTOR), requests)
    hod_view = visible_to(_staff(StaffRole.HOD), requests)

    assert {r.status for r in tutor_view} == {ODStatus.PENDING, ODStatus.APPROVED_BY_TUTOR}
    assert len(hod_view) == len(requests)


def test_terminal_statuses():
    assert ODStatus.APPROVED_BY_HOD.is_terminal
    assert ODStatus.REJECTED.is_terminal
    assert not ODStatus.PENDING.is_terminal
