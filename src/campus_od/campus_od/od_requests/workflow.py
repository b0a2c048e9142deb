"""OD approval workflow.

A request starts as ``pending``. A tutor moves it to ``approved_by_tutor`` or
``rejected``; an HOD then moves an ``approved_by_tutor`` request to
``approved_by_hod`` or ``rejected``. Every other combination is refused.

These rules are used by the server before persisting a decision and by the
client to decide which controls to offer.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, Optional

from ..common.validators import require_non_empty
from ..core.enums import ODAction, ODStatus, StaffRole
from ..core.exceptions import AuthorizationError
from ..users.model import Staff
from .model import ODRequest


@dataclass(frozen=True)
class Transition:
    next_status: ODStatus
    comment_field: str


_TRANSITIONS: dict[tuple[ODStatus, StaffRole, ODAction], Transition] = {
    (ODStatus.PENDING, StaffRole.TUTOR, ODAction.APPROVE): Transition(ODStatus.APPROVED_BY_TUTOR, "tutor_comments"),
    (ODStatus.PENDING, StaffRole.TUTOR, ODAction.REJECT): Transition(ODStatus.REJECTED, "tutor_comments"),
    (ODStatus.APPROVED_BY_TUTOR, StaffRole.HOD, ODAction.APPROVE): Transition(ODStatus.APPROVED_BY_HOD, "hod_comments"),
    (ODStatus.APPROVED_BY_TUTOR, StaffRole.HOD, ODAction.REJECT): Transition(ODStatus.REJECTED, "hod_comments"),
}

_TUTOR_VISIBLE = frozenset({ODStatus.PENDING, ODStatus.APPROVED_BY_TUTOR})


def find_transition(status: ODStatus, staff_role: StaffRole, action: ODAction) -> Optional[Transition]:
    return _TRANSITIONS.get((status, staff_role, action))


def can_approve(request: ODRequest, staff: Staff) -> bool:
    """True when `staff` may act (approve or reject) on `request` right now."""

    return find_transition(request.status, staff.staff_role, ODAction.APPROVE) is not None


def visible_statuses(staff: Staff) -> Optional[frozenset]:
    """Statuses a staff member may see; None means no restriction (HOD)."""

    if staff.staff_role == StaffRole.HOD:
        return None
    return _TUTOR_VISIBLE


def is_visible(staff: Staff, request: ODRequest) -> bool:
    allowed = visible_statuses(staff)
    return allowed is None or request.status in allowed


def visible_to(staff: Staff, requests: Iterable[ODRequest]) -> list[ODRequest]:
    return [r for r in requests if is_visible(staff, r)]


def apply_decision(
    request: ODRequest,
    staff: Staff,
    action: ODAction,
    comments: Optional[str],
    *,
    decided_at: datetime,
) -> ODRequest:
    """Return the request after `staff` takes `action` on it.

    Raises ValidationError for a blank comment and AuthorizationError when no
    transition matches. The input request is never modified.
    """

    comment = require_non_empty(comments, "Comments")
    transition = find_transition(request.status, staff.staff_role, action)
    if transition is None:
        raise AuthorizationError(
            f"Forbidden: a {staff.staff_role.value} cannot {action.value} a request that is {request.status.value}"
        )
    return replace(
        request,
        status=transition.next_status,
        decided_at=decided_at,
        **{transition.comment_field: comment},
    )
