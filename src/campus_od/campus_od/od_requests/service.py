from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import FieldErrors, parse_choice, parse_date, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveType, ODAction, ODCategory, ODStatus, StaffRole
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import Account, Staff, Student
from .model import ODRequest
from .repository import ODRequestRepository
from .workflow import apply_decision, is_visible, visible_statuses

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ODRequestForm:
    title: str
    description: str
    leave_type: str
    category: str
    department: str
    date_from: str
    date_to: str
    event_name: Optional[str] = None
    file_url: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ODRequestForm":
        return cls(
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            leave_type=str(data.get("type") or ""),
            category=str(data.get("category") or ""),
            department=str(data.get("department") or ""),
            date_from=str(data.get("dateFrom") or ""),
            date_to=str(data.get("dateTo") or ""),
            event_name=str(data.get("eventName") or "") or None,
            file_url=str(data.get("fileUrl") or "") or None,
        )


class ODRequestService:
    """Use cases of the OD workflow: submit, list and decide requests.

    Authorization is checked here, not only in the controllers, so every
    caller goes through the same transition rules.
    """

    def __init__(self, requests: ODRequestRepository, *, clock: Callable = now_utc):
        self._requests = requests
        self._clock = clock

    @staticmethod
    def _require_staff(actor: Account) -> Staff:
        if not isinstance(actor, Staff):
            raise AuthorizationError("Only staff can review OD requests")
        return actor

    def submit(self, actor: Account, form: ODRequestForm) -> ODRequest:
        if not isinstance(actor, Student):
            raise AuthorizationError("Only students can submit OD requests")

        errors = FieldErrors()
        values: dict[str, Any] = {}
        for field, label, raw in (
            ("title", "Title", form.title),
            ("description", "Description", form.description),
            ("department", "Department", form.department),
        ):
            try:
                values[field] = require_non_empty(raw, label)
            except ValidationError as e:
                errors.add(field, str(e))

        for field, enum_cls, label, raw in (
            ("type", LeaveType, "Type", form.leave_type),
            ("category", ODCategory, "Category", form.category),
        ):
            try:
                values[field] = parse_choice(enum_cls, raw, label)
            except ValidationError as e:
                errors.add(field, str(e))

        for field, label, raw in (("dateFrom", "From date", form.date_from), ("dateTo", "To date", form.date_to)):
            try:
                values[field] = parse_date(raw, label)
            except ValidationError as e:
                errors.add(field, str(e))

        if "dateFrom" in values and "dateTo" in values and values["dateTo"] < values["dateFrom"]:
            errors.add("dateTo", "To date must be on or after from date")

        errors.raise_if_any()

        request_id = self._requests.create(
            student_id=actor.user_id,
            student_name=actor.name,
            title=values["title"],
            description=values["description"],
            leave_type=values["type"],
            category=values["category"],
            department=values["department"],
            event_name=(form.event_name or "").strip() or None,
            date_from=values["dateFrom"],
            date_to=values["dateTo"],
            file_url=(form.file_url or "").strip() or None,
            submitted_at=self._clock(),
        )
        logger.info("od request %s submitted by student %s", request_id, actor.user_id)
        created = self._requests.get(request_id=request_id)
        if created is None:
            raise NotFoundError("OD request not found")
        return created

    def list_requests(self, actor: Account, *, student_id: Optional[int] = None) -> Sequence[ODRequest]:
        if isinstance(actor, Student):
            if student_id is not None and int(student_id) != actor.user_id:
                raise AuthorizationError("Students can only view their own requests")
            return self._requests.list_requests(student_id=actor.user_id, limit=DEFAULT_LIST_LIMIT)

        staff = self._require_staff(actor)
        return self._requests.list_requests(
            student_id=int(student_id) if student_id is not None else None,
            statuses=visible_statuses(staff),
            limit=DEFAULT_LIST_LIMIT,
        )

    def get_request(self, actor: Account, request_id: int) -> ODRequest:
        req = self._requests.get(request_id=int(request_id))
        if not req:
            raise NotFoundError("OD request not found")
        if isinstance(actor, Student):
            if req.student_id != actor.user_id:
                raise AuthorizationError("Students can only view their own requests")
        elif not is_visible(self._require_staff(actor), req):
            raise AuthorizationError("Forbidden: request is not visible to a tutor")
        return req

    def decide(
        self,
        actor: Account,
        request_id: int,
        action: ODAction,
        comments: Optional[str],
        *,
        approver_role: Optional[str] = None,
    ) -> ODRequest:
        staff = self._require_staff(actor)
        require_non_empty(comments, "Comments")

        if approver_role is not None and parse_choice(StaffRole, approver_role, "Approver role") != staff.staff_role:
            raise AuthorizationError("Forbidden: approver role does not match your account")

        req = self._requests.get(request_id=int(request_id))
        if not req:
            raise NotFoundError("OD request not found")

        updated = apply_decision(req, staff, action, comments, decided_at=self._clock())
        stored = self._requests.decide(
            request_id=req.request_id,
            expected_status=req.status,
            status=updated.status,
            tutor_comments=updated.tutor_comments,
            hod_comments=updated.hod_comments,
            decided_at=updated.decided_at,
        )
        if not stored:
            # someone else decided first
            raise ValidationError("Request was already processed, reload and try again")

        logger.info(
            "od request %s: %s -> %s by %s %s",
            req.request_id,
            req.status.value,
            updated.status.value,
            staff.staff_role.value,
            staff.staff_id,
        )
        return updated

    def approve(self, actor: Account, request_id: int, comments: Optional[str], *, approver_role: Optional[str] = None) -> ODRequest:
        return self.decide(actor, request_id, ODAction.APPROVE, comments, approver_role=approver_role)

    def reject(self, actor: Account, request_id: int, comments: Optional[str], *, approver_role: Optional[str] = None) -> ODRequest:
        return self.decide(actor, request_id, ODAction.REJECT, comments, approver_role=approver_role)

    def status_counts(self, actor: Account) -> dict[str, int]:
        self._require_staff(actor)
        counts = self._requests.count_by_status()
        return {s.value: int(counts.get(s, 0)) for s in ODStatus}
