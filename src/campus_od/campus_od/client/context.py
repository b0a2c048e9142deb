from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar

from ..core.exceptions import AuthenticationError, AuthorizationError, TransportError
from ..events.model import Event
from ..od_requests.model import ODRequest
from ..od_requests.workflow import can_approve, visible_to
from ..users.model import Account, Staff
from .api_client import ApiClient
from .guard import CompletionGuard
from .session_store import SessionStore
from .state import AppState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ClientContext:
    """Everything a client front end needs, built once and passed around.

    Bundles the API client, the stored session and the domain state. Loads
    go through a `CompletionGuard` per kind of data so a late response never
    overwrites a newer one, and never lands after logout.
    """

    def __init__(self, api: ApiClient, sessions: SessionStore, state: Optional[AppState] = None):
        self.api = api
        self.sessions = sessions
        self.state = state if state is not None else AppState()
        self._user: Optional[Account] = None
        self._guards = {
            "events": CompletionGuard(),
            "od_requests": CompletionGuard(),
            "top_students": CompletionGuard(),
        }

    @property
    def user(self) -> Optional[Account]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def _require_user(self) -> Account:
        if self._user is None:
            raise AuthenticationError("Please log in first")
        return self._user

    def _require_staff(self) -> Staff:
        user = self._require_user()
        if not isinstance(user, Staff):
            raise AuthorizationError("Only staff can review OD requests")
        return user

    # session

    def start(self) -> Optional[Account]:
        """Restore the stored session and confirm it with the server."""

        stored = self.sessions.load()
        if stored is None:
            return None

        self.api.set_token(stored.token)
        try:
            user = self.api.me()
        except AuthenticationError:
            logger.info("stored session rejected by server, signing out")
            self._forget_session()
            return None

        self._user = user
        self.sessions.save(stored.token, user)
        return user

    def _remember(self, token: str, user: Account) -> Account:
        self.api.set_token(token)
        self.sessions.save(token, user)
        self._user = user
        return user

    def login(self, email: str, password: str) -> Account:
        result = self.api.login(email, password)
        return self._remember(result.token, result.user)

    def signup(self, form: Mapping[str, Any]) -> Account:
        result = self.api.signup(form)
        return self._remember(result.token, result.user)

    def _forget_session(self) -> None:
        for guard in self._guards.values():
            guard.cancel()
        self.sessions.clear()
        self.api.set_token(None)
        self.state.reset()
        self._user = None

    def logout(self) -> None:
        try:
            if self.api.token:
                self.api.logout()
        except (AuthenticationError, TransportError) as e:
            logger.info("server logout failed: %s", e)
        finally:
            # the local session is dropped either way
            self._forget_session()

    # loading

    def _load(self, kind: str, fetch: Callable[[], T], apply: Callable[[T], None]) -> bool:
        """Run `fetch` and hand its result to `apply` if no newer load started.

        Returns False when the result was dropped as stale.
        """

        guard = self._guards[kind]
        token = guard.issue()
        self.state.set_loading(True, kind)
        self.state.set_error(None)
        try:
            result = fetch()
            if not guard.is_current(token):
                logger.debug("dropping stale %s result", kind)
                return False
            apply(result)
        except Exception as e:
            if guard.is_current(token):
                self.state.set_error(str(e))
            raise
        finally:
            # a newer load or cancel() owns the flag otherwise
            if guard.is_current(token):
                self.state.set_loading(False, kind)
        return True

    def cancel(self, kind: str) -> None:
        self._guards[kind].cancel()
        self.state.set_loading(False, kind)

    def refresh_events(self, *, department: Optional[str] = None) -> bool:
        self._require_user()
        return self._load("events", lambda: self.api.list_events(department=department), self.state.set_events)

    def refresh_od_requests(self, *, student_id: Optional[int] = None) -> bool:
        self._require_user()
        return self._load(
            "od_requests",
            lambda: self.api.list_od_requests(student_id=student_id),
            self.state.set_od_requests,
        )

    def refresh_top_students(self, *, limit: Optional[int] = None, department: Optional[str] = None) -> bool:
        self._require_staff()
        return self._load(
            "top_students",
            lambda: self.api.top_students(limit=limit, department=department),
            self.state.set_top_students,
        )

    # mutations

    def create_event(self, form: Mapping[str, Any]) -> Event:
        event = self.api.create_event(form)
        self.state.add_event(event)
        return event

    def update_event(self, event_id: int, form: Mapping[str, Any]) -> Event:
        event = self.api.update_event(event_id, form)
        self.state.replace_event(event)
        return event

    def delete_event(self, event_id: int) -> None:
        self.api.delete_event(event_id)
        self.state.remove_event(event_id)

    def submit_od_request(self, form: Mapping[str, Any]) -> ODRequest:
        created = self.api.submit_od_request(form)
        self.state.add_od_request(created)
        return created

    def approve(self, request_id: int, comments: str) -> ODRequest:
        staff = self._require_staff()
        updated = self.api.approve_od_request(request_id, comments, approver_role=staff.staff_role.value)
        self.state.update_od_request(updated)
        return updated

    def reject(self, request_id: int, comments: str) -> ODRequest:
        staff = self._require_staff()
        updated = self.api.reject_od_request(request_id, comments, approver_role=staff.staff_role.value)
        self.state.update_od_request(updated)
        return updated

    # views

    def visible_requests(self) -> Sequence[ODRequest]:
        user = self._require_user()
        if isinstance(user, Staff):
            return visible_to(user, self.state.od_requests)
        return [r for r in self.state.od_requests if r.student_id == user.user_id]

    def can_approve(self, request: ODRequest) -> bool:
        return isinstance(self._user, Staff) and can_approve(request, self._user)
