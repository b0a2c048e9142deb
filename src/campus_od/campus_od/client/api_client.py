from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

import requests

from ..core.enums import ODAction
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from ..events.model import Event
from ..od_requests.model import ODRequest
from ..users.model import Account, Student, account_from_dict
from ..users.service import AuthResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ApiClient:
    """HTTP client for the campus OD API.

    Each method maps to one endpoint and returns domain objects. Error
    responses come back as the same domain exceptions the services raise;
    connection failures and 5xx responses raise `TransportError`.
    """

    def __init__(self, base_url: str, *, http: Optional[Any] = None, timeout: float = DEFAULT_TIMEOUT):
        self._base_url = base_url.rstrip("/")
        self._http = http if http is not None else requests.Session()
        self._timeout = timeout
        self._token: Optional[str] = None

    @property
    def token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: Optional[str]) -> None:
        self._token = token or None

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            resp = self._http.request(
                method,
                self._base_url + path,
                json=json,
                params=params or None,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportError(f"Could not reach the server: {e}") from e

        if resp.status_code >= 400:
            self._raise_for_error(method, path, resp)
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            # e.g. an HTML page from a proxy in front of the server
            logger.warning("%s %s -> %s with a non-JSON body", method, path, resp.status_code)
            raise TransportError("Unexpected response from the server", status_code=resp.status_code) from e

    @staticmethod
    def _error_body(resp) -> dict:
        try:
            body = resp.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def _raise_for_error(self, method: str, path: str, resp) -> None:
        status = resp.status_code
        body = self._error_body(resp)
        message = str(body.get("message") or body.get("error") or f"HTTP {status}")

        if status >= 500:
            logger.warning("%s %s -> %s", method, path, status)
            raise TransportError(message, status_code=status)
        if status == 400:
            raise ValidationError(message, fields=body.get("fields") or None)
        if status == 401:
            raise AuthenticationError(message)
        if status == 403:
            raise AuthorizationError(message)
        if status == 404:
            raise NotFoundError(message)
        raise DomainError(message)

    # auth

    def _auth_result(self, data: Mapping[str, Any]) -> AuthResult:
        return AuthResult(user=account_from_dict(data["user"]), token=data["token"])

    def signup(self, form: Mapping[str, Any]) -> AuthResult:
        return self._auth_result(self._request("POST", "/auth/signup", json=dict(form)))

    def login(self, email: str, password: str) -> AuthResult:
        return self._auth_result(self._request("POST", "/auth/login", json={"email": email, "password": password}))

    def me(self) -> Account:
        return account_from_dict(self._request("GET", "/auth/me")["user"])

    def logout(self) -> None:
        self._request("POST", "/auth/logout")

    def catalog(self) -> dict:
        return self._request("GET", "/catalog")

    # attendance

    def my_attendance(self) -> dict:
        return self._request("GET", "/students/me/attendance")

    def top_students(self, *, limit: Optional[int] = None, department: Optional[str] = None) -> Sequence[Student]:
        rows = self._request("GET", "/staff/top-students", params={"limit": limit, "department": department})
        return [account_from_dict(r) for r in rows]

    # events

    def list_events(self, *, department: Optional[str] = None) -> Sequence[Event]:
        rows = self._request("GET", "/events", params={"department": department})
        return [Event.from_dict(r) for r in rows]

    def get_event(self, event_id: int) -> Event:
        return Event.from_dict(self._request("GET", f"/events/{int(event_id)}"))

    def create_event(self, form: Mapping[str, Any]) -> Event:
        return Event.from_dict(self._request("POST", "/events", json=dict(form)))

    def update_event(self, event_id: int, form: Mapping[str, Any]) -> Event:
        return Event.from_dict(self._request("PUT", f"/events/{int(event_id)}", json=dict(form)))

    def delete_event(self, event_id: int) -> None:
        self._request("DELETE", f"/events/{int(event_id)}")

    def events_summary(self, *, department: Optional[str] = None) -> dict:
        return self._request("GET", "/events/summary", params={"department": department})

    # od requests

    def list_od_requests(self, *, student_id: Optional[int] = None) -> Sequence[ODRequest]:
        rows = self._request("GET", "/od-requests", params={"studentId": student_id})
        return [ODRequest.from_dict(r) for r in rows]

    def get_od_request(self, request_id: int) -> ODRequest:
        return ODRequest.from_dict(self._request("GET", f"/od-requests/{int(request_id)}"))

    def submit_od_request(self, form: Mapping[str, Any]) -> ODRequest:
        return ODRequest.from_dict(self._request("POST", "/od-requests", json=dict(form)))

    def decide_od_request(
        self,
        request_id: int,
        action: ODAction,
        comments: str,
        *,
        approver_role: Optional[str] = None,
    ) -> ODRequest:
        body: dict[str, Any] = {"comments": comments}
        if approver_role is not None:
            body["approverRole"] = approver_role
        data = self._request("POST", f"/od-requests/{int(request_id)}/{action.value}", json=body)
        return ODRequest.from_dict(data)

    def approve_od_request(self, request_id: int, comments: str, *, approver_role: Optional[str] = None) -> ODRequest:
        return self.decide_od_request(request_id, ODAction.APPROVE, comments, approver_role=approver_role)

    def reject_od_request(self, request_id: int, comments: str, *, approver_role: Optional[str] = None) -> ODRequest:
        return self.decide_od_request(request_id, ODAction.REJECT, comments, approver_role=approver_role)

    def od_request_counts(self) -> dict[str, int]:
        return self._request("GET", "/od-requests/counts")
