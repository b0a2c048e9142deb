from __future__ import annotations

from typing import Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    `fields` maps a form field name to its message so callers can show the
    error next to the offending input.
    """

    def __init__(self, message: str, fields: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.fields = dict(fields or {})


class AuthenticationError(DomainError):
    """Raised when credentials or a session token are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action (forbidden)."""


class NotFoundError(DomainError):
    """Raised when the referenced entity does not exist."""


class TransportError(DomainError):
    """Raised by the API client when the server could not be reached or failed.

    `retryable` tells the caller the same call may succeed if repeated.
    """

    def __init__(self, message: str, *, retryable: bool = True, status_code: Optional[int] = None):
        super().__init__(message)
        self.retryable = retryable
        self.status_code = status_code
