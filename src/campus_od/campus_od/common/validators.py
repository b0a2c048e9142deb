from __future__ import annotations

import re
from datetime import date, datetime, time
from enum import Enum
from typing import Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_REG_NO_RE = re.compile(r"^[A-Z0-9]{6,12}$")
_STAFF_ID_RE = re.compile(r"^[A-Z0-9]{4,10}$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value or ""))


def is_valid_reg_no(value: str) -> bool:
    return bool(_REG_NO_RE.match(value or ""))


def is_valid_staff_id(value: str) -> bool:
    return bool(_STAFF_ID_RE.match(value or ""))


def parse_date(value: Optional[str], field_name: str) -> date:
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def parse_time(value: Optional[str], field_name: str) -> time:
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except ValueError:
        raise ValidationError(f"{field_name} must be a time (HH:MM)")


def parse_choice(enum_cls: Type[E], value: object, field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


class FieldErrors:
    """Collects per-field messages and raises them together."""

    def __init__(self):
        self._errors: dict[str, str] = {}

    def add(self, field: str, message: str) -> None:
        self._errors.setdefault(field, message)

    def check(self, condition: bool, field: str, message: str) -> None:
        if not condition:
            self.add(field, message)

    def raise_if_any(self, message: str = "Please correct the highlighted fields") -> None:
        if self._errors:
            raise ValidationError(message, fields=self._errors)
