from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import (
    FieldErrors,
    is_valid_email,
    is_valid_reg_no,
    is_valid_staff_id,
)
from ..core.constants import DEFAULT_TOKEN_MAX_AGE, MIN_PASSWORD_LENGTH
from ..core.enums import InstitutionType, Role, ShiftSlot, StaffRole
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import Account, AttendanceSnapshot
from .repository import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_DEPARTMENT = "Computer Science"


@dataclass(frozen=True)
class AuthResult:
    """What login/signup hand back to the caller: the account and its token."""

    user: Account
    token: str

    def to_dict(self) -> dict:
        return {"user": self.user.to_dict(), "token": self.token}


@dataclass(frozen=True)
class SignupForm:
    role: str
    name: str
    email: str
    password: str
    institution_type: str
    confirm_password: Optional[str] = None
    department: str = ""
    shift: str = ShiftSlot.MORNING.value
    reg_no: str = ""
    degree_name: str = ""
    stream: str = ""
    year: Any = 1
    staff_id: str = ""
    staff_role: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SignupForm":
        return cls(
            role=str(data.get("role") or ""),
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            password=str(data.get("password") or ""),
            confirm_password=data.get("confirmPassword"),
            institution_type=str(data.get("institutionType") or ""),
            department=str(data.get("department") or ""),
            shift=str(data.get("shift") or ShiftSlot.MORNING.value),
            reg_no=str(data.get("regNo") or ""),
            degree_name=str(data.get("degreeName") or ""),
            stream=str(data.get("stream") or ""),
            year=data.get("year", 1),
            staff_id=str(data.get("staffId") or ""),
            staff_role=str(data.get("staffRole") or ""),
        )


class TokenSigner:
    """Signed, time-limited session tokens carrying the user id."""

    def __init__(self, secret_key: str, *, max_age: int = DEFAULT_TOKEN_MAX_AGE):
        self._serializer = URLSafeTimedSerializer(secret_key, salt="campus-od-auth")
        self._max_age = int(max_age)

    def issue(self, user_id: int) -> str:
        return self._serializer.dumps({"uid": int(user_id)})

    def read(self, token: str) -> int:
        try:
            data = self._serializer.loads(token, max_age=self._max_age)
        except SignatureExpired:
            raise AuthenticationError("Session expired, please log in again")
        except BadSignature:
            raise AuthenticationError("Invalid session token")
        return int(data["uid"])


class AuthService:
    """Use case: sign up, log in and resolve session tokens."""

    def __init__(self, users: UserRepository, tokens: TokenSigner):
        self._users = users
        self._tokens = tokens

    def _validate(self, form: SignupForm) -> FieldErrors:
        errors = FieldErrors()
        errors.check(bool(form.name.strip()), "name", "Name is required")
        errors.check(is_valid_email(form.email.strip()), "email", "Please enter a valid email")
        errors.check(
            len(form.password) >= MIN_PASSWORD_LENGTH and bool(form.password.strip()),
            "password",
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )
        if form.confirm_password is not None:
            errors.check(form.password == form.confirm_password, "confirmPassword", "Passwords do not match")
        errors.check(
            form.institution_type in {t.value for t in InstitutionType},
            "institutionType",
            "Select school or college",
        )
        errors.check(form.shift in {s.value for s in ShiftSlot}, "shift", "Select a valid shift")

        if form.role == Role.STUDENT.value:
            reg_no = form.reg_no.strip().upper()
            if not reg_no:
                errors.add("regNo", "Registration number is required")
            elif not is_valid_reg_no(reg_no):
                errors.add("regNo", "Registration number must be 6-12 letters or digits")
            errors.check(bool(form.degree_name.strip()), "degreeName", "Degree name is required")
            errors.check(bool(form.stream.strip()), "stream", "Stream is required")
            try:
                year = int(form.year)
            except (TypeError, ValueError):
                year = 0
            errors.check(1 <= year <= 6, "year", "Year must be between 1 and 6")
        elif form.role == Role.STAFF.value:
            staff_id = form.staff_id.strip().upper()
            if not staff_id:
                errors.add("staffId", "Staff ID is required")
            elif not is_valid_staff_id(staff_id):
                errors.add("staffId", "Staff ID must be 4-10 letters or digits")
            errors.check(
                form.staff_role in {r.value for r in StaffRole},
                "staffRole",
                "Select tutor or hod",
            )
        else:
            errors.add("role", "Select student or staff")
        return errors

    def signup(self, form: SignupForm) -> AuthResult:
        self._validate(form).raise_if_any()

        email = form.email.strip().lower()
        if self._users.get_by_email(email):
            raise ValidationError("Email already registered", fields={"email": "Email already registered"})

        password_hash = generate_password_hash(form.password)
        department = form.department.strip() or DEFAULT_DEPARTMENT

        if form.role == Role.STUDENT.value:
            user_id = self._users.create_student(
                name=form.name.strip(),
                email=email,
                password_hash=password_hash,
                institution_type=InstitutionType(form.institution_type),
                reg_no=form.reg_no.strip().upper(),
                department=department,
                degree_name=form.degree_name.strip(),
                stream=form.stream.strip(),
                shift=ShiftSlot(form.shift),
                year=int(form.year),
                attendance=AttendanceSnapshot.empty(),
            )
        else:
            user_id = self._users.create_staff(
                name=form.name.strip(),
                email=email,
                password_hash=password_hash,
                institution_type=InstitutionType(form.institution_type),
                staff_id=form.staff_id.strip().upper(),
                department=department,
                shift=ShiftSlot(form.shift),
                staff_role=StaffRole(form.staff_role),
            )

        user = self._users.get_by_id(user_id)
        if user is None:
            raise ValidationError("Account creation failed")
        logger.info("signup user_id=%s role=%s", user_id, form.role)
        return AuthResult(user=user, token=self._tokens.issue(user_id))

    def login(self, email: str, password: str) -> AuthResult:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user:
            logger.info("login failed: unknown email")
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(self._users.get_password_hash(user.user_id) or "", password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("login failed: bad password for user_id=%s", user.user_id)
            raise AuthenticationError("Invalid email or password")

        return AuthResult(user=user, token=self._tokens.issue(user.user_id))

    def resolve_token(self, token: Optional[str]) -> Account:
        if not token:
            raise AuthenticationError("Missing session token")
        user_id = self._tokens.read(token)
        user = self._users.get_by_id(user_id)
        if not user:
            raise AuthenticationError("Account no longer exists")
        return user


class UserService:
    def __init__(self, users: UserRepository):
        self._users = users

    def get_profile(self, user_id: int) -> Account:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user
