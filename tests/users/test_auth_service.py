from __future__ import annotations

import pytest

from src.campus_od.campus_od.core.enums import Role, StaffRole
from src.campus_od.campus_od.core.exceptions import AuthenticationError, NotFoundError, ValidationError
from src.campus_od.campus_od.users.memory_user_repository import MemoryUserRepository
from src.campus_od.campus_od.users.model import Staff, Student
from src.campus_od.campus_od.users.service import AuthService, SignupForm, TokenSigner, UserService


def _student_form(**overrides) -> SignupForm:
    data = {
        "role": "student",
        "name": "Asha Menon",
        "email": "Asha@Example.com",
        "password": "secret1",
        "confirmPassword": "secret1",
        "institutionType": "college",
        "department": "Computer Science",
        "shift": "morning",
        "regNo": "cs2024001",
        "degreeName": "Bachelor of Technology (B.Tech)",
        "stream": "Computer Science and Engineering",
        "year": 2,
    }
    data.update(overrides)
    return SignupForm.from_mapping(data)


def _staff_form(**overrides) -> SignupForm:
    data = {
        "role": "staff",
        "name": "Priya Raman",
        "email": "priya@example.com",
        "password": "secret1",
        "institutionType": "college",
        "department": "Computer Science",
        "shift": "evening",
        "staffId": "cst010",
        "staffRole": "tutor",
    }
    data.update(overrides)
    return SignupForm.from_mapping(data)


def _service(secret: str = "test-secret") -> AuthService:
    return AuthService(MemoryUserRepository(), TokenSigner(secret))


def test_signup_student_creates_account_with_empty_attendance():
    svc = _service()

    result = svc.signup(_student_form())

    assert isinstance(result.user, Student)
    assert result.user.role == Role.STUDENT
    assert result.user.email == "asha@example.com"
    assert result.user.reg_no == "CS2024001"
    assert result.user.attendance.total_days == 0
    assert result.user.attendance.percentage == 0.0
    assert svc.resolve_token(result.token) == result.user


def test_signup_staff_keeps_staff_role():
    svc = _service()

    result = svc.signup(_staff_form())

    assert isinstance(result.user, Staff)
    assert result.user.staff_role == StaffRole.TUTOR
    assert result.user.staff_id == "CST010"
    assert result.user.is_hod is False


def test_signup_rejects_duplicate_email_case_insensitive():
    svc = _service()
    svc.signup(_student_form())

    with pytest.raises(ValidationError) as exc:
        svc.signup(_student_form(email="ASHA@example.com", regNo="CS2024002"))

    assert "email" in exc.value.fields


def test_signup_reports_every_invalid_field():
    svc = _service()

    with pytest.raises(ValidationError) as exc:
        svc.signup(_student_form(email="not-an-email", password="123", confirmPassword="1234", regNo="", year=9))

    assert set(exc.value.fields) >= {"email", "password", "confirmPassword", "regNo", "year"}


def test_signup_staff_requires_staff_role_and_id():
    svc = _service()

    with pytest.raises(ValidationError) as exc:
        svc.signup(_staff_form(staffId="", staffRole="principal"))

    assert set(exc.value.fields) == {"staffId", "staffRole"}


def test_signup_rejects_unknown_role():
    svc = _service()

    with pytest.raises(ValidationError) as exc:
        svc.signup(_student_form(role="admin"))

    assert "role" in exc.value.fields


def test_signup_defaults_department_when_blank():
    svc = _service()

    result = svc.signup(_staff_form(department="  "))

    assert result.user.department == "Computer Science"


def test_login_ok_is_case_insensitive_on_email():
    svc = _service()
    created = svc.signup(_student_form())

    result = svc.login("  ASHA@EXAMPLE.COM ", "secret1")

    assert result.user.user_id == created.user.user_id
    assert svc.resolve_token(result.token).user_id == created.user.user_id


def test_login_wrong_password_raises():
    svc = _service()
    svc.signup(_student_form())

    with pytest.raises(AuthenticationError):
        svc.login("asha@example.com", "wrong-password")


def test_login_unknown_email_raises_same_message():
    svc = _service()

    with pytest.raises(AuthenticationError) as exc:
        svc.login("nobody@example.com", "secret1")

    assert str(exc.value) == "Invalid email or password"


def test_resolve_token_rejects_missing_and_foreign_tokens():
    svc = _service()
    other = _service(secret="another-secret")
    token = other.signup(_student_form()).token

    with pytest.raises(AuthenticationError):
        svc.resolve_token(None)
    with pytest.raises(AuthenticationError):
        svc.resolve_token(token)
    with pytest.raises(AuthenticationError):
        svc.resolve_token("garbage")


def test_expired_token_is_rejected():
    users = MemoryUserRepository()
    issuing = AuthService(users, TokenSigner("s"))
    token = issuing.signup(_student_form()).token

    checking = AuthService(users, TokenSigner("s", max_age=-1))

    with pytest.raises(AuthenticationError) as exc:
        checking.resolve_token(token)

    assert "expired" in str(exc.value)


def test_profile_lookup():
    users = MemoryUserRepository()
    created = AuthService(users, TokenSigner("s")).signup(_student_form()).user
    profiles = UserService(users)

    assert profiles.get_profile(created.user_id) == created
    with pytest.raises(NotFoundError):
        profiles.get_profile(999)
