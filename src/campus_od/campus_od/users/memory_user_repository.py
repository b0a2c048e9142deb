from __future__ import annotations

import threading
from typing import Optional, Sequence

from ..core.enums import InstitutionType, ShiftSlot, StaffRole
from .model import Account, AttendanceSnapshot, Staff, Student
from .repository import UserRepository


class MemoryUserRepository(UserRepository):
    """Process-local store used by the `memory` storage backend."""

    def __init__(self):
        self._lock = threading.Lock()
        self._next_id = 1
        self._accounts: dict[int, Account] = {}
        self._hashes: dict[int, str] = {}

    def _add(self, build, password_hash: str) -> int:
        with self._lock:
            user_id = self._next_id
            self._next_id += 1
            self._accounts[user_id] = build(user_id)
            self._hashes[user_id] = password_hash
            return user_id

    def get_by_id(self, user_id: int) -> Optional[Account]:
        return self._accounts.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[Account]:
        email = email.strip().lower()
        for account in list(self._accounts.values()):
            if account.email == email:
                return account
        return None

    def get_password_hash(self, user_id: int) -> Optional[str]:
        return self._hashes.get(int(user_id))

    def create_student(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        institution_type: InstitutionType,
        reg_no: str,
        department: str,
        degree_name: str,
        stream: str,
        shift: ShiftSlot,
        year: int,
        attendance: AttendanceSnapshot,
    ) -> int:
        return self._add(
            lambda user_id: Student(
                user_id=user_id,
                name=name,
                email=email.strip().lower(),
                institution_type=institution_type,
                reg_no=reg_no,
                department=department,
                degree_name=degree_name,
                stream=stream,
                shift=shift,
                year=int(year),
                attendance=attendance,
            ),
            password_hash,
        )

    def create_staff(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        institution_type: InstitutionType,
        staff_id: str,
        department: str,
        shift: ShiftSlot,
        staff_role: StaffRole,
    ) -> int:
        return self._add(
            lambda user_id: Staff(
                user_id=user_id,
                name=name,
                email=email.strip().lower(),
                institution_type=institution_type,
                staff_id=staff_id,
                department=department,
                shift=shift,
                staff_role=staff_role,
            ),
            password_hash,
        )

    def list_students(self, *, department: Optional[str] = None) -> Sequence[Student]:
        return [
            a
            for a in list(self._accounts.values())
            if isinstance(a, Student) and (not department or a.department == department)
        ]
