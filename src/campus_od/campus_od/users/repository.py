from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import InstitutionType, ShiftSlot, StaffRole
from .model import Account, AttendanceSnapshot, Student


class UserRepository(Protocol):
    """Repository interface for student and staff accounts.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[Account]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def get_password_hash(self, user_id: int) -> Optional[str]:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

    def list_students(self, *, department: Optional[str] = None) -> Sequence[Student]:
        raise NotImplementedError
