from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import InstitutionType, Role, ShiftSlot, StaffRole
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Account, AttendanceSnapshot, Staff, Student
from .repository import UserRepository

_SELECT_ACCOUNT = """
    SELECT u.user_id, u.name, u.email, u.role, u.institution_type, u.department, u.shift,
           st.reg_no, st.degree_name, st.stream, st.year,
           st.total_days, st.present_days, st.absent_days, st.leaves_remaining, st.recorded_percentage,
           sf.staff_id, sf.staff_role
    FROM users u
    LEFT JOIN students st ON st.user_id = u.user_id
    LEFT JOIN staff sf ON sf.user_id = u.user_id
"""


def _row_to_account(r: dict) -> Account:
    if Role(r["role"]) == Role.STUDENT:
        recorded = r.get("recorded_percentage")
        return Student(
            user_id=int(r["user_id"]),
            name=r["name"],
            email=r["email"],
            institution_type=InstitutionType(r["institution_type"]),
            reg_no=r["reg_no"],
            department=r["department"],
            degree_name=r["degree_name"],
            stream=r["stream"],
            shift=ShiftSlot(r["shift"]),
            year=int(r["year"]),
            attendance=AttendanceSnapshot(
                total_days=int(r["total_days"]),
                present_days=int(r["present_days"]),
                absent_days=int(r["absent_days"]),
                leaves_remaining=int(r["leaves_remaining"]),
                recorded_percentage=float(recorded) if recorded is not None else None,
            ),
        )
    return Staff(
        user_id=int(r["user_id"]),
        name=r["name"],
        email=r["email"],
        institution_type=InstitutionType(r["institution_type"]),
        staff_id=r["staff_id"],
        department=r["department"],
        shift=ShiftSlot(r["shift"]),
        staff_role=StaffRole(r["staff_role"]),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_ACCOUNT + " WHERE u.user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def get_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_ACCOUNT + " WHERE u.email=%s", (email.strip().lower(),))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def get_password_hash(self, user_id: int) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT password_hash FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return row["password_hash"] if row else None

    def _insert_user(self, cur, *, name, email, password_hash, role: Role, institution_type, department, shift) -> int:
        try:
            cur.execute(
                """
                INSERT INTO users(name, email, password_hash, role, institution_type, department, shift)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    name,
                    email.strip().lower(),
                    password_hash,
                    role.value,
                    institution_type.value,
                    department,
                    shift.value,
                ),
            )
        except mysql.connector.IntegrityError as e:
            # UNIQUE(email) catches a signup racing the service-level check
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise ValidationError("Email already registered", fields={"email": "Email already registered"}) from e
            raise
        return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = self._insert_user(
                cur,
                name=name,
                email=email,
                password_hash=password_hash,
                role=Role.STUDENT,
                institution_type=institution_type,
                department=department,
                shift=shift,
            )
            cur.execute(
                """
                INSERT INTO students(
                    user_id, reg_no, degree_name, stream, year,
                    total_days, present_days, absent_days, leaves_remaining, recorded_percentage
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    user_id,
                    reg_no,
                    degree_name,
                    stream,
                    int(year),
                    attendance.total_days,
                    attendance.present_days,
                    attendance.absent_days,
                    attendance.leaves_remaining,
                    attendance.recorded_percentage,
                ),
            )
            return user_id

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
        with db_cursor(self._conn_factory) as (_, cur):
            user_id = self._insert_user(
                cur,
                name=name,
                email=email,
                password_hash=password_hash,
                role=Role.STAFF,
                institution_type=institution_type,
                department=department,
                shift=shift,
            )
            cur.execute(
                "INSERT INTO staff(user_id, staff_id, staff_role) VALUES(%s,%s,%s)",
                (user_id, staff_id, staff_role.value),
            )
            return user_id

    def list_students(self, *, department: Optional[str] = None) -> Sequence[Student]:
        clauses = ["u.role=%s"]
        params: list[object] = [Role.STUDENT.value]
        if department:
            clauses.append("u.department=%s")
            params.append(department)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT_ACCOUNT + f" WHERE {where}", tuple(params))
            return [_row_to_account(r) for r in fetchall(cur)]
