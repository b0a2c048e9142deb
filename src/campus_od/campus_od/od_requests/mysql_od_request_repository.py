from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..core.enums import LeaveType, ODCategory, ODStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_utc, db_cursor, fetchall, fetchone, to_db_datetime
from .model import ODRequest
from .repository import ODRequestRepository

_COLUMNS = """
    request_id, student_id, student_name, title, description, leave_type, category,
    department, event_name, date_from, date_to, status, file_url,
    tutor_comments, hod_comments, submitted_at, decided_at
"""


def _row_to_request(r: dict) -> ODRequest:
    return ODRequest(
        request_id=int(r["request_id"]),
        student_id=int(r["student_id"]),
        student_name=r["student_name"],
        title=r["title"],
        description=r["description"],
        leave_type=LeaveType(r["leave_type"]),
        category=ODCategory(r["category"]),
        department=r["department"],
        date_from=r["date_from"],
        date_to=r["date_to"],
        status=ODStatus(r["status"]),
        submitted_at=as_utc(r["submitted_at"]),
        event_name=r.get("event_name"),
        file_url=r.get("file_url"),
        tutor_comments=r.get("tutor_comments"),
        hod_comments=r.get("hod_comments"),
        decided_at=as_utc(r.get("decided_at")),
    )


class MySQLODRequestRepository(ODRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        student_id: int,
        student_name: str,
        title: str,
        description: str,
        leave_type: LeaveType,
        category: ODCategory,
        department: str,
        event_name: Optional[str],
        date_from: date,
        date_to: date,
        file_url: Optional[str],
        submitted_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO od_requests(
                    student_id, student_name, title, description, leave_type, category,
                    department, event_name, date_from, date_to, status, file_url, submitted_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(student_id),
                    student_name,
                    title,
                    description,
                    leave_type.value,
                    category.value,
                    department,
                    event_name,
                    date_from,
                    date_to,
                    ODStatus.PENDING.value,
                    file_url,
                    to_db_datetime(submitted_at),
                ),
            )
            return int(cur.lastrowid)

    def get(self, *, request_id: int) -> Optional[ODRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM od_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def list_requests(
        self,
        *,
        student_id: Optional[int] = None,
        statuses: Optional[Iterable[ODStatus]] = None,
        limit: int = 200,
    ) -> Sequence[ODRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if student_id is not None:
            clauses.append("student_id=%s")
            params.append(int(student_id))
        if statuses is not None:
            values = [s.value for s in statuses]
            if not values:
                return []
            clauses.append(f"status IN ({','.join(['%s'] * len(values))})")
            params.extend(values)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM od_requests
                WHERE {where}
                ORDER BY submitted_at DESC, request_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        expected_status: ODStatus,
        status: ODStatus,
        tutor_comments: Optional[str],
        hod_comments: Optional[str],
        decided_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE od_requests
                SET status=%s, tutor_comments=%s, hod_comments=%s, decided_at=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    tutor_comments,
                    hod_comments,
                    to_db_datetime(decided_at),
                    int(request_id),
                    expected_status.value,
                ),
            )
            return cur.rowcount > 0

    def count_by_status(self) -> dict[ODStatus, int]:
        counts = {s: 0 for s in ODStatus}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT status, COUNT(*) AS n FROM od_requests GROUP BY status")
            for r in fetchall(cur):
                counts[ODStatus(r["status"])] = int(r["n"])
        return counts
