from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_utc, db_cursor, fetchall, fetchone, normalize_mysql_time, to_db_datetime
from .model import Event
from .repository import EventRepository


def _row_to_event(r: dict) -> Event:
    return Event(
        event_id=int(r["event_id"]),
        title=r["title"],
        description=r["description"],
        date=r["event_date"],
        time=normalize_mysql_time(r["event_time"]),
        department=r["department"],
        created_by=r["created_by"],
        created_at=as_utc(r["created_at"]),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_events(self, *, department: Optional[str] = None) -> Sequence[Event]:
        clauses = ["1=1"]
        params: list[object] = []
        if department:
            clauses.append("department=%s")
            params.append(department)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT event_id, title, description, event_date, event_time,
                       department, created_by, created_at
                FROM events
                WHERE {where}
                ORDER BY event_date, event_time, event_id
                """,
                tuple(params),
            )
            return [_row_to_event(r) for r in fetchall(cur)]

    def get(self, *, event_id: int) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id, title, description, event_date, event_time,
                       department, created_by, created_at
                FROM events
                WHERE event_id=%s
                """,
                (int(event_id),),
            )
            r = fetchone(cur)
            return _row_to_event(r) if r else None

    def create(
        self,
        *,
        title: str,
        description: str,
        event_date: date,
        event_time: time,
        department: str,
        created_by: str,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO events(title, description, event_date, event_time, department, created_by, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (title, description, event_date, event_time, department, created_by, to_db_datetime(created_at)),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        event_id: int,
        title: str,
        description: str,
        event_date: date,
        event_time: time,
        department: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE events
                SET title=%s, description=%s, event_date=%s, event_time=%s, department=%s
                WHERE event_id=%s
                """,
                (title, description, event_date, event_time, department, int(event_id)),
            )
            # rowcount is 0 when nothing changed, so re-check existence
            return cur.rowcount > 0 or self._exists(cur, event_id)

    @staticmethod
    def _exists(cur, event_id: int) -> bool:
        cur.execute("SELECT 1 AS found FROM events WHERE event_id=%s", (int(event_id),))
        return fetchone(cur) is not None

    def delete(self, *, event_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM events WHERE event_id=%s", (int(event_id),))
            return cur.rowcount > 0
