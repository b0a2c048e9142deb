from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .events.memory_event_repository import MemoryEventRepository
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import EventService
from .od_requests.memory_od_request_repository import MemoryODRequestRepository
from .od_requests.mysql_od_request_repository import MySQLODRequestRepository
from .od_requests.repository import ODRequestRepository
from .od_requests.service import ODRequestService
from .users.memory_user_repository import MemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, TokenSigner, UserService

STORAGE_BACKENDS = ("mysql", "memory")


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    events_repo: EventRepository
    od_requests_repo: ODRequestRepository

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    event_service: EventService
    od_request_service: ODRequestService


def build_container(
    *,
    secret_key: str,
    storage_backend: str = "mysql",
    db_config: Optional[Mapping[str, object]] = None,
    token_max_age: Optional[int] = None,
) -> Container:
    if storage_backend not in STORAGE_BACKENDS:
        raise ValueError(f"Unknown storage backend: {storage_backend!r}")

    conn: Optional[DatabaseConnection] = None
    if storage_backend == "mysql":
        conn = DatabaseConnection(DBConfig.from_mapping(db_config or {}))
        users_repo = MySQLUserRepository(conn)
        events_repo = MySQLEventRepository(conn)
        od_requests_repo = MySQLODRequestRepository(conn)
    else:
        users_repo = MemoryUserRepository()
        events_repo = MemoryEventRepository()
        od_requests_repo = MemoryODRequestRepository()

    tokens = TokenSigner(secret_key) if token_max_age is None else TokenSigner(secret_key, max_age=token_max_age)

    return Container(
        conn=conn,
        users_repo=users_repo,
        events_repo=events_repo,
        od_requests_repo=od_requests_repo,
        auth_service=AuthService(users_repo, tokens),
        user_service=UserService(users_repo),
        attendance_service=AttendanceService(users_repo),
        event_service=EventService(events_repo),
        od_request_service=ODRequestService(od_requests_repo),
    )
