from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import time
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.memory_repository import InMemorySessionRepository
from .attendance.mysql_session_repository import MySQLSessionRepository
from .attendance.repository import SessionRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_HR_PASSWORD, DEFAULT_LATE_CUTOFF
from .database.connection import DBConfig, DatabaseConnection
from .hr.service import HRAuthService
from .reports.service import AttendanceExportService

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = {"mysql", "memory"}


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    sessions_repo: SessionRepository

    attendance_service: AttendanceService
    hr_auth_service: HRAuthService
    export_service: AttendanceExportService

    def close(self) -> None:
        # Connections are per-operation; nothing pooled to release.
        logger.info("Container closed")


def build_container(
    *,
    backend: str = "mysql",
    db_config: Optional[dict] = None,
    hr_password: str = DEFAULT_HR_PASSWORD,
    late_cutoff: time = DEFAULT_LATE_CUTOFF,
) -> Container:
    backend = backend.lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(f"Unknown storage backend {backend!r}; expected one of {sorted(STORAGE_BACKENDS)}")

    conn: Optional[DatabaseConnection] = None
    sessions_repo: SessionRepository
    if backend == "mysql":
        if not db_config:
            raise ValueError("db_config is required for the mysql backend")
        conn = DatabaseConnection(DBConfig.from_mapping(db_config))
        sessions_repo = MySQLSessionRepository(conn)
    else:
        sessions_repo = InMemorySessionRepository()

    attendance_service = AttendanceService(
        sessions_repo,
        strategy_factory=AttendanceStrategyFactory(late_cutoff=late_cutoff),
    )
    hr_auth_service = HRAuthService.from_plaintext(hr_password)
    export_service = AttendanceExportService(attendance_service)

    logger.info(f"Container built (backend={backend}, late_cutoff={late_cutoff.strftime('%H:%M')})")

    return Container(
        conn=conn,
        sessions_repo=sessions_repo,
        attendance_service=attendance_service,
        hr_auth_service=hr_auth_service,
        export_service=export_service,
    )
