from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..common.datetime_utils import day_key, parse_iso_date
from ..core.enums import OPEN_STATUSES, Department, SessionStatus
from ..core.exceptions import AlreadyClosedError, DuplicateSessionError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, storage_errors
from .model import Session, SessionFilter
from .repository import SessionRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    session_id, employee_name, department, clock_in_time, clock_out_time,
    total_hours, status, work_date, clocked_in_late
"""

# Session field -> column for partial updates.
_UPDATABLE = {
    "clock_out_time": "clock_out_time",
    "total_hours": "total_hours",
    "status": "status",
}

# Unique index guarding one open session per employee and day (schema.sql).
_OPEN_SESSION_KEY = "uq_open_session"


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_db(value: Any) -> Any:
    if isinstance(value, (SessionStatus, Department)):
        return value.value
    return value


def _row_to_session(r: dict) -> Session:
    work_date = r["work_date"]
    total_hours = r.get("total_hours")
    return Session(
        id=str(r["session_id"]),
        employee_name=r["employee_name"],
        department=Department(r["department"]),
        clock_in_time=r["clock_in_time"],
        clock_out_time=r.get("clock_out_time"),
        total_hours=float(total_hours) if isinstance(total_hours, (Decimal, float, int)) else None,
        status=SessionStatus(r["status"]),
        date=day_key(work_date) if isinstance(work_date, date) else str(work_date),
        clocked_in_late=bool(r.get("clocked_in_late")),
    )


class MySQLSessionRepository(SessionRepository):
    """Durable repository; open-session uniqueness is a unique index (see schema.sql)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, session: Session) -> Session:
        try:
            with storage_errors("insert"):
                try:
                    with db_cursor(self._conn_factory) as (_, cur):
                        cur.execute(
                            """
                            INSERT INTO attendance_sessions(
                                session_id, employee_name, department, clock_in_time, clock_out_time,
                                total_hours, status, work_date, clocked_in_late
                            )
                            VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                            """,
                            (
                                session.id,
                                session.employee_name,
                                session.department.value,
                                session.clock_in_time,
                                session.clock_out_time,
                                session.total_hours,
                                session.status.value,
                                parse_iso_date(session.date),
                                int(session.clocked_in_late),
                            ),
                        )
                except mysql.connector.IntegrityError as exc:
                    if exc.errno != errorcode.ER_DUP_ENTRY or _OPEN_SESSION_KEY not in str(exc.msg):
                        raise
                    existing = self.find_open_by_employee_and_date(session.employee_name, session.date)
                    raise DuplicateSessionError(record_id=existing.id if existing else None) from exc
        except DuplicateSessionError:
            logger.warning(f"Open session conflict for {session.employee_name!r} on {session.date}")
            raise
        return session

    def get_by_id(self, session_id: str) -> Optional[Session]:
        with storage_errors("get_by_id"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_sessions WHERE session_id=%s",
                (session_id,),
            )
            r = fetchone(cur)
            return _row_to_session(r) if r else None

    def update(self, session_id: str, **fields: Any) -> Optional[Session]:
        unknown = set(fields) - set(_UPDATABLE)
        if unknown:
            raise ValueError(f"Unsupported session fields for update: {sorted(unknown)}")

        if fields:
            assignments = ", ".join(f"{_UPDATABLE[name]}=%s" for name in fields)
            params = [_to_db(v) for v in fields.values()]
            params.append(session_id)
            with storage_errors("update"), db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE attendance_sessions SET {assignments} WHERE session_id=%s",
                    tuple(params),
                )
        return self.get_by_id(session_id)

    def close(
        self,
        session_id: str,
        *,
        clock_out_time: datetime,
        total_hours: float,
        status: SessionStatus,
    ) -> Optional[Session]:
        with storage_errors("close"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_sessions
                SET clock_out_time=%s, total_hours=%s, status=%s
                WHERE session_id=%s AND clock_out_time IS NULL
                """,
                (clock_out_time, total_hours, status.value, session_id),
            )
            changed = cur.rowcount

        current = self.get_by_id(session_id)
        if current is None:
            return None
        if changed == 0:
            raise AlreadyClosedError("Employee already clocked out")
        return current

    def find_open_by_employee_and_date(self, employee_name: str, day: str) -> Optional[Session]:
        with storage_errors("find_open_by_employee_and_date"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE employee_name=%s AND work_date=%s AND status IN (%s, %s)
                ORDER BY seq DESC
                LIMIT 1
                """,
                (employee_name, parse_iso_date(day), *(s.value for s in OPEN_STATUSES)),
            )
            r = fetchone(cur)
            return _row_to_session(r) if r else None

    def query_by_filter(self, filters: SessionFilter) -> Sequence[Session]:
        clauses: list[str] = []
        params: list[object] = []

        if filters.employee_name:
            clauses.append("LOWER(employee_name) LIKE %s")
            params.append(f"%{_escape_like(filters.employee_name.lower())}%")
        if filters.department is not None:
            clauses.append("department=%s")
            params.append(filters.department.value)
        if filters.date is not None:
            clauses.append("work_date=%s")
            params.append(parse_iso_date(filters.date))
        if filters.min_hours is not None:
            clauses.append("total_hours IS NOT NULL AND total_hours >= %s")
            params.append(filters.min_hours)

        return self._select(" AND ".join(clauses) or "1=1", params, operation="query_by_filter")

    def query_by_date(self, day: str) -> Sequence[Session]:
        return self._select("work_date=%s", [parse_iso_date(day)], operation="query_by_date")

    def _select(self, where: str, params: list[object], *, operation: str) -> list[Session]:
        with storage_errors(operation), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE {where}
                ORDER BY clock_in_time DESC, seq DESC
                """,
                tuple(params),
            )
            return [_row_to_session(r) for r in fetchall(cur)]
