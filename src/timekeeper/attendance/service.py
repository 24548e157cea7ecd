from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import day_key, hours_between, now_local, round_half_up
from ..common.validators import require_department, require_non_empty
from ..core.constants import AVERAGE_HOURS_DECIMALS
from ..core.enums import Department, SessionStatus
from ..core.exceptions import (
    AlreadyClosedError,
    DuplicateSessionError,
    InvalidDurationError,
    NotFoundError,
)
from .factory import AttendanceStrategyFactory
from .model import AttendanceStatistics, EmployeeStatus, Session, SessionFilter
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases: clock in/out, status, listing and daily statistics."""

    def __init__(
        self,
        sessions: SessionRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        clock: Callable[[], datetime] = now_local,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._sessions = sessions
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._clock = clock
        self._new_id = id_factory

    def clock_in(self, employee_name: str, department: Department | str, *, now: datetime | None = None) -> Session:
        employee_name = require_non_empty(employee_name, "Employee name")
        department = require_department(department)

        now = now or self._clock()
        today = day_key(now)

        existing = self._sessions.find_open_by_employee_and_date(employee_name, today)
        if existing:
            logger.warning(
                "Duplicate clock-in rejected",
                extra={"employee_name": employee_name, "record_id": existing.id},
            )
            raise DuplicateSessionError(record_id=existing.id)

        decision = self._factory.for_clock_in(now=now).decide_clock_in(now=now)
        session = Session(
            id=self._new_id(),
            employee_name=employee_name,
            department=department,
            clock_in_time=now,
            status=decision.status,
            date=today,
            clocked_in_late=decision.clocked_in_late,
        )
        created = self._sessions.insert(session)
        logger.info(
            f"Clock-in recorded ({created.status.value})",
            extra={"employee_name": employee_name, "record_id": created.id},
        )
        return created

    def clock_out(self, record_id: str, *, now: datetime | None = None) -> Session:
        record_id = require_non_empty(record_id, "Record ID")

        record = self._sessions.get_by_id(record_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        if record.clock_out_time is not None:
            raise AlreadyClosedError("Employee already clocked out")

        now = now or self._clock()
        if now <= record.clock_in_time:
            raise InvalidDurationError("Clock-out time must be after clock-in time")

        # Lateness stays on clocked_in_late; the status only records the close.
        updated = self._sessions.close(
            record.id,
            clock_out_time=now,
            total_hours=hours_between(record.clock_in_time, now),
            status=SessionStatus.COMPLETED,
        )
        if updated is None:
            raise NotFoundError("Attendance record not found")

        logger.info(
            f"Clock-out recorded ({updated.total_hours}h)",
            extra={"employee_name": updated.employee_name, "record_id": updated.id},
        )
        return updated

    def get_status(self, employee_name: str, *, now: datetime | None = None) -> EmployeeStatus:
        employee_name = require_non_empty(employee_name, "Employee name")
        today = day_key(now or self._clock())
        session = self._sessions.find_open_by_employee_and_date(employee_name, today)
        return EmployeeStatus(is_active=session is not None, session=session)

    def list_sessions(self, filters: Optional[SessionFilter] = None) -> list[Session]:
        filters = (filters or SessionFilter()).validated()
        return list(self._sessions.query_by_filter(filters))

    def get_record(self, record_id: str) -> Session:
        record = self._sessions.get_by_id(require_non_empty(record_id, "Record ID"))
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def get_statistics(self, *, now: datetime | None = None) -> AttendanceStatistics:
        today = day_key(now or self._clock())
        todays = self._sessions.query_by_date(today)

        hours = [s.total_hours for s in todays if s.total_hours is not None]
        avg = round_half_up(sum(hours) / len(hours), AVERAGE_HOURS_DECIMALS) if hours else 0.0

        return AttendanceStatistics(
            total_employees=len({s.employee_name for s in todays}),
            currently_active=sum(1 for s in todays if s.status == SessionStatus.ACTIVE),
            late_today=sum(1 for s in todays if s.clocked_in_late),
            avg_hours_today=avg,
        )
