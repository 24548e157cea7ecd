from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import format_hours
from ..common.validators import (
    require_day_key,
    require_department,
    require_non_negative_number,
)
from ..core.enums import Department, SessionStatus


@dataclass(frozen=True)
class Session:
    """Domain entity: one employee's clock-in to clock-out interval for a day."""

    id: str
    employee_name: str
    department: Department
    clock_in_time: datetime
    status: SessionStatus
    date: str
    clock_out_time: Optional[datetime] = None
    total_hours: Optional[float] = None
    clocked_in_late: bool = False

    @property
    def is_open(self) -> bool:
        return self.clock_out_time is None

    def with_changes(self, **fields: Any) -> "Session":
        return replace(self, **fields)

    def to_dict(self) -> dict:
        """JSON shape used by the API layer (camelCase like the HR dashboard)."""
        return {
            "id": self.id,
            "employeeName": self.employee_name,
            "department": self.department.value,
            "clockInTime": self.clock_in_time.isoformat(),
            "clockOutTime": self.clock_out_time.isoformat() if self.clock_out_time else None,
            "totalHours": format_hours(self.total_hours),
            "totalHoursValue": self.total_hours,
            "status": self.status.value,
            "date": self.date,
        }


@dataclass(frozen=True)
class SessionFilter:
    """Conjunctive listing filter; None means "not supplied"."""

    employee_name: Optional[str] = None
    department: Optional[Department] = None
    date: Optional[str] = None
    min_hours: Optional[float] = None

    @classmethod
    def from_mapping(cls, args: Mapping[str, Any]) -> "SessionFilter":
        """Build a filter from raw query arguments (camelCase keys)."""

        def _arg(key: str) -> Optional[str]:
            value = args.get(key)
            if value is None:
                return None
            value = str(value).strip()
            return value or None

        return cls(
            employee_name=_arg("employeeName"),
            department=_arg("department"),
            date=_arg("date"),
            min_hours=_arg("minHours"),
        ).validated()

    def validated(self) -> "SessionFilter":
        """Normalized copy; raises ValidationError for malformed fields."""
        name = self.employee_name.strip() if self.employee_name else None
        return SessionFilter(
            employee_name=name or None,
            department=require_department(self.department) if self.department is not None else None,
            date=require_day_key(self.date) if self.date is not None else None,
            min_hours=require_non_negative_number(self.min_hours, "minHours") if self.min_hours is not None else None,
        )

    def matches(self, session: Session) -> bool:
        if self.employee_name and self.employee_name.lower() not in session.employee_name.lower():
            return False
        if self.department is not None and session.department != self.department:
            return False
        if self.date is not None and session.date != self.date:
            return False
        if self.min_hours is not None:
            if session.total_hours is None or session.total_hours < self.min_hours:
                return False
        return True


@dataclass(frozen=True)
class EmployeeStatus:
    is_active: bool
    session: Optional[Session]

    def to_dict(self) -> dict:
        return {
            "isActive": self.is_active,
            "record": self.session.to_dict() if self.session else None,
        }


@dataclass(frozen=True)
class AttendanceStatistics:
    """Read-model for the HR dashboard header cards (today only)."""

    total_employees: int
    currently_active: int
    late_today: int
    avg_hours_today: float

    def to_dict(self) -> dict:
        return {
            "totalEmployees": self.total_employees,
            "currentlyActive": self.currently_active,
            "lateToday": self.late_today,
            "avgHoursToday": self.avg_hours_today,
        }
