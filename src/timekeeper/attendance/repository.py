from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from ..core.enums import SessionStatus
from .model import Session, SessionFilter


class SessionRepository(Protocol):
    """Storage capabilities the attendance engine relies on.

    Implementations must enforce open-session uniqueness per
    (employee_name, date) atomically inside ``insert``.
    """

    def insert(self, session: Session) -> Session:
        """Persist a new session; raise DuplicateSessionError if one is already open."""

        raise NotImplementedError

    def get_by_id(self, session_id: str) -> Optional[Session]:
        raise NotImplementedError

    def update(self, session_id: str, **fields: Any) -> Optional[Session]:
        raise NotImplementedError

    def close(
        self,
        session_id: str,
        *,
        clock_out_time: datetime,
        total_hours: float,
        status: SessionStatus,
    ) -> Optional[Session]:
        """Close an open session; raise AlreadyClosedError if it was closed first."""

        raise NotImplementedError

    def find_open_by_employee_and_date(self, employee_name: str, day: str) -> Optional[Session]:
        raise NotImplementedError

    def query_by_filter(self, filters: SessionFilter) -> Sequence[Session]:
        """Matching sessions, newest clock-in first (ties: later insert first)."""

        raise NotImplementedError

    def query_by_date(self, day: str) -> Sequence[Session]:
        raise NotImplementedError
