from __future__ import annotations

import threading
from datetime import datetime
from itertools import count
from typing import Any, Optional, Sequence

from ..core.enums import SessionStatus
from ..core.exceptions import AlreadyClosedError, DuplicateSessionError
from .model import Session, SessionFilter
from .repository import SessionRepository


class InMemorySessionRepository(SessionRepository):
    """Map-backed repository for tests and local development.

    A single lock guards both maps, so the open-session check and the
    insert (or the open check and the close) happen as one step.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[str, Session] = {}
        self._seq: dict[str, int] = {}
        self._counter = count(1)

    def insert(self, session: Session) -> Session:
        with self._lock:
            existing = self._find_open(session.employee_name, session.date)
            if existing is not None:
                raise DuplicateSessionError(record_id=existing.id)
            self._seq[session.id] = next(self._counter)
            self._by_id[session.id] = session
            return session

    def get_by_id(self, session_id: str) -> Optional[Session]:
        with self._lock:
            return self._by_id.get(session_id)

    def update(self, session_id: str, **fields: Any) -> Optional[Session]:
        with self._lock:
            current = self._by_id.get(session_id)
            if current is None:
                return None
            updated = current.with_changes(**fields)
            self._by_id[session_id] = updated
            return updated

    def close(
        self,
        session_id: str,
        *,
        clock_out_time: datetime,
        total_hours: float,
        status: SessionStatus,
    ) -> Optional[Session]:
        with self._lock:
            current = self._by_id.get(session_id)
            if current is None:
                return None
            if not current.is_open:
                raise AlreadyClosedError("Employee already clocked out")
            closed = current.with_changes(clock_out_time=clock_out_time, total_hours=total_hours, status=status)
            self._by_id[session_id] = closed
            return closed

    def find_open_by_employee_and_date(self, employee_name: str, day: str) -> Optional[Session]:
        with self._lock:
            return self._find_open(employee_name, day)

    def query_by_filter(self, filters: SessionFilter) -> Sequence[Session]:
        with self._lock:
            return self._ordered(s for s in self._by_id.values() if filters.matches(s))

    def query_by_date(self, day: str) -> Sequence[Session]:
        with self._lock:
            return self._ordered(s for s in self._by_id.values() if s.date == day)

    # Callers hold _lock.
    def _find_open(self, employee_name: str, day: str) -> Optional[Session]:
        for s in self._by_id.values():
            if s.employee_name == employee_name and s.date == day and s.is_open:
                return s
        return None

    def _ordered(self, sessions) -> list[Session]:
        return sorted(sessions, key=lambda s: (s.clock_in_time, self._seq[s.id]), reverse=True)
