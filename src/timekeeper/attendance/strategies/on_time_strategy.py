from __future__ import annotations

from datetime import datetime

from ...core.enums import SessionStatus
from .base import AttendanceStrategy, StatusDecision


class OnTimeStrategy(AttendanceStrategy):
    """Clock-in at or before the cutoff."""

    def decide_clock_in(self, *, now: datetime) -> StatusDecision:
        return StatusDecision(status=SessionStatus.ACTIVE)
