from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..core.constants import DEFAULT_LATE_CUTOFF
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on the lateness cutoff."""

    late_cutoff: time = DEFAULT_LATE_CUTOFF

    def for_clock_in(self, *, now: datetime) -> AttendanceStrategy:
        # Strictly after the cutoff is late: 09:15:00 on time, 09:15:01 late.
        if now.time() > self.late_cutoff:
            return LateStrategy()
        return OnTimeStrategy()
