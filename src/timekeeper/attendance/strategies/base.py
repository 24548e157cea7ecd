from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...core.enums import SessionStatus


@dataclass(frozen=True)
class StatusDecision:
    status: SessionStatus
    clocked_in_late: bool = False


class AttendanceStrategy(ABC):
    """Strategy Pattern: decide the status a session opens with."""

    @abstractmethod
    def decide_clock_in(self, *, now: datetime) -> StatusDecision:
        raise NotImplementedError
