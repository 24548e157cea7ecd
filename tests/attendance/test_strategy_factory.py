from datetime import datetime, time

import pytest

from timekeeper.attendance.factory import AttendanceStrategyFactory
from timekeeper.attendance.strategies.late_strategy import LateStrategy
from timekeeper.attendance.strategies.on_time_strategy import OnTimeStrategy
from timekeeper.core.enums import SessionStatus


@pytest.mark.parametrize(
    "clock, expected",
    [
        (time(9, 0, 0), OnTimeStrategy),
        (time(9, 15, 0), OnTimeStrategy),
        (time(9, 15, 1), LateStrategy),
        (time(10, 0, 0), LateStrategy),
        (time(0, 5, 0), OnTimeStrategy),
    ],
)
def test_factory_clock_in_cutoff(clock, expected):
    factory = AttendanceStrategyFactory()
    now = datetime.combine(datetime(2026, 3, 2).date(), clock)

    assert isinstance(factory.for_clock_in(now=now), expected)


def test_factory_respects_custom_cutoff():
    factory = AttendanceStrategyFactory(late_cutoff=time(8, 0))

    assert isinstance(factory.for_clock_in(now=datetime(2026, 3, 2, 8, 30)), LateStrategy)


@pytest.mark.parametrize("strategy, late", [(OnTimeStrategy(), False), (LateStrategy(), True)])
def test_clock_in_decision_records_lateness(strategy, late):
    decision = strategy.decide_clock_in(now=datetime(2026, 3, 2, 9, 30))

    assert decision.status == (SessionStatus.LATE if late else SessionStatus.ACTIVE)
    assert decision.clocked_in_late is late
