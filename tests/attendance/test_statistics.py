from __future__ import annotations

from datetime import datetime, timedelta


def test_statistics_for_mixed_day(service, fixed_now):
    service.clock_in("Active Annie", "Other", now=datetime(2026, 3, 2, 8, 30))
    service.clock_in("Late Larry", "Other", now=datetime(2026, 3, 2, 10, 0))
    done = service.clock_in("Done Dana", "Other", now=datetime(2026, 3, 2, 8, 0))
    service.clock_out(done.id, now=datetime(2026, 3, 2, 16, 0))

    stats = service.get_statistics(now=fixed_now)

    assert stats.total_employees == 3
    assert stats.currently_active == 1
    assert stats.late_today == 1
    assert stats.avg_hours_today == 8.0


def test_late_session_stays_late_after_clock_out(service, fixed_now):
    late = service.clock_in("Late Larry", "Other", now=datetime(2026, 3, 2, 9, 30))
    service.clock_out(late.id, now=datetime(2026, 3, 2, 17, 30))

    stats = service.get_statistics(now=fixed_now)

    assert stats.late_today == 1
    assert stats.currently_active == 0


def test_statistics_only_count_today(service, fixed_now):
    yesterday = fixed_now - timedelta(days=1)
    old = service.clock_in("Old Olga", "Other", now=yesterday.replace(hour=10))
    service.clock_out(old.id, now=yesterday.replace(hour=18))

    stats = service.get_statistics(now=fixed_now)

    assert stats.total_employees == 0
    assert stats.late_today == 0
    assert stats.avg_hours_today == 0


def test_statistics_count_distinct_names_and_round_average(service, fixed_now):
    first = service.clock_in("Alice", "Other", now=datetime(2026, 3, 2, 7, 0))
    service.clock_out(first.id, now=datetime(2026, 3, 2, 8, 0))
    second = service.clock_in("Alice", "Other", now=datetime(2026, 3, 2, 8, 30))
    service.clock_out(second.id, now=datetime(2026, 3, 2, 10, 45))

    stats = service.get_statistics(now=fixed_now)

    assert stats.total_employees == 1
    # (1.0 + 2.25) / 2 = 1.625
    assert stats.avg_hours_today == 1.6
