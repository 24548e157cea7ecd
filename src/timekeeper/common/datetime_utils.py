from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

from ..core.constants import DAY_KEY_FORMAT, HOURS_DECIMALS, HOURS_UNIT_SUFFIX

_SECONDS_PER_HOUR = Decimal(3600)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DAY_KEY_FORMAT).date()


def parse_clock_time(value: str) -> time:
    """Parse HH:MM (or HH:MM:SS) string into time."""
    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid time string: {value!r}")
    seconds = int(parts[2]) if len(parts) == 3 else 0
    return time(hour=int(parts[0]), minute=int(parts[1]), second=seconds)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def day_key(moment: datetime | date) -> str:
    """Calendar-day key (YYYY-MM-DD) used to scope sessions per day."""
    return moment.strftime(DAY_KEY_FORMAT)


def round_half_up(value: float | Decimal, decimals: int) -> float:
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def hours_between(start: datetime, end: datetime, *, decimals: int = HOURS_DECIMALS) -> float:
    """Elapsed hours from start to end, rounded half-up."""
    delta = end - start
    micros = Decimal(delta // timedelta(microseconds=1))
    return round_half_up(micros / Decimal(1_000_000) / _SECONDS_PER_HOUR, decimals)


def format_hours(hours: float | None) -> str | None:
    """Render hours the way the HR dashboard shows them, e.g. 8.5 -> '8.5h'."""
    if hours is None:
        return None
    text = f"{hours:.{HOURS_DECIMALS}f}".rstrip("0").rstrip(".")
    return f"{text}{HOURS_UNIT_SUFFIX}"


def format_clock(moment: datetime | None) -> str:
    return moment.strftime("%H:%M") if moment else "-"
