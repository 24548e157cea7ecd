from __future__ import annotations

from typing import Any

from ..core.enums import Department
from ..core.exceptions import ValidationError
from .datetime_utils import day_key, parse_iso_date


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_department(value: Any) -> Department:
    if isinstance(value, Department):
        return value
    try:
        return Department(value)
    except ValueError:
        allowed = ", ".join(d.value for d in Department)
        raise ValidationError(f"Invalid department {value!r}; expected one of: {allowed}") from None


def require_day_key(value: Any, field_name: str = "Date") -> str:
    text = require_non_empty(value, field_name)
    try:
        return day_key(parse_iso_date(text))
    except ValueError:
        raise ValidationError(f"{field_name} must use YYYY-MM-DD format") from None


def require_non_negative_number(value: Any, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number") from None
    if number != number or number < 0:
        raise ValidationError(f"{field_name} must be zero or greater")
    return number
