from __future__ import annotations

from ..core.constants import MIN_DURATION_SECONDS
from ..core.enums import GenderFilter
from ..core.exceptions import ValidationError


def require_int(value, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer") from None


def require_duration(value, field_name: str = "duration_seconds", min_seconds: int = MIN_DURATION_SECONDS) -> int:
    seconds = require_int(value, field_name)
    if seconds < min_seconds:
        raise ValidationError(f"{field_name} must be at least {min_seconds} seconds")
    return seconds


def require_gender_filter(value) -> GenderFilter:
    if value is None or value == "":
        return GenderFilter.ALL
    try:
        return GenderFilter(str(value))
    except ValueError:
        raise ValidationError(f"Unknown gender filter: {value!r}") from None


def as_flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)
