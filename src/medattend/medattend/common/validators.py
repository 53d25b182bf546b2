from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def _as_int(value, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number") from None


def clamp_count(value, field_name: str = "count") -> int:
    return max(0, _as_int(value, field_name))


def clamp_percent(value, field_name: str = "percent") -> int:
    return min(100, max(0, _as_int(value, field_name)))
