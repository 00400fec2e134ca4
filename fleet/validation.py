"""Field checks shared by the store and the YAML loader."""

from typing import Any

from .errors import InvalidArgument


def require_text(field: str, value: Any) -> str:
    """Reject missing or blank text fields."""
    if value is None or not str(value).strip():
        raise InvalidArgument(f"{field} must not be empty")
    return str(value)


def check_recurrence_value(value: Any) -> int:
    """Recurrence values are positive integers (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"Recurrence value must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidArgument(f"Recurrence value must be positive, got {value}")
    return value
