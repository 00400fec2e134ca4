"""Enums describing how a schedule recurs and what kind of maintenance it is."""

from enum import Enum
from typing import Union

from .errors import InvalidArgument


class RecurrenceUnit(Enum):
    """Measure used to space out occurrences of a schedule."""

    TIME = "time"  # days
    MILEAGE = "mileage"  # kilometers
    HOURS = "hours"  # engine-hours

    @property
    def label(self) -> str:
        return {"time": "days", "mileage": "km", "hours": "hours"}[self.value]


class ScheduleKind(Enum):
    """Maintenance strategy a schedule belongs to."""

    PREVENTIVE = "preventive"
    PREDICTIVE = "predictive"


def parse_unit(value: Union[str, RecurrenceUnit]) -> RecurrenceUnit:
    """Coerce a string or enum to a RecurrenceUnit."""
    if isinstance(value, RecurrenceUnit):
        return value
    try:
        return RecurrenceUnit(value)
    except ValueError:
        raise InvalidArgument(f"Unknown recurrence unit: {value!r}") from None


def parse_kind(value: Union[str, ScheduleKind]) -> ScheduleKind:
    """Coerce a string or enum to a ScheduleKind."""
    if isinstance(value, ScheduleKind):
        return value
    try:
        return ScheduleKind(value)
    except ValueError:
        raise InvalidArgument(f"Unknown schedule kind: {value!r}") from None
