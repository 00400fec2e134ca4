"""Helper functions for schedule due-date and urgency calculations."""

import math
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from dateutil.parser import isoparse

from .errors import InvalidArgument
from .recurrence import RecurrenceUnit, parse_unit
from .status import Status
from .validation import check_recurrence_value

DateLike = Union[date, datetime, str]

DUE_SOON_DAYS = 7
USAGE_FALLBACK_DAYS = 30  # mileage/hours schedules have no telemetry here


def to_date(value: DateLike) -> date:
    """
    Normalize a date, datetime or ISO-8601 string to a calendar date.

    Full timestamps are truncated to their date part; no timezone
    conversion is done.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return isoparse(value).date()
        except ValueError as e:
            raise InvalidArgument(f"Invalid date {value!r}: {e}") from None
    raise InvalidArgument(f"Expected a date, got {type(value).__name__}")


def to_datetime(value: Union[datetime, str]) -> datetime:
    """Normalize a datetime or ISO-8601 timestamp string to a datetime."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return isoparse(value)
        except ValueError as e:
            raise InvalidArgument(f"Invalid timestamp {value!r}: {e}") from None
    raise InvalidArgument(f"Expected a timestamp, got {type(value).__name__}")


def compute_next_due(
    recurrence_unit: Union[str, RecurrenceUnit],
    recurrence_value: int,
    last_performed: Optional[DateLike] = None,
    now: Optional[DateLike] = None,
) -> date:
    """
    Calculate the next due date for a schedule.

    - time: last_performed + value days, or now + value days if never performed
    - mileage/hours: now + 30 days (no odometer or engine-hour readings)
    """
    unit = parse_unit(recurrence_unit)
    check_recurrence_value(recurrence_value)

    today = to_date(now) if now is not None else date.today()

    if unit is RecurrenceUnit.TIME:
        start = to_date(last_performed) if last_performed is not None else today
        return start + timedelta(days=recurrence_value)
    return today + timedelta(days=USAGE_FALLBACK_DAYS)


def days_until(next_due: DateLike, now: Optional[DateLike] = None) -> int:
    """
    Whole days from now until next_due, rounding partial days up.

    A datetime `now` part-way through a day counts what is left of the
    gap to the due date's midnight as a full day.
    """
    due = to_date(next_due)
    if now is None:
        now = date.today()
    if isinstance(now, datetime):
        delta = datetime.combine(due, time.min) - now.replace(tzinfo=None)
        return math.ceil(delta.total_seconds() / 86400)
    return (due - to_date(now)).days


def classify(next_due: DateLike, now: Optional[DateLike] = None) -> Status:
    """Determine urgency of a due date. Due today counts as overdue."""
    remaining = days_until(next_due, now)
    if remaining <= 0:
        return Status.OVERDUE
    if remaining <= DUE_SOON_DAYS:
        return Status.DUE_SOON
    return Status.ON_TRACK
