#!/usr/bin/env python3
"""Tests for due-date and urgency calculation helpers."""
import pytest
from datetime import date, datetime, timedelta, timezone

from fleet import (
    InvalidArgument,
    RecurrenceUnit,
    Status,
    classify,
    compute_next_due,
    days_until,
    to_date,
    to_datetime,
)

NOW = date(2024, 3, 15)


class TestToDate:
    """Tests for to_date normalization."""

    def test_date_unchanged(self):
        assert to_date(date(2024, 1, 1)) == date(2024, 1, 1)

    def test_datetime_truncated(self):
        assert to_date(datetime(2024, 1, 1, 23, 59)) == date(2024, 1, 1)

    def test_iso_date_string(self):
        assert to_date("2024-02-29") == date(2024, 2, 29)

    def test_iso_timestamp_string_truncated(self):
        """No timezone conversion: the written calendar date is kept."""
        assert to_date("2024-01-01T23:30:00-05:00") == date(2024, 1, 1)
        assert to_date("2024-01-01T00:00:00Z") == date(2024, 1, 1)

    def test_invalid_string(self):
        with pytest.raises(InvalidArgument):
            to_date("next tuesday")

    def test_invalid_type(self):
        with pytest.raises(InvalidArgument):
            to_date(20240101)


class TestToDatetime:
    """Tests for to_datetime normalization."""

    def test_datetime_unchanged(self):
        value = datetime(2024, 1, 1, 8, 30)
        assert to_datetime(value) is value

    def test_iso_timestamp_string(self):
        assert to_datetime("2024-01-01T08:30:00") == datetime(2024, 1, 1, 8, 30)

    def test_date_only_string_is_midnight(self):
        assert to_datetime("2024-01-01") == datetime(2024, 1, 1)

    def test_invalid_string(self):
        with pytest.raises(InvalidArgument, match="yesterday"):
            to_datetime("yesterday")

    def test_invalid_type(self):
        with pytest.raises(InvalidArgument):
            to_datetime(1704067200)


class TestComputeNextDueTime:
    """Tests for time-based recurrence."""

    def test_from_last_performed(self):
        """last_performed + value days."""
        assert compute_next_due("time", 30, date(2024, 1, 1), NOW) == date(2024, 1, 31)

    def test_independent_of_now(self):
        last = date(2023, 6, 10)
        expected = last + timedelta(days=45)
        for now in (date(2020, 1, 1), date(2023, 6, 10), date(2030, 12, 31)):
            assert compute_next_due("time", 45, last, now) == expected

    def test_crosses_leap_day(self):
        """2024-01-01 + 90 days lands on 2024-03-31."""
        assert compute_next_due("time", 90, date(2024, 1, 1), NOW) == date(2024, 3, 31)

    def test_never_performed_counts_from_now(self):
        assert compute_next_due("time", 10, None, NOW) == date(2024, 3, 25)

    def test_accepts_enum_and_strings(self):
        assert compute_next_due(RecurrenceUnit.TIME, 10, "2024-01-01", "2024-02-01") == date(2024, 1, 11)

    def test_datetime_now_truncated(self):
        assert compute_next_due("time", 1, None, datetime(2024, 3, 15, 23, 59)) == date(2024, 3, 16)

    def test_now_defaults_to_today(self):
        assert compute_next_due("time", 5) == date.today() + timedelta(days=5)


class TestComputeNextDueUsage:
    """Tests for mileage/hours recurrence (fixed 30 day horizon)."""

    @pytest.mark.parametrize("unit", ["mileage", "hours"])
    def test_thirty_days_from_now(self, unit):
        assert compute_next_due(unit, 5000, None, NOW) == date(2024, 4, 14)

    @pytest.mark.parametrize("unit", ["mileage", "hours"])
    def test_ignores_value_and_last_performed(self, unit):
        assert compute_next_due(unit, 1, date(2020, 1, 1), NOW) == NOW + timedelta(days=30)
        assert compute_next_due(unit, 100000, date(2024, 3, 1), NOW) == NOW + timedelta(days=30)

    def test_hours_schedule_example(self):
        """500 engine-hours, never performed, created 2024-02-13."""
        assert compute_next_due("hours", 500, None, date(2024, 2, 13)) == date(2024, 3, 14)


class TestComputeNextDueErrors:
    """Tests for rejected inputs."""

    @pytest.mark.parametrize("value", [0, -5])
    def test_non_positive_value(self, value):
        with pytest.raises(InvalidArgument):
            compute_next_due("time", value, None, NOW)

    @pytest.mark.parametrize("value", [1.5, "30", None, True])
    def test_non_integer_value(self, value):
        with pytest.raises(InvalidArgument):
            compute_next_due("time", value, None, NOW)

    def test_unknown_unit(self):
        with pytest.raises(InvalidArgument):
            compute_next_due("distance", 10, None, NOW)

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            compute_next_due("mileage", 0, None, NOW)


class TestDaysUntil:
    """Tests for days_until."""

    def test_date_difference(self):
        assert days_until(date(2024, 4, 1), NOW) == 17
        assert days_until(NOW, NOW) == 0
        assert days_until(date(2024, 3, 10), NOW) == -5

    def test_partial_day_rounds_up(self):
        """Due tomorrow at 10:00 today is 14 hours away, counted as 1 day."""
        assert days_until(date(2024, 3, 16), datetime(2024, 3, 15, 10, 0)) == 1

    def test_six_point_one_days_counts_as_seven(self):
        now = datetime(2024, 3, 15, 21, 36)
        assert days_until(date(2024, 3, 22), now) == 7

    def test_due_today_with_time_of_day_is_zero(self):
        assert days_until(NOW, datetime(2024, 3, 15, 10, 0)) == 0

    def test_aware_datetime_not_converted(self):
        now = datetime(2024, 3, 15, 10, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert days_until(date(2024, 3, 16), now) == 1

    def test_string_inputs(self):
        assert days_until("2024-04-01", "2024-03-15") == 17


class TestClassify:
    """Tests for classify boundaries."""

    def test_yesterday_is_overdue(self):
        assert classify(NOW - timedelta(days=1), NOW) == Status.OVERDUE

    def test_today_is_overdue(self):
        """Due the same day counts as overdue."""
        assert classify(NOW, NOW) == Status.OVERDUE
        assert classify(date(2024, 2, 20), date(2024, 2, 20)) == Status.OVERDUE

    def test_tomorrow_is_due_soon(self):
        assert classify(NOW + timedelta(days=1), NOW) == Status.DUE_SOON

    def test_seven_days_is_due_soon(self):
        assert classify(NOW + timedelta(days=7), NOW) == Status.DUE_SOON

    def test_eight_days_is_on_track(self):
        assert classify(NOW + timedelta(days=8), NOW) == Status.ON_TRACK

    def test_partial_eighth_day_is_on_track(self):
        assert classify(date(2024, 3, 23), datetime(2024, 3, 15, 0, 0, 1)) == Status.ON_TRACK

    def test_idempotent(self):
        due = NOW + timedelta(days=3)
        assert classify(due, NOW) == classify(due, NOW) == Status.DUE_SOON

    def test_stored_quarterly_schedule_on_track(self):
        """next_due 2024-04-01 seen on 2024-03-15 is 17 days out."""
        assert classify("2024-04-01", "2024-03-15") == Status.ON_TRACK
