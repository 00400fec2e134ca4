"""Shared fixtures for schedule tests."""

from datetime import date, datetime

import pytest

from fleet import MaintenanceSchedule, RecurrenceUnit, ScheduleKind, ScheduleStore, Vehicle


@pytest.fixture
def make_schedule():
    """Factory for schedules with sensible defaults."""
    counter = iter(range(1, 10000))

    def _make(next_due, is_active=True, **overrides):
        n = next(counter)
        fields = dict(
            id=str(n),
            vehicle_id="1",
            name=f"Schedule {n}",
            description="Routine service",
            recurrence_unit=RecurrenceUnit.TIME,
            recurrence_value=30,
            next_due=next_due,
            created_at=datetime(2024, 1, 1),
            kind=ScheduleKind.PREVENTIVE,
            is_active=is_active,
        )
        fields.update(overrides)
        return MaintenanceSchedule(**fields)

    return _make


@pytest.fixture
def store():
    """Empty store pinned to 2024-02-13 with two vehicles."""
    return ScheduleStore(
        vehicles=[
            Vehicle("1", "ABC-123", "Volvo", "FH16"),
            Vehicle("4", "JKL-012", "Scania", "R450", status="maintenance"),
        ],
        clock=lambda: date(2024, 2, 13),
    )
