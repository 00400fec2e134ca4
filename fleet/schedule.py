"""MaintenanceSchedule class for recurring maintenance obligations."""

from datetime import date, datetime
from typing import Optional

from .recurrence import RecurrenceUnit, ScheduleKind


class MaintenanceSchedule:
    """A recurring maintenance obligation tied to one vehicle."""

    def __init__(
            self,
            id: str,
            vehicle_id: str,
            name: str,
            description: str,
            recurrence_unit: RecurrenceUnit,
            recurrence_value: int,
            next_due: date,
            created_at: datetime,
            kind: ScheduleKind = ScheduleKind.PREVENTIVE,
            last_performed: Optional[date] = None,
            is_active: bool = True,
    ):
        self.id = id
        self.vehicle_id = vehicle_id
        self.kind = kind
        self.name = name
        self.description = description
        self.recurrence_unit = recurrence_unit
        self.recurrence_value = recurrence_value
        self.last_performed = last_performed
        self.next_due = next_due
        self.is_active = is_active
        self.created_at = created_at

    @property
    def recurrence_label(self) -> str:
        """Human-readable recurrence, e.g. 'every 90 days'."""
        return f"every {self.recurrence_value:,} {self.recurrence_unit.label}"

    @property
    def usage_based(self) -> bool:
        """True for mileage/hours schedules, whose due date is approximated."""
        return self.recurrence_unit is not RecurrenceUnit.TIME

    def matches(self, text: str) -> bool:
        """Case-insensitive substring match over name and description."""
        needle = text.lower()
        return needle in self.name.lower() or needle in self.description.lower()

    def __repr__(self) -> str:
        return f"MaintenanceSchedule(id={self.id!r}, name={self.name!r}, next_due={self.next_due})"
