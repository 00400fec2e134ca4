"""ScheduleStatus dataclass for an evaluated schedule."""

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from .status import Status

if TYPE_CHECKING:
    from .schedule import MaintenanceSchedule


@dataclass
class ScheduleStatus:
    """Urgency of one schedule relative to a reference date."""

    schedule: "MaintenanceSchedule"
    status: Status
    next_due: date
    days_until: int

    @property
    def is_due(self) -> bool:
        return self.status in (Status.OVERDUE, Status.DUE_SOON)
