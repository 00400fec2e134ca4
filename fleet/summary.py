"""Per-schedule evaluation and summary counts for dashboards."""

from dataclasses import dataclass
from typing import Iterable, Optional

from .calculations import DateLike, classify, days_until
from .schedule import MaintenanceSchedule
from .schedule_status import ScheduleStatus
from .status import Status


@dataclass(frozen=True)
class StatusCounts:
    """Active schedule counts per urgency bucket."""

    overdue: int = 0
    due_soon: int = 0
    on_track: int = 0

    @property
    def total(self) -> int:
        return self.overdue + self.due_soon + self.on_track


def evaluate(
    schedule: MaintenanceSchedule, now: Optional[DateLike] = None
) -> ScheduleStatus:
    """Classify a schedule by its stored next due date."""
    return ScheduleStatus(
        schedule=schedule,
        status=classify(schedule.next_due, now),
        next_due=schedule.next_due,
        days_until=days_until(schedule.next_due, now),
    )


def aggregate(
    schedules: Iterable[MaintenanceSchedule], now: Optional[DateLike] = None
) -> StatusCounts:
    """
    Count active schedules by urgency.

    Inactive schedules are skipped. Each count is exactly the number of
    active schedules `classify` puts in that bucket.
    """
    statuses = [classify(s.next_due, now) for s in schedules if s.is_active]
    return StatusCounts(
        overdue=statuses.count(Status.OVERDUE),
        due_soon=statuses.count(Status.DUE_SOON),
        on_track=statuses.count(Status.ON_TRACK),
    )
