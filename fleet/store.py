"""ScheduleStore - the owned, injectable collection of schedules and vehicles."""

import logging
import uuid
from datetime import date, datetime
from typing import Callable, Dict, Iterable, List, Optional, Union

from .calculations import DateLike, compute_next_due, to_date
from .errors import InvalidArgument
from .recurrence import RecurrenceUnit, ScheduleKind, parse_kind, parse_unit
from .schedule import MaintenanceSchedule
from .schedule_status import ScheduleStatus
from .summary import StatusCounts, aggregate, evaluate
from .validation import require_text
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "vehicle_id",
    "kind",
    "name",
    "description",
    "recurrence_unit",
    "recurrence_value",
    "last_performed",
    "is_active",
)
# Changing any of these moves the due date
RECURRENCE_FIELDS = ("recurrence_unit", "recurrence_value", "last_performed")


class ScheduleStore:
    """
    Maintenance schedules and the vehicles they reference.

    Each store owns its own collections; nothing is shared between
    instances. `clock` returns "today" and is used whenever an operation
    needs a reference date.
    """

    def __init__(
        self,
        schedules: Optional[Iterable[MaintenanceSchedule]] = None,
        vehicles: Optional[Iterable[Vehicle]] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        self._schedules: Dict[str, MaintenanceSchedule] = {}
        self._vehicles: Dict[str, Vehicle] = {}
        self.clock = clock or date.today
        for schedule in schedules or []:
            self._add(schedule)
        for vehicle in vehicles or []:
            self.add_vehicle(vehicle)

    def _add(self, schedule: MaintenanceSchedule) -> None:
        if schedule.id in self._schedules:
            raise InvalidArgument(f"Duplicate schedule id: {schedule.id!r}")
        self._schedules[schedule.id] = schedule

    def today(self) -> date:
        return to_date(self.clock())

    # -------------------------------------------------------------------------
    # Schedules
    # -------------------------------------------------------------------------

    def create(
        self,
        vehicle_id: str,
        name: str,
        description: str,
        recurrence_unit: Union[str, RecurrenceUnit],
        recurrence_value: int,
        kind: Union[str, ScheduleKind] = ScheduleKind.PREVENTIVE,
        last_performed: Optional[DateLike] = None,
        is_active: bool = True,
    ) -> MaintenanceSchedule:
        """Create a schedule, computing its next due date."""
        unit = parse_unit(recurrence_unit)
        last = to_date(last_performed) if last_performed is not None else None
        next_due = compute_next_due(unit, recurrence_value, last, self.today())

        schedule = MaintenanceSchedule(
            id=uuid.uuid4().hex,
            vehicle_id=require_text("vehicle_id", vehicle_id),
            name=require_text("name", name),
            description=require_text("description", description),
            recurrence_unit=unit,
            recurrence_value=recurrence_value,
            next_due=next_due,
            created_at=datetime.now().replace(microsecond=0),
            kind=parse_kind(kind),
            last_performed=last,
            is_active=bool(is_active),
        )
        self._add(schedule)
        logger.info("Created schedule %s (%s), next due %s", schedule.id, schedule.name, next_due)
        return schedule

    def get(self, schedule_id: str) -> MaintenanceSchedule:
        """Find a schedule by id. Raises KeyError if unknown."""
        try:
            return self._schedules[schedule_id]
        except KeyError:
            raise KeyError(f"Unknown schedule id: {schedule_id!r}") from None

    def list(
        self,
        active_only: bool = False,
        vehicle_id: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[MaintenanceSchedule]:
        """Schedules in insertion order, optionally filtered."""
        result = list(self._schedules.values())
        if active_only:
            result = [s for s in result if s.is_active]
        if vehicle_id is not None:
            result = [s for s in result if s.vehicle_id == vehicle_id]
        if search:
            result = [s for s in result if s.matches(search)]
        return result

    def update(self, schedule_id: str, **fields) -> MaintenanceSchedule:
        """
        Apply field changes to a schedule.

        All values are validated before anything is changed. The next due
        date is recomputed when the recurrence or last performed date
        changes.
        """
        schedule = self.get(schedule_id)
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise InvalidArgument(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        changes = dict(fields)
        for field in ("vehicle_id", "name", "description"):
            if field in changes:
                changes[field] = require_text(field, changes[field])
        if "kind" in changes:
            changes["kind"] = parse_kind(changes["kind"])
        if "recurrence_unit" in changes:
            changes["recurrence_unit"] = parse_unit(changes["recurrence_unit"])
        if changes.get("last_performed") is not None:
            changes["last_performed"] = to_date(changes["last_performed"])
        if "is_active" in changes:
            changes["is_active"] = bool(changes["is_active"])

        next_due = None
        if any(f in changes for f in RECURRENCE_FIELDS):
            next_due = compute_next_due(
                changes.get("recurrence_unit", schedule.recurrence_unit),
                changes.get("recurrence_value", schedule.recurrence_value),
                changes.get("last_performed", schedule.last_performed),
                self.today(),
            )

        for field, value in changes.items():
            setattr(schedule, field, value)
        if next_due is not None:
            schedule.next_due = next_due
        logger.info("Updated schedule %s: %s", schedule.id, ", ".join(sorted(changes)))
        return schedule

    def execute(
        self, schedule_id: str, performed_on: Optional[DateLike] = None
    ) -> MaintenanceSchedule:
        """Record that a schedule was carried out and roll its due date forward."""
        performed = to_date(performed_on) if performed_on is not None else self.today()
        schedule = self.update(schedule_id, last_performed=performed)
        logger.info("Executed schedule %s on %s, next due %s", schedule.id, performed, schedule.next_due)
        return schedule

    def deactivate(self, schedule_id: str) -> MaintenanceSchedule:
        schedule = self.get(schedule_id)
        schedule.is_active = False
        logger.info("Deactivated schedule %s", schedule_id)
        return schedule

    def activate(self, schedule_id: str) -> MaintenanceSchedule:
        schedule = self.get(schedule_id)
        schedule.is_active = True
        logger.info("Activated schedule %s", schedule_id)
        return schedule

    # -------------------------------------------------------------------------
    # Vehicles
    # -------------------------------------------------------------------------

    @property
    def vehicles(self) -> List[Vehicle]:
        return list(self._vehicles.values())

    def add_vehicle(self, vehicle: Vehicle) -> Vehicle:
        if vehicle.id in self._vehicles:
            raise InvalidArgument(f"Duplicate vehicle id: {vehicle.id!r}")
        self._vehicles[vehicle.id] = vehicle
        logger.debug("Added vehicle %s (%s)", vehicle.id, vehicle.plate)
        return vehicle

    def get_vehicle(self, vehicle_id: str) -> Optional[Vehicle]:
        return self._vehicles.get(vehicle_id)

    def vehicle_label(self, vehicle_id: str) -> str:
        """Display label for a vehicle id, 'N/A' if it is not known."""
        vehicle = self.get_vehicle(vehicle_id)
        return vehicle.label if vehicle else "N/A"

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def summary(self, now: Optional[DateLike] = None) -> StatusCounts:
        """Urgency counts over the active schedules."""
        return aggregate(self._schedules.values(), now if now is not None else self.today())

    def statuses(
        self,
        now: Optional[DateLike] = None,
        active_only: bool = True,
        vehicle_id: Optional[str] = None,
    ) -> List[ScheduleStatus]:
        """Evaluated schedules, most urgent first."""
        ref = now if now is not None else self.today()
        result = [
            evaluate(s, ref)
            for s in self.list(active_only=active_only, vehicle_id=vehicle_id)
        ]
        result.sort(key=lambda s: (s.status.value, s.next_due, s.schedule.name))
        return result
