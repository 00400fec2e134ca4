"""YAML loading and saving utilities for fleet schedule data."""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import yaml

from .calculations import compute_next_due, to_date, to_datetime
from .errors import InvalidArgument
from .recurrence import parse_kind, parse_unit
from .schedule import MaintenanceSchedule
from .store import ScheduleStore
from .validation import check_recurrence_value, require_text
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


def _parse_object(
    dct: Dict[str, Any], today: date
) -> Union[Vehicle, MaintenanceSchedule, dict]:
    """Parse dictionary into appropriate object type."""
    # Vehicle entry
    if "plate" in dct:
        return Vehicle(
            str(dct["id"]),
            dct["plate"],
            dct["brand"],
            dct["model"],
            dct.get("status", "active"),
        )
    # Schedule entry
    elif "recurrenceUnit" in dct:
        try:
            return _parse_schedule(dct, today)
        except KeyError as e:
            raise InvalidArgument(f"Schedule {dct.get('id')!r} is missing field {e}") from None
    else:
        # Return dict as-is for the top-level document
        return dct


def _parse_schedule(dct: Dict[str, Any], today: date) -> MaintenanceSchedule:
    # Same field checks as ScheduleStore.create, even when nextDue is stored
    unit = parse_unit(dct["recurrenceUnit"])
    value = check_recurrence_value(dct["recurrenceValue"])
    last = dct.get("lastPerformed")
    last_performed = to_date(last) if last else None
    next_due = dct.get("nextDue")
    if next_due:
        next_due = to_date(next_due)
    else:
        next_due = compute_next_due(unit, value, last_performed, today)
    created = dct.get("createdAt")
    return MaintenanceSchedule(
        id=str(dct["id"]),
        vehicle_id=require_text("vehicleId", dct["vehicleId"]),
        name=require_text("name", dct["name"]),
        description=require_text("description", dct["description"]),
        recurrence_unit=unit,
        recurrence_value=value,
        next_due=next_due,
        created_at=to_datetime(created) if created else datetime.now().replace(microsecond=0),
        kind=parse_kind(dct.get("kind", "preventive")),
        last_performed=last_performed,
        is_active=dct.get("isActive", True),
    )


def load_store(
    filename: Union[str, Path], clock: Optional[Callable[[], date]] = None
) -> ScheduleStore:
    """
    Load vehicles and schedules from a YAML data file into a new store.

    Stored next due dates are kept as-is; schedules without one get it
    computed against the store's clock.
    """
    clock = clock or date.today
    today = to_date(clock())
    with open(filename, "rb") as fp:
        raw = yaml.load(fp, Loader=yaml.SafeLoader) or {}
    # Unquoted YAML dates load as date objects; round-trip them as ISO strings
    json_data = json.dumps(raw, indent=4, default=str)
    data = json.loads(json_data, object_hook=lambda d: _parse_object(d, today))
    store = ScheduleStore(
        schedules=data.get("schedules") or [],
        vehicles=data.get("vehicles") or [],
        clock=clock,
    )
    logger.debug(
        "Loaded %d schedules and %d vehicles from %s",
        len(store.list()),
        len(store.vehicles),
        filename,
    )
    return store


def _vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    """Serialize a Vehicle to the YAML dict format (camelCase keys)."""
    return {
        "id": vehicle.id,
        "plate": vehicle.plate,
        "brand": vehicle.brand,
        "model": vehicle.model,
        "status": vehicle.status,
    }


def _schedule_to_dict(schedule: MaintenanceSchedule) -> Dict[str, Any]:
    """Serialize a MaintenanceSchedule to the YAML dict format (camelCase keys)."""
    d: Dict[str, Any] = {
        "id": schedule.id,
        "vehicleId": schedule.vehicle_id,
        "kind": schedule.kind.value,
        "name": schedule.name,
        "description": schedule.description,
        "recurrenceUnit": schedule.recurrence_unit.value,
        "recurrenceValue": schedule.recurrence_value,
    }
    if schedule.last_performed is not None:
        d["lastPerformed"] = schedule.last_performed.isoformat()
    d["nextDue"] = schedule.next_due.isoformat()
    d["isActive"] = schedule.is_active
    d["createdAt"] = schedule.created_at.isoformat()
    return d


def _write(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def save_store(filename: Union[str, Path], store: ScheduleStore) -> None:
    """Write every vehicle and schedule in the store back to a YAML data file."""
    data = {
        "vehicles": [_vehicle_to_dict(v) for v in store.vehicles],
        "schedules": [_schedule_to_dict(s) for s in store.list()],
    }
    _write(filename, data)
    logger.debug("Saved %d schedules to %s", len(data["schedules"]), filename)


def create_data_file(filename: Union[str, Path]) -> None:
    """Create an empty data file with no vehicles or schedules."""
    _write(filename, {"vehicles": [], "schedules": []})
