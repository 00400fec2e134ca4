"""
Fleet maintenance schedule tracking.

This package provides the models and logic for recurring vehicle maintenance:
- Status: Urgency levels (OVERDUE, DUE_SOON, ON_TRACK)
- RecurrenceUnit / ScheduleKind: How a schedule recurs and what kind it is
- MaintenanceSchedule: A recurring maintenance obligation
- Vehicle: Vehicle identification for display
- ScheduleStatus / StatusCounts: Evaluated schedule urgency and summary counts
- ScheduleStore: Owned collection of schedules and vehicles
- load_store / save_store / validate_data_file: YAML data files
"""

from .errors import InvalidArgument
from .status import Status
from .recurrence import RecurrenceUnit, ScheduleKind
from .schedule import MaintenanceSchedule
from .vehicle import Vehicle
from .schedule_status import ScheduleStatus
from .calculations import (
    DUE_SOON_DAYS,
    USAGE_FALLBACK_DAYS,
    to_date,
    to_datetime,
    compute_next_due,
    days_until,
    classify,
)
from .summary import StatusCounts, evaluate, aggregate
from .store import ScheduleStore
from .loader import load_store, save_store, create_data_file
from .schema import load_schema, validate_data_file

__all__ = [
    "InvalidArgument",
    "Status",
    "RecurrenceUnit",
    "ScheduleKind",
    "MaintenanceSchedule",
    "Vehicle",
    "ScheduleStatus",
    "DUE_SOON_DAYS",
    "USAGE_FALLBACK_DAYS",
    "to_date",
    "to_datetime",
    "compute_next_due",
    "days_until",
    "classify",
    "StatusCounts",
    "evaluate",
    "aggregate",
    "ScheduleStore",
    "load_store",
    "save_store",
    "create_data_file",
    "load_schema",
    "validate_data_file",
]
