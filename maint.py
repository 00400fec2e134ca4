#!/usr/bin/env python3
"""
Unified CLI for fleet maintenance schedules.

Commands:
  status      - Show which schedules are overdue, due soon, or on track
  list        - List schedules (with vehicle and text filters)
  add         - Create a new schedule
  edit        - Change fields of a schedule
  execute     - Record that a schedule was carried out
  deactivate  - Stop tracking a schedule
  activate    - Resume tracking a schedule
  vehicles    - List known vehicles
  validate    - Check data files against the schema
  init        - Create an empty data file
"""

import argparse
import logging
import os
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import yaml

from fleet import (
    InvalidArgument,
    MaintenanceSchedule,
    ScheduleKind,
    ScheduleStatus,
    ScheduleStore,
    Status,
    StatusCounts,
    Vehicle,
    aggregate,
    create_data_file,
    load_schema,
    load_store,
    save_store,
    to_date,
    validate_data_file,
)
from fleet.schema import find_data_files

logger = logging.getLogger("maint")

DEFAULT_DATA_FILE = os.environ.get("FLEET_DATA_FILE", "fleet.yaml")

# =============================================================================
# Formatting helpers
# =============================================================================


def format_date(value: Optional[date]) -> str:
    """Format a date for display."""
    return value.isoformat() if value is not None else "-"


def format_last_performed(value: Optional[date]) -> str:
    return value.isoformat() if value is not None else "never"


def format_recurrence(schedule: MaintenanceSchedule) -> str:
    """Format recurrence, e.g. 'every 5,000 km'."""
    return schedule.recurrence_label


def format_kind(kind: ScheduleKind) -> str:
    return kind.value


def format_active(is_active: bool) -> str:
    return "active" if is_active else "inactive"


def format_vehicle(vehicle: Optional[Vehicle]) -> str:
    return vehicle.label if vehicle is not None else "N/A"


def format_days(days: Optional[int]) -> str:
    """Format days until due (e.g., '12d', 'today' or '-3d')."""
    if days is None:
        return "-"
    if days == 0:
        return "today"
    return f"{days}d"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def format_text(text: Optional[str]) -> str:
    return text if text is not None else "-"


# Field kind -> formatting function. Column descriptors only name a kind.
FORMATTERS: Dict[str, Callable[[Any], str]] = {
    "text": format_text,
    "long_text": truncate,
    "date": format_date,
    "last_performed": format_last_performed,
    "recurrence": format_recurrence,
    "kind": format_kind,
    "active": format_active,
    "vehicle": format_vehicle,
    "days": format_days,
}

Column = Tuple[str, str, str]  # (header, dotted field path, field kind)

SCHEDULE_COLUMNS: List[Column] = [
    ("ID", "id", "text"),
    ("Name", "name", "text"),
    ("Vehicle", "vehicle_id", "vehicle"),
    ("Description", "description", "long_text"),
    ("Kind", "kind", "kind"),
    ("Recurrence", "", "recurrence"),
    ("Last Done", "last_performed", "last_performed"),
    ("Next Due", "next_due", "date"),
    ("State", "is_active", "active"),
]

STATUS_COLUMNS: List[Column] = [
    ("ID", "schedule.id", "text"),
    ("Name", "schedule.name", "text"),
    ("Vehicle", "schedule.vehicle_id", "vehicle"),
    ("Recurrence", "schedule", "recurrence"),
    ("Last Done", "schedule.last_performed", "last_performed"),
    ("Next Due", "next_due", "date"),
    ("Remaining", "days_until", "days"),
]

VEHICLE_COLUMNS: List[Column] = [
    ("ID", "id", "text"),
    ("Plate", "plate", "text"),
    ("Brand", "brand", "text"),
    ("Model", "model", "text"),
    ("Status", "status", "text"),
]


def _resolve(obj: Any, path: str) -> Any:
    """Follow a dotted attribute path; an empty path is the object itself."""
    for attr in filter(None, path.split(".")):
        obj = getattr(obj, attr)
    return obj


def make_table(
    items: Sequence[Any], columns: List[Column], store: Optional[ScheduleStore] = None
) -> List[List[str]]:
    """Convert items to table rows using the column descriptors."""
    rows = []
    for item in items:
        row = []
        for _header, path, kind in columns:
            value = _resolve(item, path)
            if kind == "vehicle":
                value = store.get_vehicle(value) if store is not None else None
            row.append(FORMATTERS[kind](value))
        rows.append(row)
    return rows


def headers(columns: List[Column]) -> List[str]:
    return [c[0] for c in columns]


def format_counts(counts: StatusCounts) -> str:
    return (
        f"Overdue: {counts.overdue}  Due soon: {counts.due_soon}  "
        f"On track: {counts.on_track}  Total active: {counts.total}"
    )


def print_schedule(store: ScheduleStore, schedule: MaintenanceSchedule) -> None:
    """Print the fields of one schedule."""
    print(f"  Name:        {schedule.name}")
    print(f"  Vehicle:     {store.vehicle_label(schedule.vehicle_id)}")
    print(f"  Kind:        {schedule.kind.value}")
    print(f"  Description: {schedule.description}")
    print(f"  Recurrence:  {schedule.recurrence_label}")
    print(f"  Last done:   {format_last_performed(schedule.last_performed)}")
    print(f"  Next due:    {schedule.next_due.isoformat()}")
    if schedule.usage_based:
        print("               (estimated: usage-based schedules fall due 30 days out)")
    print(f"  State:       {format_active(schedule.is_active)}")


# =============================================================================
# Status command
# =============================================================================


def cmd_status(args, store: ScheduleStore):
    """Show which schedules are overdue, due soon, or on track."""
    now = to_date(args.as_of) if args.as_of else store.today()
    statuses = store.statuses(now=now, vehicle_id=args.vehicle)
    schedules = store.list(vehicle_id=args.vehicle)

    print(f"As of: {now.isoformat()}")
    if args.vehicle:
        print(f"Vehicle: {store.vehicle_label(args.vehicle)}")
    print(format_counts(aggregate(schedules, now)))
    inactive = sum(1 for s in schedules if not s.is_active)
    if inactive:
        print(f"Inactive schedules: {inactive}")
    print()

    groups = [
        ("OVERDUE:", Status.OVERDUE),
        ("DUE SOON:", Status.DUE_SOON),
        ("ON TRACK:", Status.ON_TRACK),
    ]
    for title, status in groups:
        group: List[ScheduleStatus] = [s for s in statuses if s.status == status]
        if group:
            print(title)
            print(
                tabulate(
                    make_table(group, STATUS_COLUMNS, store),
                    headers=headers(STATUS_COLUMNS),
                    tablefmt="simple",
                )
            )
            print()

    if not statuses:
        print("No active schedules.")
    return 0


# =============================================================================
# List command
# =============================================================================


def cmd_list(args, store: ScheduleStore):
    """List schedules."""
    schedules = store.list(
        active_only=not args.all, vehicle_id=args.vehicle, search=args.search
    )
    print(f"Schedules: {len(schedules)}")
    print()
    if not schedules:
        print("No schedules found.")
        return 0
    print(
        tabulate(
            make_table(schedules, SCHEDULE_COLUMNS, store),
            headers=headers(SCHEDULE_COLUMNS),
            tablefmt="simple",
        )
    )
    return 0


# =============================================================================
# Add / edit commands
# =============================================================================


def cmd_add(args, store: ScheduleStore):
    """Create a new schedule."""
    if store.get_vehicle(args.vehicle_id) is None:
        logger.warning("Vehicle %s is not in the data file", args.vehicle_id)

    schedule = store.create(
        vehicle_id=args.vehicle_id,
        name=args.name,
        description=args.description,
        recurrence_unit=args.unit,
        recurrence_value=args.every,
        kind=args.kind,
        last_performed=args.last_performed,
    )

    print(f"Adding schedule {schedule.id} to {args.data}:")
    print_schedule(store, schedule)
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_store(args.data, store)
    print("Schedule saved.")
    return 0


def cmd_edit(args, store: ScheduleStore):
    """Change fields of a schedule."""
    fields: Dict[str, Any] = {}
    if args.vehicle_id is not None:
        fields["vehicle_id"] = args.vehicle_id
    if args.name is not None:
        fields["name"] = args.name
    if args.description is not None:
        fields["description"] = args.description
    if args.unit is not None:
        fields["recurrence_unit"] = args.unit
    if args.every is not None:
        fields["recurrence_value"] = args.every
    if args.kind is not None:
        fields["kind"] = args.kind
    if args.last_performed is not None:
        fields["last_performed"] = args.last_performed

    if not fields:
        print("Error: Nothing to change")
        return 1

    schedule = store.update(args.schedule_id, **fields)
    print(f"Updated schedule {schedule.id}:")
    print_schedule(store, schedule)
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_store(args.data, store)
    print("Schedule saved.")
    return 0


# =============================================================================
# Execute / activation commands
# =============================================================================


def cmd_execute(args, store: ScheduleStore):
    """Record that a schedule was carried out."""
    previous_due = store.get(args.schedule_id).next_due
    schedule = store.execute(args.schedule_id, args.date)

    print(f"Executed: {schedule.name}")
    print(f"  Performed: {schedule.last_performed.isoformat()}")
    print(f"  Was due:   {previous_due.isoformat()}")
    print(f"  Next due:  {schedule.next_due.isoformat()}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_store(args.data, store)
    print("Schedule saved.")
    return 0


def cmd_deactivate(args, store: ScheduleStore):
    """Stop tracking a schedule."""
    schedule = store.deactivate(args.schedule_id)
    save_store(args.data, store)
    print(f"Deactivated: {schedule.name}")
    return 0


def cmd_activate(args, store: ScheduleStore):
    """Resume tracking a schedule."""
    schedule = store.activate(args.schedule_id)
    save_store(args.data, store)
    print(f"Activated: {schedule.name}")
    return 0


# =============================================================================
# Vehicles command
# =============================================================================


def cmd_vehicles(args, store: ScheduleStore):
    """List known vehicles."""
    vehicles = store.vehicles
    print(f"Vehicles: {len(vehicles)}")
    print()
    if vehicles:
        print(
            tabulate(
                make_table(vehicles, VEHICLE_COLUMNS),
                headers=headers(VEHICLE_COLUMNS),
                tablefmt="simple",
            )
        )
    return 0


# =============================================================================
# Validate command
# =============================================================================


def cmd_validate(args) -> int:
    """Check data files (or directories of them) against the schema."""
    paths = args.paths or [args.data]
    files: List[Path] = []
    for path in paths:
        if not path.exists():
            print(f"Error: File not found: {path}")
            return 1
        files.extend(find_data_files(path))

    if not files:
        print(f"Warning: No YAML files found in {', '.join(str(p) for p in paths)}")
        return 0

    schema = load_schema()
    all_valid = True
    for filepath in files:
        errors = validate_data_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath}")

    return 0 if all_valid else 1


COMMANDS = {
    "status": cmd_status,
    "list": cmd_list,
    "add": cmd_add,
    "edit": cmd_edit,
    "execute": cmd_execute,
    "deactivate": cmd_deactivate,
    "activate": cmd_activate,
    "vehicles": cmd_vehicles,
}

# =============================================================================
# Main
# =============================================================================


def positive_int(value: str) -> int:
    """argparse type for recurrence values."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet maintenance schedule tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --data fleet.yaml status
  %(prog)s status --as-of 2024-03-15
  %(prog)s list --vehicle 1 --search oil
  %(prog)s add 1 "Quarterly inspection" --description "Full inspection" \\
      --unit time --every 90
  %(prog)s execute 3f2a... --date 2024-03-01
  %(prog)s deactivate 3f2a...
  %(prog)s validate data/

The data file defaults to $FLEET_DATA_FILE, then fleet.yaml.
""",
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=Path(DEFAULT_DATA_FILE),
        help="Path to fleet YAML data file",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Status subcommand
    status_parser = subparsers.add_parser(
        "status", help="Show which schedules are overdue, due soon, or on track"
    )
    status_parser.add_argument(
        "--as-of", type=str, help="Reference date in YYYY-MM-DD format (default: today)"
    )
    status_parser.add_argument("--vehicle", type=str, help="Only this vehicle id")

    # List subcommand
    list_parser = subparsers.add_parser("list", help="List schedules")
    list_parser.add_argument(
        "--all", action="store_true", help="Include inactive schedules"
    )
    list_parser.add_argument("--vehicle", type=str, help="Only this vehicle id")
    list_parser.add_argument(
        "--search",
        type=str,
        help="Filter to name/description containing text (case-insensitive)",
    )

    # Add subcommand
    add_parser = subparsers.add_parser("add", help="Create a new schedule")
    add_parser.add_argument("vehicle_id", type=str, help="Vehicle id")
    add_parser.add_argument("name", type=str, help="Schedule name")
    add_parser.add_argument("--description", type=str, required=True)
    add_parser.add_argument(
        "--unit", choices=["time", "mileage", "hours"], default="time",
        help="Recurrence unit (default: time)",
    )
    add_parser.add_argument(
        "--every", type=positive_int, default=30,
        help="Recurrence value in days, km or engine-hours (default: 30)",
    )
    add_parser.add_argument(
        "--kind", choices=["preventive", "predictive"], default="preventive"
    )
    add_parser.add_argument(
        "--last-performed", type=str, help="Date last performed (YYYY-MM-DD)"
    )
    add_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be added without saving"
    )

    # Edit subcommand
    edit_parser = subparsers.add_parser("edit", help="Change fields of a schedule")
    edit_parser.add_argument("schedule_id", type=str, help="Schedule id")
    edit_parser.add_argument("--vehicle-id", type=str)
    edit_parser.add_argument("--name", type=str)
    edit_parser.add_argument("--description", type=str)
    edit_parser.add_argument("--unit", choices=["time", "mileage", "hours"])
    edit_parser.add_argument("--every", type=positive_int)
    edit_parser.add_argument("--kind", choices=["preventive", "predictive"])
    edit_parser.add_argument("--last-performed", type=str)
    edit_parser.add_argument(
        "--dry-run", action="store_true", help="Show changes without saving"
    )

    # Execute subcommand
    execute_parser = subparsers.add_parser(
        "execute", help="Record that a schedule was carried out"
    )
    execute_parser.add_argument("schedule_id", type=str, help="Schedule id")
    execute_parser.add_argument(
        "--date", type=str, help="Execution date in YYYY-MM-DD format (default: today)"
    )
    execute_parser.add_argument(
        "--dry-run", action="store_true", help="Show changes without saving"
    )

    for name, help_text in (
        ("deactivate", "Stop tracking a schedule"),
        ("activate", "Resume tracking a schedule"),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("schedule_id", type=str, help="Schedule id")

    subparsers.add_parser("vehicles", help="List known vehicles")

    validate_parser = subparsers.add_parser(
        "validate", help="Check data files against the schema"
    )
    validate_parser.add_argument(
        "paths", nargs="*", type=Path,
        help="Data files or directories of them (default: the --data file)",
    )

    subparsers.add_parser("init", help="Create an empty data file")

    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s - %(name)s - %(message)s",
    )

    if args.command == "init":
        if args.data.exists():
            print(f"Error: File already exists: {args.data}")
            return 1
        create_data_file(args.data)
        print(f"Created {args.data}")
        return 0

    if args.command == "validate":
        return cmd_validate(args)

    # Validate data file exists
    if not args.data.exists():
        print(f"Error: File not found: {args.data}")
        return 1

    try:
        store = load_store(args.data)
        return COMMANDS[args.command](args, store)
    except InvalidArgument as e:
        print(f"Error: {e}")
        return 1
    except KeyError as e:
        print(f"Error: {e.args[0] if e.args else e}")
        return 1
    except yaml.YAMLError as e:
        print(f"Error: Cannot parse {args.data}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
