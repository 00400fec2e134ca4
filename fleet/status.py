"""Status enum for maintenance schedule urgency levels."""

from enum import Enum


class Status(Enum):
    """Schedule urgency categories. Lower value = more urgent."""

    OVERDUE = 1  # Due today or earlier
    DUE_SOON = 2  # Due within the due-soon window
    ON_TRACK = 3
