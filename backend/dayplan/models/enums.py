"""
Enum definitions for the application.

These enums are used across models and provide type-safe kind/category values.
"""

from enum import Enum


class DayCategory(str, Enum):
    """Category of a day template block."""

    REST = "rest"  # never scheduled
    LEISURE = "leisure"
    FOCUS = "focus"


class SegmentKind(str, Enum):
    """Kind of a generated segment."""

    WORK = "work"
    BREAK = "break"
    APPOINTMENT = "appointment"
    IDLE = "idle"


# Synthetic categories for segments that do not come from a day block
APPOINTMENT_CATEGORY = "appointment"
IDLE_CATEGORY = "idle"


class UnitType(str, Enum):
    """
    Placement type of a work item.

    STANDARD = one work unit in a focus block, break attached when free
    LEISURE = one work+break pair in a leisure block
    LONG_FOCUS = two contiguous work+break pairs in a focus block
    """

    STANDARD = "standard"
    LEISURE = "leisure"
    LONG_FOCUS = "long_focus"


class TodoStatus(str, Enum):
    """Todo status as recorded by the backlog."""

    OPEN = ""
    ONGOING = "ongoing"
    DELAYED = "delayed"
    SUSPENDED = "suspended"
    CANCELLED = "cancelled"
    DONE = "done"


class DragPhase(str, Enum):
    """Phase of a drag-to-reassign gesture."""

    IDLE = "idle"
    DRAGGING = "dragging"


class ReassignStatus(str, Enum):
    """Outcome of a reassignment attempt."""

    ACCEPTED = "accepted"
    UNCHANGED = "unchanged"
    REJECTED_OCCUPIED = "rejected_occupied"
    REJECTED_INVALID_TARGET = "rejected_invalid_target"
    REJECTED_UNKNOWN_ITEM = "rejected_unknown_item"
