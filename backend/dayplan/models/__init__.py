"""Domain models."""

from dayplan.models.enums import (
    DayCategory,
    DragPhase,
    ReassignStatus,
    SegmentKind,
    TodoStatus,
    UnitType,
)
from dayplan.models.timeline import (
    Allocation,
    Appointment,
    DayBlock,
    DayPlan,
    ExecutionInterval,
    ExecutionUnit,
    Segment,
    TodoRecord,
    WorkItem,
)
from dayplan.models.reallocation import DragState, ReassignRequest, ReassignResult

__all__ = [
    "DayCategory",
    "DragPhase",
    "ReassignStatus",
    "SegmentKind",
    "TodoStatus",
    "UnitType",
    "Allocation",
    "Appointment",
    "DayBlock",
    "DayPlan",
    "ExecutionInterval",
    "ExecutionUnit",
    "Segment",
    "TodoRecord",
    "WorkItem",
    "DragState",
    "ReassignRequest",
    "ReassignResult",
]
