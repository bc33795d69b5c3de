"""
Timeline models: day template, segments, work items and their placements.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dayplan.models.enums import DayCategory, SegmentKind, TodoStatus, UnitType
from dayplan.utils.datetime_utils import ensure_utc, parse_time_to_minutes


class DayBlock(BaseModel):
    """One contiguous portion of the day template."""

    id: str
    category: DayCategory
    start: str = Field(..., description="HH:MM")
    end: str = Field(..., description="HH:MM, 24:00 allowed")

    @field_validator("start", "end")
    @classmethod
    def _check_clock(cls, value: str) -> str:
        if parse_time_to_minutes(value, allow_end_of_day=True) is None:
            raise ValueError(f"invalid time of day: {value!r}")
        return value

    @property
    def start_minutes(self) -> int:
        return parse_time_to_minutes(self.start, allow_end_of_day=True)

    @property
    def end_minutes(self) -> int:
        return parse_time_to_minutes(self.end, allow_end_of_day=True)


class Appointment(BaseModel):
    """A fixed commitment carved out of the day."""

    id: str = ""
    title: str = ""
    start: datetime
    duration_minutes: int = Field(..., description="Non-positive durations occupy no time")
    idle: bool = Field(False, description="Time deliberately kept free")
    finished_at: Optional[datetime] = None

    @field_validator("start", "finished_at")
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class Segment(BaseModel):
    """Atomic schedulable or occupied unit of the day."""

    model_config = ConfigDict(frozen=True)

    global_index: int = Field(..., ge=0)
    parent_block_id: Optional[str] = None
    kind: SegmentKind
    start: datetime
    end: datetime
    category: str
    sequence_index: Optional[int] = Field(
        None, ge=1, description="Position among work units of the same category"
    )

    @property
    def is_schedulable(self) -> bool:
        return self.kind in (SegmentKind.WORK, SegmentKind.BREAK)


class WorkItem(BaseModel):
    """Backlog entry as seen by the assignment engine."""

    id: str
    title: str = ""
    priority: int = Field(0, ge=0, description="0 = unprioritized, sorts last")
    required_units: int = Field(0, ge=0)
    unit_type: UnitType = UnitType.STANDARD
    global_index_hint: Optional[int] = Field(None, ge=0)


class Allocation(BaseModel):
    """One unit of a work item placed on the timeline."""

    work_item_id: str
    unit_index: int = Field(..., ge=1)
    unit_type: UnitType
    start: datetime
    end: datetime
    category: str
    global_index: Optional[int] = None
    segment_indices: list[int] = Field(default_factory=list)
    overflow: bool = False


class TodoRecord(BaseModel):
    """Raw todo as stored by the backlog provider."""

    id: str
    title: str = ""
    priority: int = Field(0, ge=0)
    unit_type: UnitType = UnitType.STANDARD
    estimates: list[int] = Field(default_factory=list, description="Estimated unit counts")
    actuals: list[int] = Field(default_factory=list, description="Recorded unit counts")
    status: TodoStatus = TodoStatus.OPEN
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    global_index_hint: Optional[int] = Field(None, ge=0)

    @field_validator("started_at", "finished_at")
    @classmethod
    def _to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


class ExecutionInterval(BaseModel):
    """Actually elapsed range of a todo or appointment."""

    owner_id: str
    title: str = ""
    start: datetime
    end: datetime
    kind: str
    is_marker: bool = False


class ExecutionUnit(BaseModel):
    """Unit-shaped slice of a todo's actual execution."""

    owner_id: str
    unit_index: int = Field(..., ge=1)
    unit_type: UnitType
    start: datetime
    end: datetime
    completed: bool = False


class DayPlan(BaseModel):
    """Everything a renderer needs for one day."""

    day: date
    timezone: str
    segments: list[Segment] = Field(default_factory=list)
    allocations: list[Allocation] = Field(default_factory=list)
    execution_intervals: list[ExecutionInterval] = Field(default_factory=list)
    execution_units: list[ExecutionUnit] = Field(default_factory=list)
    overflow: bool = False
