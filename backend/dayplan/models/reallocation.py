"""
Models for drag-to-reassign gestures.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from dayplan.models.enums import DragPhase, ReassignStatus, UnitType
from dayplan.models.timeline import Allocation


class DragState(BaseModel):
    """State of one in-progress gesture. Replaced, never mutated."""

    model_config = ConfigDict(frozen=True)

    phase: DragPhase = DragPhase.IDLE
    work_item_id: Optional[str] = None
    unit_index: Optional[int] = None
    unit_type: UnitType = UnitType.STANDARD
    target_global_index: Optional[int] = None

    @property
    def is_dragging(self) -> bool:
        return self.phase == DragPhase.DRAGGING


class ReassignRequest(BaseModel):
    work_item_id: str
    target_global_index: int = Field(..., ge=0)


class ReassignResult(BaseModel):
    status: ReassignStatus
    work_item_id: str
    target_global_index: Optional[int] = None
    allocations: list[Allocation] = Field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.status in (ReassignStatus.ACCEPTED, ReassignStatus.UNCHANGED)
