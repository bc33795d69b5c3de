"""
Reallocation service for drag-to-reassign.

Validates a requested new position for one work item, stores it as the
item's hint and recomputes the whole assignment.
"""

from datetime import datetime
from typing import Optional

from dayplan.core.exceptions import DragStateError
from dayplan.core.logger import setup_logger
from dayplan.models.enums import DragPhase, ReassignStatus, SegmentKind, UnitType
from dayplan.models.reallocation import DragState, ReassignResult
from dayplan.models.timeline import Allocation, Segment, WorkItem
from dayplan.services.assignment_service import ELIGIBLE_CATEGORY, AssignmentService

logger = setup_logger(__name__)


class ReallocationService:
    """
    Service for interactive reassignment of work items.

    The gesture state lives in a DragState value owned by the caller; each
    entry point takes the current state and returns the next one.
    """

    def __init__(self, assignment_service: Optional[AssignmentService] = None):
        self.assignment_service = assignment_service or AssignmentService()

    @staticmethod
    def occupied_indices(allocations: list[Allocation]) -> dict[int, str]:
        """Map every segment index covered by a placed unit to its work item."""
        occupied: dict[int, str] = {}
        for allocation in allocations:
            if allocation.overflow:
                continue
            for index in allocation.segment_indices:
                occupied[index] = allocation.work_item_id
        return occupied

    @staticmethod
    def is_valid_target(segments: list[Segment], global_index: int, unit_type: UnitType) -> bool:
        """Only work units of the category the unit type is placed in are drop targets."""
        if global_index < 0 or global_index >= len(segments):
            return False
        segment = segments[global_index]
        return (
            segment.global_index == global_index
            and segment.kind == SegmentKind.WORK
            and segment.category == ELIGIBLE_CATEGORY[unit_type].value
        )

    def reassign(
        self,
        work_item_id: str,
        target_global_index: int,
        work_items: list[WorkItem],
        segments: list[Segment],
        allocations: Optional[list[Allocation]] = None,
        now: Optional[datetime] = None,
    ) -> ReassignResult:
        """
        Move a work item to a new position.

        Args:
            work_item_id: Item being moved
            target_global_index: Requested anchor segment
            work_items: Full backlog; the moved item's hint is updated in place on success
            segments: Current segment sequence
            allocations: Current assignment (None = recompute it)
            now: Overflow anchor passed through to the assignment

        Returns:
            ReassignResult whose allocations are the new assignment when
            accepted and the unchanged current one otherwise.
        """
        current = allocations
        if current is None:
            current = self.assignment_service.assign(work_items, segments, now=now)

        def rejected(status: ReassignStatus) -> ReassignResult:
            logger.info(f"Reassign {work_item_id} -> {target_global_index}: {status.value}")
            return ReassignResult(
                status=status,
                work_item_id=work_item_id,
                target_global_index=target_global_index,
                allocations=current,
            )

        item = next((entry for entry in work_items if entry.id == work_item_id), None)
        if item is None:
            return rejected(ReassignStatus.REJECTED_UNKNOWN_ITEM)
        if not self.is_valid_target(segments, target_global_index, item.unit_type):
            return rejected(ReassignStatus.REJECTED_INVALID_TARGET)

        owner = self.occupied_indices(current).get(target_global_index)
        if owner is not None and owner != work_item_id:
            return rejected(ReassignStatus.REJECTED_OCCUPIED)

        if item.global_index_hint == target_global_index:
            return ReassignResult(
                status=ReassignStatus.UNCHANGED,
                work_item_id=work_item_id,
                target_global_index=target_global_index,
                allocations=current,
            )

        item.global_index_hint = target_global_index
        recomputed = self.assignment_service.assign(work_items, segments, now=now)
        logger.info(f"Reassign {work_item_id} -> {target_global_index}: accepted")
        return ReassignResult(
            status=ReassignStatus.ACCEPTED,
            work_item_id=work_item_id,
            target_global_index=target_global_index,
            allocations=recomputed,
        )

    # ===========================================
    # Gesture entry points
    # ===========================================

    def begin(self, state: DragState, allocation: Allocation) -> DragState:
        """Start dragging one placed unit. No data changes yet."""
        if state.is_dragging:
            raise DragStateError(
                "A drag gesture is already in progress",
                details={"work_item_id": state.work_item_id},
            )
        return DragState(
            phase=DragPhase.DRAGGING,
            work_item_id=allocation.work_item_id,
            unit_index=allocation.unit_index,
            unit_type=allocation.unit_type,
        )

    def move(
        self,
        state: DragState,
        global_index: Optional[int],
        segments: list[Segment],
    ) -> DragState:
        """Resolve the segment under the pointer; anything but an eligible work unit clears the target."""
        if not state.is_dragging:
            raise DragStateError("move called without an active drag gesture")
        target: Optional[int] = None
        if global_index is not None and self.is_valid_target(
            segments, global_index, state.unit_type
        ):
            target = global_index
        return state.model_copy(update={"target_global_index": target})

    def drop(
        self,
        state: DragState,
        work_items: list[WorkItem],
        segments: list[Segment],
        allocations: Optional[list[Allocation]] = None,
        now: Optional[datetime] = None,
    ) -> tuple[DragState, Optional[ReassignResult]]:
        """
        Finish the gesture.

        Returns the idle state and the reassignment result, or None when no
        valid target was resolved.
        """
        if not state.is_dragging:
            raise DragStateError("drop called without an active drag gesture")
        if state.target_global_index is None:
            return DragState(), None
        result = self.reassign(
            state.work_item_id,
            state.target_global_index,
            work_items,
            segments,
            allocations=allocations,
            now=now,
        )
        return DragState(), result

    @staticmethod
    def cancel(state: DragState) -> DragState:
        return DragState()
