"""
Assignment service for placing work items onto segments.

Handles priority ordering, type-specific placement patterns and overflow.
"""

from datetime import datetime, timedelta
from typing import Optional

from dayplan.core.config import get_settings
from dayplan.core.exceptions import InvariantViolationError
from dayplan.core.logger import setup_logger
from dayplan.models.enums import DayCategory, SegmentKind, UnitType
from dayplan.models.timeline import Allocation, Segment, WorkItem
from dayplan.utils.datetime_utils import ensure_utc, now_utc

logger = setup_logger(__name__)

ELIGIBLE_CATEGORY: dict[UnitType, DayCategory] = {
    UnitType.STANDARD: DayCategory.FOCUS,
    UnitType.LEISURE: DayCategory.LEISURE,
    UnitType.LONG_FOCUS: DayCategory.FOCUS,
}


class AssignmentService:
    """
    Service for assigning a prioritized backlog onto the day's segments.

    Provides:
    - Priority ordering (lower number first, 0 last, stable)
    - Per-type placement patterns over each category's segments
    - Overflow placeholders after the last segment of the day

    Every call starts from an empty "used" set; nothing is carried between
    calls, so the result depends only on the arguments.
    """

    def __init__(
        self,
        work_minutes: Optional[int] = None,
        break_minutes: Optional[int] = None,
        check_invariants: Optional[bool] = None,
    ):
        settings = get_settings()
        self.work_minutes = work_minutes if work_minutes is not None else settings.WORK_MINUTES
        self.break_minutes = break_minutes if break_minutes is not None else settings.BREAK_MINUTES
        self.check_invariants = settings.DEBUG if check_invariants is None else check_invariants

    def unit_minutes(self, unit_type: UnitType) -> int:
        """Nominal duration of one unit of the given type."""
        pair = self.work_minutes + self.break_minutes
        if unit_type == UnitType.LONG_FOCUS:
            return 2 * pair
        return pair

    @staticmethod
    def sort_by_priority(work_items: list[WorkItem]) -> list[WorkItem]:
        """Ascending priority with unprioritized (0) items last, backlog order kept on ties."""
        return sorted(work_items, key=lambda item: (item.priority == 0, item.priority))

    def assign(
        self,
        work_items: list[WorkItem],
        segments: list[Segment],
        now: Optional[datetime] = None,
    ) -> list[Allocation]:
        """
        Assign every work item's required units.

        Args:
            work_items: Backlog in its stored order
            segments: Output of SegmentService.generate_segments
            now: Overflow anchor when the day has no segments (None = current time)

        Returns:
            One allocation per required unit of every item; units that did not
            fit are flagged overflow and have no global index.
        """
        by_category: dict[str, list[Segment]] = {}
        for segment in segments:
            if segment.is_schedulable:
                by_category.setdefault(segment.category, []).append(segment)

        if segments:
            overflow_cursor = max(segment.end for segment in segments)
        else:
            overflow_cursor = ensure_utc(now) or now_utc()

        used: set[int] = set()
        allocations: list[Allocation] = []
        overflow_units = 0

        for item in self.sort_by_priority(work_items):
            if item.required_units <= 0:
                continue
            category = ELIGIBLE_CATEGORY[item.unit_type].value
            candidates = by_category.get(category, [])
            start_position = self._resolve_start(item, candidates)

            placed = self._place(item, category, candidates, start_position, used)
            allocations.extend(placed)

            duration = timedelta(minutes=self.unit_minutes(item.unit_type))
            for unit_index in range(len(placed) + 1, item.required_units + 1):
                allocations.append(
                    Allocation(
                        work_item_id=item.id,
                        unit_index=unit_index,
                        unit_type=item.unit_type,
                        start=overflow_cursor,
                        end=overflow_cursor + duration,
                        category=category,
                        overflow=True,
                    )
                )
                overflow_cursor += duration
                overflow_units += 1

        if self.check_invariants:
            self._verify_exclusive(allocations)

        logger.info(
            f"Assigned {len(work_items)} work items: "
            f"{len(allocations) - overflow_units} placed units, {overflow_units} overflow"
        )
        return allocations

    @staticmethod
    def _resolve_start(item: WorkItem, candidates: list[Segment]) -> int:
        """Position in the category list where the item's scan begins."""
        if item.global_index_hint is None:
            return 0
        for position, segment in enumerate(candidates):
            if segment.global_index == item.global_index_hint and segment.kind == SegmentKind.WORK:
                return position
        logger.debug(
            f"Hint {item.global_index_hint} of {item.id} is not a {item.unit_type.value} "
            f"work unit, scanning from the start"
        )
        return 0

    def _place(
        self,
        item: WorkItem,
        category: str,
        candidates: list[Segment],
        start_position: int,
        used: set[int],
    ) -> list[Allocation]:
        """
        Scan from the hinted position to the end, then wrap to the segments
        before it. Units overflow only once the whole category is scanned.
        """
        placed: list[Allocation] = []
        for begin, stop in ((start_position, len(candidates)), (0, start_position)):
            position = begin
            while position < stop and len(placed) < item.required_units:
                run = self._match(item.unit_type, candidates, position, used)
                if run is None:
                    position += 1
                    continue
                used.update(segment.global_index for segment in run)
                placed.append(
                    Allocation(
                        work_item_id=item.id,
                        unit_index=len(placed) + 1,
                        unit_type=item.unit_type,
                        start=run[0].start,
                        end=run[-1].end,
                        category=category,
                        global_index=run[0].global_index,
                        segment_indices=[segment.global_index for segment in run],
                    )
                )
                position += len(run)
        return placed

    def _match(
        self,
        unit_type: UnitType,
        candidates: list[Segment],
        position: int,
        used: set[int],
    ) -> Optional[list[Segment]]:
        """Segments one unit would consume when anchored at `position`, or None."""
        anchor = candidates[position]
        if anchor.kind != SegmentKind.WORK or anchor.global_index in used:
            return None

        if unit_type == UnitType.STANDARD:
            # Break is attached only when it is still free
            return self._pair_at(candidates, position, used) or [anchor]

        if unit_type == UnitType.LEISURE:
            return self._pair_at(candidates, position, used)

        first = self._pair_at(candidates, position, used)
        if first is None:
            return None
        second = self._pair_at(candidates, position + 2, used)
        if second is None or first[-1].end != second[0].start:
            return None
        return first + second

    @staticmethod
    def _pair_at(
        candidates: list[Segment],
        position: int,
        used: set[int],
    ) -> Optional[list[Segment]]:
        if position + 1 >= len(candidates):
            return None
        work, rest = candidates[position], candidates[position + 1]
        if work.kind != SegmentKind.WORK or rest.kind != SegmentKind.BREAK:
            return None
        if work.global_index in used or rest.global_index in used:
            return None
        if work.parent_block_id != rest.parent_block_id or work.end != rest.start:
            return None
        return [work, rest]

    @staticmethod
    def _verify_exclusive(allocations: list[Allocation]) -> None:
        owners: dict[int, str] = {}
        for allocation in allocations:
            if allocation.overflow:
                continue
            for index in allocation.segment_indices:
                owner = owners.get(index)
                if owner is not None:
                    raise InvariantViolationError(
                        f"Segment {index} allocated twice",
                        global_index=index,
                        work_item_ids=[owner, allocation.work_item_id],
                    )
                owners[index] = allocation.work_item_id
