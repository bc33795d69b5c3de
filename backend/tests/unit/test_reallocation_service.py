"""
Unit tests for ReallocationService.
"""

from datetime import date, datetime, timezone

import pytest

from dayplan.core.exceptions import DragStateError
from dayplan.models.enums import DayCategory, DragPhase, ReassignStatus, UnitType
from dayplan.models.reallocation import DragState
from dayplan.models.timeline import Allocation, Appointment, DayBlock, WorkItem
from dayplan.services.assignment_service import AssignmentService
from dayplan.services.reallocation_service import ReallocationService
from dayplan.services.segment_service import SegmentService

DAY = date(2026, 3, 2)
NOW = datetime(2026, 3, 2, 6, 0, tzinfo=timezone.utc)


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2026, 3, 2, hour, minute, tzinfo=timezone.utc)


def make_segments():
    """A0 07:00, then W1 09:00, B2, W3 09:30, B4, W5 10:00, B6, W7 10:30-10:55."""
    blocks = [DayBlock(id="focus", category=DayCategory.FOCUS, start="09:00", end="11:00")]
    appointments = [Appointment(id="standup", start=at(7, 0), duration_minutes=30)]
    return SegmentService(work_minutes=25, break_minutes=5).generate_segments(
        blocks, appointments, DAY, "UTC"
    )


def make_item(item_id: str, priority: int, units: int = 1, **kwargs) -> WorkItem:
    return WorkItem(id=item_id, priority=priority, required_units=units, **kwargs)


def make_service() -> ReallocationService:
    return ReallocationService(
        AssignmentService(work_minutes=25, break_minutes=5, check_invariants=True)
    )


def anchors(allocations: list[Allocation]) -> dict[str, list[int]]:
    result: dict[str, list[int]] = {}
    for allocation in allocations:
        result.setdefault(allocation.work_item_id, []).append(allocation.global_index)
    return result


@pytest.fixture
def segments():
    return make_segments()


@pytest.fixture
def backlog():
    return [make_item("x", priority=1, global_index_hint=5), make_item("y", priority=2)]


def test_initial_assignment_honours_hint(segments, backlog):
    allocations = make_service().assignment_service.assign(backlog, segments, now=NOW)

    assert anchors(allocations) == {"x": [5], "y": [1]}
    assert allocations[0].segment_indices == [5, 6]


def test_move_onto_occupied_segment_is_rejected(segments, backlog):
    service = make_service()
    current = service.assignment_service.assign(backlog, segments, now=NOW)

    result = service.reassign("y", 5, backlog, segments, allocations=current, now=NOW)

    assert result.status == ReassignStatus.REJECTED_OCCUPIED
    assert result.accepted is False
    assert result.allocations == current
    assert backlog[1].global_index_hint is None


def test_move_onto_free_segment_is_accepted(segments, backlog):
    result = make_service().reassign("y", 3, backlog, segments, now=NOW)

    assert result.status == ReassignStatus.ACCEPTED
    assert result.accepted is True
    assert backlog[1].global_index_hint == 3
    assert anchors(result.allocations) == {"x": [5], "y": [3]}


def test_move_to_current_hint_is_unchanged(segments, backlog):
    service = make_service()
    current = service.assignment_service.assign(backlog, segments, now=NOW)

    result = service.reassign("x", 5, backlog, segments, allocations=current, now=NOW)

    assert result.status == ReassignStatus.UNCHANGED
    assert result.accepted is True
    assert result.allocations == current


def test_move_onto_own_placement_is_allowed(segments, backlog):
    result = make_service().reassign("y", 1, backlog, segments, now=NOW)

    assert result.status == ReassignStatus.ACCEPTED
    assert anchors(result.allocations)["y"] == [1]


@pytest.mark.parametrize("target", [0, 2, 4, 8, 99])
def test_non_work_targets_are_rejected(segments, backlog, target):
    result = make_service().reassign("y", target, backlog, segments, now=NOW)

    assert result.status == ReassignStatus.REJECTED_INVALID_TARGET
    assert backlog[1].global_index_hint is None


def make_mixed_segments():
    """W0 09:00, B1, W2 09:30-09:55 (focus), then W3 12:00, B4, W5 12:30-12:55 (leisure)."""
    blocks = [
        DayBlock(id="focus", category=DayCategory.FOCUS, start="09:00", end="10:00"),
        DayBlock(id="lunch", category=DayCategory.LEISURE, start="12:00", end="13:00"),
    ]
    return SegmentService(work_minutes=25, break_minutes=5).generate_segments(blocks, [], DAY, "UTC")


def test_drop_on_work_unit_of_other_category_is_rejected():
    segments = make_mixed_segments()
    backlog = [make_item("a", priority=1)]

    result = make_service().reassign("a", 3, backlog, segments, now=NOW)

    assert result.status == ReassignStatus.REJECTED_INVALID_TARGET
    assert backlog[0].global_index_hint is None
    assert anchors(result.allocations) == {"a": [0]}


def test_leisure_item_moves_within_leisure_block():
    segments = make_mixed_segments()
    backlog = [make_item("walk", priority=1, unit_type=UnitType.LEISURE)]
    service = make_service()

    assert service.reassign("walk", 2, backlog, segments, now=NOW).status == (
        ReassignStatus.REJECTED_INVALID_TARGET
    )
    result = service.reassign("walk", 5, backlog, segments, now=NOW)

    assert result.status == ReassignStatus.ACCEPTED
    assert backlog[0].global_index_hint == 5


def test_unknown_item_is_rejected(segments, backlog):
    result = make_service().reassign("ghost", 3, backlog, segments, now=NOW)

    assert result.status == ReassignStatus.REJECTED_UNKNOWN_ITEM


def test_lower_priority_items_take_freed_slots(segments):
    backlog = [
        make_item("x", priority=1, global_index_hint=1),
        make_item("y", priority=2),
        make_item("z", priority=3),
    ]
    service = make_service()
    before = service.assignment_service.assign(backlog, segments, now=NOW)
    assert anchors(before) == {"x": [1], "y": [3], "z": [5]}

    result = service.reassign("x", 7, backlog, segments, now=NOW)

    assert result.status == ReassignStatus.ACCEPTED
    assert anchors(result.allocations) == {"x": [7], "y": [1], "z": [3]}


def test_non_anchor_segment_of_long_focus_counts_as_occupied(segments):
    backlog = [
        make_item("deep", priority=1, units=1, unit_type=UnitType.LONG_FOCUS),
        make_item("y", priority=2),
    ]
    service = make_service()
    current = service.assignment_service.assign(backlog, segments, now=NOW)
    assert current[0].segment_indices == [1, 2, 3, 4]

    result = service.reassign("y", 3, backlog, segments, allocations=current, now=NOW)

    assert result.status == ReassignStatus.REJECTED_OCCUPIED


def test_occupied_indices_skip_overflow():
    allocations = [
        Allocation(
            work_item_id="a",
            unit_index=1,
            unit_type=UnitType.STANDARD,
            start=at(9, 0),
            end=at(9, 30),
            category="focus",
            global_index=1,
            segment_indices=[1, 2],
        ),
        Allocation(
            work_item_id="b",
            unit_index=1,
            unit_type=UnitType.STANDARD,
            start=at(11, 0),
            end=at(11, 30),
            category="focus",
            overflow=True,
        ),
    ]

    assert ReallocationService.occupied_indices(allocations) == {1: "a", 2: "a"}


# ===========================================
# Drag gesture
# ===========================================


def test_move_over_other_category_clears_target():
    segments = make_mixed_segments()
    backlog = [make_item("a", priority=1)]
    service = make_service()
    current = service.assignment_service.assign(backlog, segments, now=NOW)

    state = service.begin(DragState(), current[0])
    assert state.unit_type == UnitType.STANDARD
    state = service.move(state, 2, segments)
    assert state.target_global_index == 2

    state = service.move(state, 3, segments)
    assert state.target_global_index is None


def test_full_drag_gesture(segments, backlog):
    service = make_service()
    current = service.assignment_service.assign(backlog, segments, now=NOW)
    y_unit = next(a for a in current if a.work_item_id == "y")

    state = service.begin(DragState(), y_unit)
    assert state.phase == DragPhase.DRAGGING
    assert (state.work_item_id, state.unit_index) == ("y", 1)
    assert state.target_global_index is None

    state = service.move(state, 3, segments)
    assert state.target_global_index == 3

    state, result = service.drop(state, backlog, segments, allocations=current, now=NOW)

    assert state == DragState()
    assert result.status == ReassignStatus.ACCEPTED
    assert anchors(result.allocations)["y"] == [3]


def test_move_over_break_clears_target(segments, backlog):
    service = make_service()
    current = service.assignment_service.assign(backlog, segments, now=NOW)
    state = service.begin(DragState(), current[0])

    state = service.move(state, 3, segments)
    state = service.move(state, 4, segments)
    assert state.target_global_index is None

    state = service.move(state, None, segments)
    assert state.target_global_index is None
    assert state.is_dragging


def test_drop_without_target_changes_nothing(segments, backlog):
    service = make_service()
    current = service.assignment_service.assign(backlog, segments, now=NOW)
    state = service.begin(DragState(), current[0])

    state, result = service.drop(state, backlog, segments, allocations=current, now=NOW)

    assert state.phase == DragPhase.IDLE
    assert result is None
    assert backlog[0].global_index_hint == 5


def test_cancel_returns_to_idle(segments, backlog):
    service = make_service()
    current = service.assignment_service.assign(backlog, segments, now=NOW)
    state = service.move(service.begin(DragState(), current[1]), 3, segments)

    assert ReallocationService.cancel(state) == DragState()
    assert backlog[1].global_index_hint is None


def test_begin_while_dragging_raises(segments, backlog):
    service = make_service()
    current = service.assignment_service.assign(backlog, segments, now=NOW)
    state = service.begin(DragState(), current[0])

    with pytest.raises(DragStateError):
        service.begin(state, current[1])


def test_move_and_drop_require_active_gesture(segments, backlog):
    service = make_service()

    with pytest.raises(DragStateError):
        service.move(DragState(), 3, segments)
    with pytest.raises(DragStateError):
        service.drop(DragState(), backlog, segments, now=NOW)
