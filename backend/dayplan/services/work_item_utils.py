"""
Work item utility functions.

Translate raw backlog records into the engine's WorkItem shape.
"""

from typing import Iterable

from dayplan.models.enums import TodoStatus, UnitType
from dayplan.models.timeline import TodoRecord, WorkItem


def sum_unit_counts(counts: Iterable[int]) -> int:
    """Sum recorded unit counts, ignoring negative entries."""
    return sum(count for count in counts if count > 0)


def to_scheduling_units(raw_count: int, unit_type: UnitType) -> int:
    """
    Convert a user-facing unit count into scheduling units.

    One long-focus unit in user terms is two work+break pairs, so its count
    is doubled.
    """
    if unit_type == UnitType.LONG_FOCUS:
        return raw_count * 2
    return raw_count


def get_estimated_units(todo: TodoRecord) -> int:
    return to_scheduling_units(sum_unit_counts(todo.estimates), todo.unit_type)


def get_actual_units(todo: TodoRecord) -> int:
    return to_scheduling_units(sum_unit_counts(todo.actuals), todo.unit_type)


def get_display_units(todo: TodoRecord) -> int:
    """
    Units a todo occupies on the plan.

    Finished todos use what was actually recorded, all others their estimate.
    """
    if todo.status == TodoStatus.DONE:
        return get_actual_units(todo)
    return get_estimated_units(todo)


def to_work_item(todo: TodoRecord) -> WorkItem:
    return WorkItem(
        id=todo.id,
        title=todo.title,
        priority=todo.priority,
        required_units=get_display_units(todo),
        unit_type=todo.unit_type,
        global_index_hint=todo.global_index_hint,
    )


def to_work_items(todos: Iterable[TodoRecord]) -> list[WorkItem]:
    """Translate a backlog, keeping its order. Cancelled todos are not planned."""
    return [to_work_item(todo) for todo in todos if todo.status != TodoStatus.CANCELLED]
