"""
Execution reconciliation service.

Derives what actually happened from recorded start/finish timestamps so it
can be drawn next to the plan. Nothing here reads or changes the plan.
"""

from datetime import timedelta
from typing import Optional

from dayplan.core.config import get_settings
from dayplan.core.logger import setup_logger
from dayplan.models.enums import APPOINTMENT_CATEGORY, IDLE_CATEGORY, TodoStatus, UnitType
from dayplan.models.timeline import Appointment, ExecutionInterval, ExecutionUnit, TodoRecord
from dayplan.services.work_item_utils import get_display_units

logger = setup_logger(__name__)

MARKER_SPAN = timedelta(minutes=1)


class ExecutionService:
    """Service for actual-vs-planned overlays."""

    def __init__(
        self,
        work_minutes: Optional[int] = None,
        break_minutes: Optional[int] = None,
        marker_priorities: Optional[dict[int, str]] = None,
    ):
        settings = get_settings()
        self.work_minutes = work_minutes if work_minutes is not None else settings.WORK_MINUTES
        self.break_minutes = break_minutes if break_minutes is not None else settings.BREAK_MINUTES
        self.marker_priorities = (
            marker_priorities if marker_priorities is not None else settings.MARKER_PRIORITIES
        )

    def reconcile(
        self,
        todos: list[TodoRecord],
        appointments: list[Appointment],
    ) -> list[ExecutionInterval]:
        """
        Build actual execution intervals.

        - Finished todos with both timestamps become a start..finish range.
        - Marker todos (priority in marker_priorities) with both timestamps
          become a one-minute point centred between them.
        - Appointments with a recorded finish become start..finish.

        Output order follows the input; overlaps are kept as recorded.
        """
        intervals: list[ExecutionInterval] = []

        for todo in todos:
            if todo.started_at is None or todo.finished_at is None:
                continue
            if todo.finished_at < todo.started_at:
                logger.debug(f"Skipping todo {todo.id}: finished before it started")
                continue
            marker = self.marker_priorities.get(todo.priority)
            if marker:
                midpoint = todo.started_at + (todo.finished_at - todo.started_at) / 2
                intervals.append(
                    ExecutionInterval(
                        owner_id=todo.id,
                        title=todo.title,
                        start=midpoint - MARKER_SPAN / 2,
                        end=midpoint + MARKER_SPAN / 2,
                        kind=marker,
                        is_marker=True,
                    )
                )
                continue
            if todo.status != TodoStatus.DONE:
                continue
            intervals.append(
                ExecutionInterval(
                    owner_id=todo.id,
                    title=todo.title,
                    start=todo.started_at,
                    end=todo.finished_at,
                    kind=todo.unit_type.value,
                )
            )

        for appointment in appointments:
            if appointment.finished_at is None:
                continue
            if appointment.finished_at < appointment.start:
                logger.debug(f"Skipping appointment {appointment.id}: finished before it started")
                continue
            intervals.append(
                ExecutionInterval(
                    owner_id=appointment.id,
                    title=appointment.title,
                    start=appointment.start,
                    end=appointment.finished_at,
                    kind=IDLE_CATEGORY if appointment.idle else APPOINTMENT_CATEGORY,
                )
            )

        return intervals

    def execution_units(self, todos: list[TodoRecord]) -> list[ExecutionUnit]:
        """
        Lay each started todo's counted units back to back from its actual start.

        Standard and leisure units last one work length. A long-focus unit
        spans two work+break pairs and is drawn as four equal quarters.
        """
        units: list[ExecutionUnit] = []
        work = timedelta(minutes=self.work_minutes)
        quarter = timedelta(minutes=self.work_minutes + self.break_minutes) / 2

        for todo in todos:
            if todo.started_at is None:
                continue
            completed = todo.status == TodoStatus.DONE
            cursor = todo.started_at
            for unit_index in range(1, get_display_units(todo) + 1):
                if todo.unit_type == UnitType.LONG_FOCUS:
                    slices = [quarter] * 4
                else:
                    slices = [work]
                for length in slices:
                    units.append(
                        ExecutionUnit(
                            owner_id=todo.id,
                            unit_index=unit_index,
                            unit_type=todo.unit_type,
                            start=cursor,
                            end=cursor + length,
                            completed=completed,
                        )
                    )
                    cursor += length

        units.sort(key=lambda unit: unit.start)
        return units
