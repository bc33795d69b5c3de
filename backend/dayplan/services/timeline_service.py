"""
Timeline service.

Loads one day's inputs from the external collaborators and runs the
segment generator, the assignment engine and the execution reconciler.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dayplan.core.config import get_settings
from dayplan.core.exceptions import NotFoundError, ValidationError
from dayplan.core.logger import setup_logger
from dayplan.interfaces.appointment_provider import IAppointmentProvider
from dayplan.interfaces.day_template_provider import IDayTemplateProvider
from dayplan.interfaces.work_item_repository import IWorkItemRepository
from dayplan.models.enums import ReassignStatus
from dayplan.models.reallocation import ReassignResult
from dayplan.models.timeline import Appointment, DayPlan, Segment, TodoRecord
from dayplan.services.assignment_service import AssignmentService
from dayplan.services.execution_service import ExecutionService
from dayplan.services.reallocation_service import ReallocationService
from dayplan.services.segment_service import SegmentService
from dayplan.services.work_item_utils import to_work_items

logger = setup_logger(__name__)


class TimelineService:
    def __init__(
        self,
        template_provider: IDayTemplateProvider,
        appointment_provider: IAppointmentProvider,
        work_item_repo: IWorkItemRepository,
        segment_service: Optional[SegmentService] = None,
        assignment_service: Optional[AssignmentService] = None,
        reallocation_service: Optional[ReallocationService] = None,
        execution_service: Optional[ExecutionService] = None,
        timezone: Optional[str] = None,
    ):
        self._template_provider = template_provider
        self._appointment_provider = appointment_provider
        self._work_item_repo = work_item_repo
        self.segment_service = segment_service or SegmentService()
        self.assignment_service = assignment_service or AssignmentService()
        self.reallocation_service = reallocation_service or ReallocationService(
            self.assignment_service
        )
        self.execution_service = execution_service or ExecutionService()
        self.timezone = timezone or get_settings().TIMEZONE
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValidationError(f"Unknown timezone: {self.timezone}") from exc

    async def _load_day(
        self,
        day: date,
    ) -> tuple[list[Segment], list[Appointment], list[TodoRecord]]:
        blocks = await self._template_provider.get_blocks(day)
        appointments = await self._appointment_provider.list_for_day(day)
        todos = await self._work_item_repo.list_for_day(day)
        segments = self.segment_service.generate_segments(
            blocks, appointments, day, self.timezone
        )
        return segments, appointments, todos

    async def build_plan(self, day: date, now: Optional[datetime] = None) -> DayPlan:
        """Build the full plan and actual-execution overlay for one day."""
        segments, appointments, todos = await self._load_day(day)
        allocations = self.assignment_service.assign(to_work_items(todos), segments, now=now)
        return DayPlan(
            day=day,
            timezone=self.timezone,
            segments=segments,
            allocations=allocations,
            execution_intervals=self.execution_service.reconcile(todos, appointments),
            execution_units=self.execution_service.execution_units(todos),
            overflow=any(allocation.overflow for allocation in allocations),
        )

    async def reassign(
        self,
        day: date,
        work_item_id: str,
        target_global_index: int,
        now: Optional[datetime] = None,
    ) -> ReassignResult:
        """
        Move one todo to a new segment and persist its hint when accepted.

        Rejections leave the backlog untouched.
        """
        segments, _, todos = await self._load_day(day)
        work_items = to_work_items(todos)
        result = self.reallocation_service.reassign(
            work_item_id,
            target_global_index,
            work_items,
            segments,
            now=now,
        )
        if result.status == ReassignStatus.ACCEPTED:
            updated = await self._work_item_repo.update_global_index_hint(
                day, work_item_id, target_global_index
            )
            if updated is None:
                raise NotFoundError(f"Todo {work_item_id} not found")
        return result
