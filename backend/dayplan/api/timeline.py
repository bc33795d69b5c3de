"""
Timeline API endpoints.

Segments, planned placements and the actual-execution overlay for one day,
plus drag-to-reassign.
"""

from datetime import date

from fastapi import APIRouter, HTTPException, status

from dayplan.api.deps import TimelineSvc
from dayplan.core.exceptions import NotFoundError
from dayplan.models.reallocation import ReassignRequest, ReassignResult
from dayplan.models.timeline import DayPlan

router = APIRouter()


@router.get("/{day}", response_model=DayPlan, status_code=status.HTTP_200_OK)
async def get_day_plan(day: date, service: TimelineSvc):
    """
    Get the plan for a day.

    Recomputed on every request from the template, appointments and backlog.
    """
    return await service.build_plan(day)


@router.post("/{day}/reassign", response_model=ReassignResult)
async def reassign_work_item(day: date, payload: ReassignRequest, service: TimelineSvc):
    """
    Move a todo to another work segment.

    Rejected moves are returned with a rejected status rather than an error.
    """
    try:
        return await service.reassign(day, payload.work_item_id, payload.target_global_index)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
