"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the collaborator
implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from dayplan.core.config import get_settings
from dayplan.interfaces.appointment_provider import IAppointmentProvider
from dayplan.interfaces.day_template_provider import IDayTemplateProvider
from dayplan.interfaces.work_item_repository import IWorkItemRepository
from dayplan.services.timeline_service import TimelineService


# ===========================================
# Collaborator Dependencies
# ===========================================


@lru_cache()
def get_day_template_provider() -> IDayTemplateProvider:
    """Get day template provider instance."""
    settings = get_settings()
    if not settings.is_local:
        raise NotImplementedError("Only the local template provider is available")
    from dayplan.infrastructure.local.day_template_provider import InMemoryDayTemplateProvider
    return InMemoryDayTemplateProvider()


@lru_cache()
def get_appointment_provider() -> IAppointmentProvider:
    """Get appointment provider instance."""
    settings = get_settings()
    if not settings.is_local:
        raise NotImplementedError("Only the local appointment provider is available")
    from dayplan.infrastructure.local.appointment_provider import InMemoryAppointmentProvider
    return InMemoryAppointmentProvider()


@lru_cache()
def get_work_item_repository() -> IWorkItemRepository:
    """Get todo repository instance."""
    settings = get_settings()
    if not settings.is_local:
        raise NotImplementedError("Only the local todo repository is available")
    from dayplan.infrastructure.local.work_item_repository import InMemoryWorkItemRepository
    return InMemoryWorkItemRepository()


def get_timeline_service() -> TimelineService:
    """Get TimelineService instance."""
    return TimelineService(
        template_provider=get_day_template_provider(),
        appointment_provider=get_appointment_provider(),
        work_item_repo=get_work_item_repository(),
    )


TimelineSvc = Annotated[TimelineService, Depends(get_timeline_service)]
