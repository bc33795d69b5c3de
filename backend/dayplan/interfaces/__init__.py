"""Abstract interfaces for the engine's external collaborators."""

from dayplan.interfaces.appointment_provider import IAppointmentProvider
from dayplan.interfaces.day_template_provider import IDayTemplateProvider
from dayplan.interfaces.work_item_repository import IWorkItemRepository

__all__ = [
    "IAppointmentProvider",
    "IDayTemplateProvider",
    "IWorkItemRepository",
]
