"""
Appointment provider interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from dayplan.models.timeline import Appointment


class IAppointmentProvider(ABC):
    @abstractmethod
    async def list_for_day(self, day: date) -> list[Appointment]:
        pass
