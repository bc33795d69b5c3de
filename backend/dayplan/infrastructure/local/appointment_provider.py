"""
In-memory appointment provider for local development and tests.
"""

from __future__ import annotations

from datetime import date

from dayplan.interfaces.appointment_provider import IAppointmentProvider
from dayplan.models.timeline import Appointment


class InMemoryAppointmentProvider(IAppointmentProvider):
    def __init__(self):
        self._by_day: dict[date, list[Appointment]] = {}

    def add(self, day: date, appointment: Appointment) -> Appointment:
        self._by_day.setdefault(day, []).append(appointment)
        return appointment

    async def list_for_day(self, day: date) -> list[Appointment]:
        return list(self._by_day.get(day, []))
