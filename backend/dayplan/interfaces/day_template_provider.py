"""
Day template provider interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from dayplan.models.timeline import DayBlock


class IDayTemplateProvider(ABC):
    @abstractmethod
    async def get_blocks(self, day: date) -> list[DayBlock]:
        """Ordered template blocks for the given date."""
        pass
