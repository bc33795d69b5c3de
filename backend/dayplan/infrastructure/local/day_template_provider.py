"""
In-memory day template provider for local development and tests.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from dayplan.interfaces.day_template_provider import IDayTemplateProvider
from dayplan.models.enums import DayCategory
from dayplan.models.timeline import DayBlock


def default_day_template() -> list[DayBlock]:
    return [
        DayBlock(id="night", category=DayCategory.REST, start="00:00", end="07:00"),
        DayBlock(id="morning", category=DayCategory.FOCUS, start="09:00", end="12:00"),
        DayBlock(id="lunch", category=DayCategory.LEISURE, start="12:00", end="13:00"),
        DayBlock(id="afternoon", category=DayCategory.FOCUS, start="13:00", end="18:00"),
        DayBlock(id="evening", category=DayCategory.LEISURE, start="19:00", end="22:00"),
        DayBlock(id="late", category=DayCategory.REST, start="23:00", end="24:00"),
    ]


class InMemoryDayTemplateProvider(IDayTemplateProvider):
    """Same template every day unless a date-specific one is set."""

    def __init__(self, template: Optional[list[DayBlock]] = None):
        self._template = template if template is not None else default_day_template()
        self._overrides: dict[date, list[DayBlock]] = {}

    def set_blocks(self, day: date, blocks: list[DayBlock]) -> None:
        self._overrides[day] = list(blocks)

    async def get_blocks(self, day: date) -> list[DayBlock]:
        return list(self._overrides.get(day, self._template))
