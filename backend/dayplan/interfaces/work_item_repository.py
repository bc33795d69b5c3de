"""
Work item (todo backlog) repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from dayplan.models.timeline import TodoRecord


class IWorkItemRepository(ABC):
    """Backlog store. The engine only ever writes back position hints."""

    @abstractmethod
    async def list_for_day(self, day: date) -> list[TodoRecord]:
        """Todos for the day in backlog order."""
        pass

    @abstractmethod
    async def update_global_index_hint(
        self,
        day: date,
        todo_id: str,
        global_index: Optional[int],
    ) -> Optional[TodoRecord]:
        """Store a new position hint. Returns None if the todo does not exist."""
        pass
