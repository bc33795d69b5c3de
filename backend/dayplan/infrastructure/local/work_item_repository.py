"""
In-memory todo repository for local development and tests.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from dayplan.interfaces.work_item_repository import IWorkItemRepository
from dayplan.models.timeline import TodoRecord


class InMemoryWorkItemRepository(IWorkItemRepository):
    def __init__(self):
        self._by_day: dict[date, list[TodoRecord]] = {}

    def add(self, day: date, todo: TodoRecord) -> TodoRecord:
        self._by_day.setdefault(day, []).append(todo)
        return todo

    async def list_for_day(self, day: date) -> list[TodoRecord]:
        return [todo.model_copy() for todo in self._by_day.get(day, [])]

    async def update_global_index_hint(
        self,
        day: date,
        todo_id: str,
        global_index: Optional[int],
    ) -> Optional[TodoRecord]:
        todos = self._by_day.get(day, [])
        for position, todo in enumerate(todos):
            if todo.id == todo_id:
                updated = todo.model_copy(update={"global_index_hint": global_index})
                todos[position] = updated
                return updated
        return None
