"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class DayPlanError(Exception):
    """Base exception for dayplan."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(DayPlanError):
    """Resource not found."""

    pass


class ValidationError(DayPlanError):
    """Validation error."""

    pass


class BusinessLogicError(DayPlanError):
    """Business logic constraint violation."""

    pass


class InvariantViolationError(DayPlanError):
    """The assignment engine produced an inconsistent allocation set."""

    def __init__(self, message: str, global_index: int, work_item_ids: list[str]):
        super().__init__(
            message,
            details={"global_index": global_index, "work_item_ids": work_item_ids},
        )
        self.global_index = global_index
        self.work_item_ids = work_item_ids


class DragStateError(BusinessLogicError):
    """A drag gesture entry point was called in the wrong phase."""

    pass
