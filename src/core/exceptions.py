"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the domain engine."""

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    EMPTY_TITLE = "EMPTY_TITLE"
    INVALID_CATEGORY = "INVALID_CATEGORY"
    CLOCK_SKEW = "CLOCK_SKEW"

    # Not found errors
    NOT_FOUND = "NOT_FOUND"
    TASK_NOT_FOUND = "TASK_NOT_FOUND"
    HABIT_NOT_FOUND = "HABIT_NOT_FOUND"
    GOAL_NOT_FOUND = "GOAL_NOT_FOUND"
    MILESTONE_NOT_FOUND = "MILESTONE_NOT_FOUND"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """Input rejected before any state was touched."""

    def __init__(
        self,
        message: str = "Validation failed",
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            details=details,
        )


class EmptyTitleError(ValidationError):
    """Title is empty after trimming."""

    def __init__(self, record_type: str) -> None:
        super().__init__(
            error_code=ErrorCode.EMPTY_TITLE,
            message=f"{record_type.capitalize()} title must not be empty",
            details={"record_type": record_type},
        )


class InvalidCategoryError(ValidationError):
    """Task category outside the allowed set."""

    def __init__(self, category: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_CATEGORY,
            message=f"Unknown task category: {category}",
            details={"category": category},
        )


class ClockSkewError(ValidationError):
    """Last completion lies on a calendar day after today."""

    def __init__(self, habit_id: str, last_completed: str) -> None:
        super().__init__(
            error_code=ErrorCode.CLOCK_SKEW,
            message="Habit was last completed in the future; check the system clock",
            details={"habit_id": habit_id, "last_completed": last_completed},
        )


class NotFoundError(AppException):
    """Operation referenced an unknown id."""

    def __init__(
        self,
        message: str = "Record not found",
        error_code: ErrorCode = ErrorCode.NOT_FOUND,
        details: Any | None = None,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            details=details,
        )


class TaskNotFoundError(NotFoundError):
    """Task not found."""

    def __init__(self, task_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.TASK_NOT_FOUND,
            message=f"Task not found: {task_id}",
            details={"task_id": task_id},
        )


class HabitNotFoundError(NotFoundError):
    """Habit not found."""

    def __init__(self, habit_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.HABIT_NOT_FOUND,
            message=f"Habit not found: {habit_id}",
            details={"habit_id": habit_id},
        )


class GoalNotFoundError(NotFoundError):
    """Goal not found."""

    def __init__(self, goal_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.GOAL_NOT_FOUND,
            message=f"Goal not found: {goal_id}",
            details={"goal_id": goal_id},
        )


class MilestoneNotFoundError(NotFoundError):
    """Milestone not found within its goal."""

    def __init__(self, goal_id: str, milestone_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.MILESTONE_NOT_FOUND,
            message=f"Milestone not found: {milestone_id}",
            details={"goal_id": goal_id, "milestone_id": milestone_id},
        )
