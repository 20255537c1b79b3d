"""Task domain entity."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import StrEnum
from uuid import UUID, uuid4


class TaskCategory(StrEnum):
    """Closed set of task categories."""

    HOMEWORK = "homework"
    WORKOUT = "workout"
    PERSONAL = "personal"
    STUDY = "study"
    OTHER = "other"


@dataclass(frozen=True)
class Task:
    """Domain entity for a one-off task."""

    title: str
    created_at: datetime
    category: TaskCategory = TaskCategory.OTHER
    id: UUID = field(default_factory=uuid4)
    completed: bool = False
    reminder: datetime | None = None

    def complete(self) -> "Task":
        """Return a completed copy. Completion is one-way."""
        return replace(self, completed=True)
