"""Habit domain entity."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4


@dataclass(frozen=True)
class Habit:
    """Domain entity for a daily habit and its streak."""

    title: str
    created_at: datetime
    id: UUID = field(default_factory=uuid4)
    streak: int = 0
    last_completed: datetime | None = None
    completed_dates: tuple[datetime, ...] = ()

    def record_completion(self, when: datetime, streak: int) -> "Habit":
        """Return a copy with one more completion at ``when``."""
        return replace(
            self,
            streak=streak,
            last_completed=when,
            completed_dates=(*self.completed_dates, when),
        )
