"""Goal and milestone domain entities."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

ACHIEVED_PROGRESS = 100.0


def compute_progress(milestones: tuple["Milestone", ...]) -> float:
    """Percentage of completed milestones; 0 for a goal without milestones."""
    if not milestones:
        return 0.0
    done = sum(1 for m in milestones if m.completed)
    return 100 * done / len(milestones)


@dataclass(frozen=True)
class Milestone:
    """Named sub-goal within a Goal."""

    title: str
    id: UUID = field(default_factory=uuid4)
    completed: bool = False

    def toggle(self) -> "Milestone":
        return replace(self, completed=not self.completed)


@dataclass(frozen=True)
class Goal:
    """Domain entity for a goal tracked through fixed milestones."""

    title: str
    created_at: datetime
    id: UUID = field(default_factory=uuid4)
    description: str | None = None
    milestones: tuple[Milestone, ...] = ()
    progress: float = 0.0

    @property
    def is_achieved(self) -> bool:
        return self.progress >= ACHIEVED_PROGRESS

    def with_milestones(self, milestones: tuple[Milestone, ...]) -> "Goal":
        """Return a copy with new milestones and recomputed progress."""
        return replace(self, milestones=milestones, progress=compute_progress(milestones))
