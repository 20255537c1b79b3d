"""Tracker state container."""

from dataclasses import dataclass
from uuid import UUID

from domain.entities.goal import Goal
from domain.entities.habit import Habit
from domain.entities.task import Task


@dataclass(frozen=True)
class TrackerState:
    """Snapshot of every task, habit and goal, in insertion order."""

    tasks: tuple[Task, ...] = ()
    habits: tuple[Habit, ...] = ()
    goals: tuple[Goal, ...] = ()

    @classmethod
    def empty(cls) -> "TrackerState":
        return cls()

    def ids(self) -> set[UUID]:
        """Every record id currently in use, milestones included."""
        found = {t.id for t in self.tasks}
        found.update(h.id for h in self.habits)
        for goal in self.goals:
            found.add(goal.id)
            found.update(m.id for m in goal.milestones)
        return found
