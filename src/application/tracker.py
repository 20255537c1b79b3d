"""Tracker: the single owner of live state."""

from collections.abc import Iterable
from datetime import datetime
from typing import TypeVar
from uuid import UUID

import structlog

from core.clock import Clock, SystemClock
from domain.entities.goal import Goal
from domain.entities.habit import Habit
from domain.entities.state import TrackerState
from domain.entities.task import Task, TaskCategory
from domain.repositories.snapshot_repository import ISnapshotRepository
from domain.services.base import Outcome
from domain.services.goal_service import GoalService
from domain.services.habit_service import HabitService
from domain.services.stats_service import (
    Achievement,
    HabitDay,
    TrackerStats,
    achievements,
    habit_week,
    is_completed_today,
    summarize,
)
from domain.services.task_service import TaskService
from infrastructure.notifications.provider import INotifier

logger = structlog.get_logger()

RecordT = TypeVar("RecordT")


class Tracker:
    """Coordinates services, persistence and notifications.

    Presentation code reads ``state`` and calls the operations below; it
    never builds or mutates records itself. Each operation runs the domain
    transition, saves the new snapshot, then hands signals to the notifier.
    Domain errors propagate and leave the state as it was.
    """

    def __init__(
        self,
        repository: ISnapshotRepository,
        notifier: INotifier,
        clock: Clock | None = None,
        task_service: TaskService | None = None,
        habit_service: HabitService | None = None,
        goal_service: GoalService | None = None,
        state: TrackerState | None = None,
    ) -> None:
        self._repository = repository
        self._notifier = notifier
        self._clock = clock or SystemClock()
        self._tasks = task_service or TaskService(self._clock)
        self._habits = habit_service or HabitService(self._clock)
        self._goals = goal_service or GoalService(self._clock)
        self._state = state or TrackerState.empty()

    @property
    def state(self) -> TrackerState:
        return self._state

    def load(self) -> TrackerState:
        """Replace the in-memory state with the persisted snapshot."""
        self._state = self._repository.load()
        logger.info(
            "tracker_loaded",
            tasks=len(self._state.tasks),
            habits=len(self._state.habits),
            goals=len(self._state.goals),
        )
        return self._state

    # --- Tasks ---

    def create_task(
        self,
        title: str,
        category: TaskCategory | str = TaskCategory.OTHER,
        reminder: datetime | None = None,
    ) -> Task:
        return self._apply(self._tasks.create(self._state, title, category, reminder))

    def complete_task(self, task_id: UUID) -> Task:
        return self._apply(self._tasks.complete(self._state, task_id))

    def delete_task(self, task_id: UUID) -> Task:
        return self._apply(self._tasks.delete(self._state, task_id))

    # --- Habits ---

    def create_habit(self, title: str) -> Habit:
        return self._apply(self._habits.create(self._state, title))

    def complete_habit(self, habit_id: UUID) -> Habit:
        return self._apply(self._habits.complete(self._state, habit_id))

    def delete_habit(self, habit_id: UUID) -> Habit:
        return self._apply(self._habits.delete(self._state, habit_id))

    # --- Goals ---

    def create_goal(
        self,
        title: str,
        description: str | None = None,
        milestone_titles: Iterable[str] = (),
    ) -> Goal:
        return self._apply(
            self._goals.create(self._state, title, description, milestone_titles)
        )

    def toggle_milestone(self, goal_id: UUID, milestone_id: UUID) -> Goal:
        return self._apply(self._goals.toggle_milestone(self._state, goal_id, milestone_id))

    def delete_goal(self, goal_id: UUID) -> Goal:
        return self._apply(self._goals.delete(self._state, goal_id))

    # --- Read side ---

    def stats(self) -> TrackerStats:
        return summarize(self._state, self._clock.now())

    def achievements(self) -> list[Achievement]:
        return achievements(self.stats())

    def habit_week(self, habit: Habit) -> list[HabitDay]:
        return habit_week(habit, self._clock.now())

    def is_completed_today(self, habit: Habit) -> bool:
        return is_completed_today(habit, self._clock.now())

    # --- Internals ---

    def _apply(self, outcome: Outcome[RecordT]) -> RecordT:
        if not outcome.changed:
            return outcome.record

        self._state = outcome.state
        self._persist()

        for signal in outcome.signals:
            try:
                self._notifier.notify(signal)
            except Exception:
                logger.exception("notifier_failed", kind=signal.kind)
        return outcome.record

    def _persist(self) -> None:
        # Last write wins; a failed save keeps the in-memory state
        try:
            self._repository.save(self._state)
        except Exception:
            logger.exception("snapshot_save_failed")
