"""Habit service layer: streak bookkeeping."""

from dataclasses import replace
from uuid import UUID

import structlog

from core.clock import calendar_days_between
from core.exceptions import ClockSkewError, HabitNotFoundError
from domain.entities.habit import Habit
from domain.entities.signal import ShowNotification, SignalKinds
from domain.entities.state import TrackerState
from domain.services.base import EngineService, Outcome

logger = structlog.get_logger()


class HabitService(EngineService):
    """Creation, daily completion and deletion of habits."""

    def create(self, state: TrackerState, title: str) -> Outcome[Habit]:
        habit = Habit(
            id=self._next_id(state.ids()),
            title=self._clean_title(title, "habit"),
            created_at=self._clock.now(),
        )
        logger.debug("habit_created", habit_id=str(habit.id))
        return Outcome(state=replace(state, habits=(*state.habits, habit)), record=habit)

    def complete(self, state: TrackerState, habit_id: UUID) -> Outcome[Habit]:
        """Record today's completion and advance the streak.

        At most one completion per calendar day is accepted; a second one
        the same day returns the state unchanged. A gap of exactly one day
        extends the streak, any longer gap restarts it at 1.

        Raises:
            HabitNotFoundError: unknown ``habit_id``.
            ClockSkewError: ``last_completed`` is on a later day than today.
        """
        index, habit = self._find(state, habit_id)
        now = self._clock.now()

        if habit.last_completed is None:
            new_streak = 1
        else:
            gap = calendar_days_between(now, habit.last_completed)
            if gap == 0:
                return Outcome(state=state, record=habit, changed=False)
            if gap < 0:
                logger.warning(
                    "habit_completion_in_future",
                    habit_id=str(habit.id),
                    last_completed=habit.last_completed.isoformat(),
                    now=now.isoformat(),
                )
                raise ClockSkewError(str(habit.id), habit.last_completed.isoformat())
            new_streak = habit.streak + 1 if gap == 1 else 1

        updated = habit.record_completion(now, new_streak)
        habits = (*state.habits[:index], updated, *state.habits[index + 1 :])

        logger.debug("habit_completed", habit_id=str(habit.id), streak=new_streak)
        return Outcome(
            state=replace(state, habits=habits),
            record=updated,
            signals=(
                ShowNotification(
                    heading="Habit Completed!",
                    body=f"{new_streak} day streak! Keep it going!",
                    kind=SignalKinds.HABIT_COMPLETED,
                    metadata={"habit_id": str(updated.id), "streak": new_streak},
                ),
            ),
        )

    def delete(self, state: TrackerState, habit_id: UUID) -> Outcome[Habit]:
        index, habit = self._find(state, habit_id)
        habits = (*state.habits[:index], *state.habits[index + 1 :])
        return Outcome(state=replace(state, habits=habits), record=habit)

    @staticmethod
    def _find(state: TrackerState, habit_id: UUID) -> tuple[int, Habit]:
        for index, habit in enumerate(state.habits):
            if habit.id == habit_id:
                return index, habit
        raise HabitNotFoundError(str(habit_id))
