"""Goal service layer: milestones and progress."""

from collections.abc import Iterable
from dataclasses import replace
from uuid import UUID

import structlog

from core.exceptions import GoalNotFoundError, MilestoneNotFoundError
from domain.entities.goal import ACHIEVED_PROGRESS, Goal, Milestone
from domain.entities.signal import ShowNotification, SignalKinds
from domain.entities.state import TrackerState
from domain.services.base import EngineService, Outcome

logger = structlog.get_logger()


class GoalService(EngineService):
    """Creation, milestone toggling and deletion of goals."""

    def create(
        self,
        state: TrackerState,
        title: str,
        description: str | None = None,
        milestone_titles: Iterable[str] = (),
    ) -> Outcome[Goal]:
        """Create a goal. Blank milestone titles are dropped."""
        cleaned = self._clean_title(title, "goal")
        taken = state.ids()

        milestones = tuple(
            Milestone(id=self._next_id(taken), title=name.strip())
            for name in milestone_titles
            if name and name.strip()
        )
        goal = Goal(
            id=self._next_id(taken),
            title=cleaned,
            description=(description or "").strip() or None,
            created_at=self._clock.now(),
        ).with_milestones(milestones)

        logger.debug("goal_created", goal_id=str(goal.id), milestones=len(milestones))
        return Outcome(state=replace(state, goals=(*state.goals, goal)), record=goal)

    def toggle_milestone(
        self, state: TrackerState, goal_id: UUID, milestone_id: UUID
    ) -> Outcome[Goal]:
        """Flip one milestone and recompute progress.

        Signals "goal achieved" only when progress crosses into 100.
        """
        index, goal = self._find(state, goal_id)

        for position, milestone in enumerate(goal.milestones):
            if milestone.id == milestone_id:
                break
        else:
            raise MilestoneNotFoundError(str(goal_id), str(milestone_id))

        milestones = (
            *goal.milestones[:position],
            milestone.toggle(),
            *goal.milestones[position + 1 :],
        )
        updated = goal.with_milestones(milestones)
        goals = (*state.goals[:index], updated, *state.goals[index + 1 :])

        signals: tuple[ShowNotification, ...] = ()
        if goal.progress < ACHIEVED_PROGRESS and updated.progress == ACHIEVED_PROGRESS:
            logger.info("goal_achieved", goal_id=str(goal.id))
            signals = (
                ShowNotification(
                    heading="Goal Achieved!",
                    body=f"You completed: {updated.title}!",
                    kind=SignalKinds.GOAL_ACHIEVED,
                    metadata={"goal_id": str(updated.id)},
                ),
            )

        return Outcome(state=replace(state, goals=goals), record=updated, signals=signals)

    def delete(self, state: TrackerState, goal_id: UUID) -> Outcome[Goal]:
        index, goal = self._find(state, goal_id)
        goals = (*state.goals[:index], *state.goals[index + 1 :])
        return Outcome(state=replace(state, goals=goals), record=goal)

    @staticmethod
    def _find(state: TrackerState, goal_id: UUID) -> tuple[int, Goal]:
        for index, goal in enumerate(state.goals):
            if goal.id == goal_id:
                return index, goal
        raise GoalNotFoundError(str(goal_id))
