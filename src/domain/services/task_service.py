"""Task service layer with business logic."""

from dataclasses import replace
from datetime import datetime
from uuid import UUID

import structlog

from core.clock import ensure_aware
from core.exceptions import InvalidCategoryError, TaskNotFoundError
from domain.entities.signal import ScheduleReminder, ShowNotification, SignalKinds
from domain.entities.state import TrackerState
from domain.entities.task import Task, TaskCategory
from domain.services.base import EngineService, Outcome

logger = structlog.get_logger()


class TaskService(EngineService):
    """Creation, completion and deletion of tasks."""

    def create(
        self,
        state: TrackerState,
        title: str,
        category: TaskCategory | str = TaskCategory.OTHER,
        reminder: datetime | None = None,
    ) -> Outcome[Task]:
        """Create a task. Emits a reminder signal when ``reminder`` is set."""
        cleaned = self._clean_title(title, "task")
        try:
            category = TaskCategory(category)
        except ValueError:
            raise InvalidCategoryError(str(category)) from None

        now = self._clock.now()
        if reminder is not None:
            reminder = ensure_aware(reminder, now)

        task = Task(
            id=self._next_id(state.ids()),
            title=cleaned,
            category=category,
            reminder=reminder,
            created_at=now,
        )
        signals = (ScheduleReminder(title=task.title, when=reminder),) if reminder else ()

        logger.debug("task_created", task_id=str(task.id), category=category.value)
        return Outcome(
            state=replace(state, tasks=(*state.tasks, task)),
            record=task,
            signals=signals,
        )

    def complete(self, state: TrackerState, task_id: UUID) -> Outcome[Task]:
        """Mark a task completed. Completing it again is a no-op."""
        index, task = self._find(state, task_id)
        if task.completed:
            return Outcome(state=state, record=task, changed=False)

        done = task.complete()
        tasks = (*state.tasks[:index], done, *state.tasks[index + 1 :])
        return Outcome(
            state=replace(state, tasks=tasks),
            record=done,
            signals=(
                ShowNotification(
                    heading="Task Completed!",
                    body="Great job! Keep it up!",
                    kind=SignalKinds.TASK_COMPLETED,
                    metadata={"task_id": str(done.id)},
                ),
            ),
        )

    def delete(self, state: TrackerState, task_id: UUID) -> Outcome[Task]:
        """Remove a task for good."""
        index, task = self._find(state, task_id)
        tasks = (*state.tasks[:index], *state.tasks[index + 1 :])
        return Outcome(state=replace(state, tasks=tasks), record=task)

    @staticmethod
    def _find(state: TrackerState, task_id: UUID) -> tuple[int, Task]:
        for index, task in enumerate(state.tasks):
            if task.id == task_id:
                return index, task
        raise TaskNotFoundError(str(task_id))
