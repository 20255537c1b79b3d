"""Notification signals emitted by the domain engine."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# --- Signal Kind Constants ---
# Format: {entity_type}.{event}


class SignalKinds:
    """Signal kind constants using dot-notation."""

    TASK_REMINDER = "task.reminder"
    TASK_COMPLETED = "task.completed"
    HABIT_COMPLETED = "habit.completed"
    GOAL_ACHIEVED = "goal.achieved"


@dataclass(frozen=True, slots=True)
class ScheduleReminder:
    """Ask the scheduler to fire a reminder at ``when``."""

    title: str
    when: datetime
    kind: str = SignalKinds.TASK_REMINDER


@dataclass(frozen=True, slots=True)
class ShowNotification:
    """Ask the scheduler to show a notification right away."""

    heading: str
    body: str
    kind: str
    metadata: dict[str, Any] = field(default_factory=dict)


Signal = ScheduleReminder | ShowNotification
