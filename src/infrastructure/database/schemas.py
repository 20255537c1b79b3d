"""Pydantic schemas for the persisted snapshot."""

from datetime import datetime
from uuid import UUID

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaValidationError

from domain.entities.goal import Goal, Milestone
from domain.entities.habit import Habit
from domain.entities.state import TrackerState
from domain.entities.task import Task, TaskCategory

logger = structlog.get_logger()

SNAPSHOT_VERSION = 1


class TaskSchema(BaseModel):
    """Stored form of a Task."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str = Field(..., min_length=1)
    category: TaskCategory
    completed: bool = False
    reminder: datetime | None = None
    created_at: datetime

    def to_entity(self) -> Task:
        return Task(
            id=self.id,
            title=self.title,
            category=self.category,
            completed=self.completed,
            reminder=self.reminder,
            created_at=self.created_at,
        )


class HabitSchema(BaseModel):
    """Stored form of a Habit."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str = Field(..., min_length=1)
    streak: int = Field(0, ge=0)
    last_completed: datetime | None = None
    completed_dates: list[datetime] = Field(default_factory=list)
    created_at: datetime

    def to_entity(self) -> Habit:
        return Habit(
            id=self.id,
            title=self.title,
            streak=self.streak,
            last_completed=self.last_completed,
            completed_dates=tuple(self.completed_dates),
            created_at=self.created_at,
        )


class MilestoneSchema(BaseModel):
    """Stored form of a Milestone."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    completed: bool = False


class GoalSchema(BaseModel):
    """Stored form of a Goal. ``progress`` is kept for readers of the raw data."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str = Field(..., min_length=1)
    description: str | None = None
    milestones: list[MilestoneSchema] = Field(default_factory=list)
    progress: float = Field(0.0, ge=0, le=100)
    created_at: datetime

    def to_entity(self) -> Goal:
        goal = Goal(
            id=self.id,
            title=self.title,
            description=self.description,
            created_at=self.created_at,
        )
        # Progress is derived; recompute instead of trusting the stored number
        return goal.with_milestones(
            tuple(Milestone(id=m.id, title=m.title, completed=m.completed) for m in self.milestones)
        )


class SnapshotSchema(BaseModel):
    """The whole tracker state as stored under the snapshot key."""

    model_config = ConfigDict(from_attributes=True)

    version: int = SNAPSHOT_VERSION
    tasks: list[TaskSchema] = Field(default_factory=list)
    habits: list[HabitSchema] = Field(default_factory=list)
    goals: list[GoalSchema] = Field(default_factory=list)

    @classmethod
    def from_state(cls, state: TrackerState) -> "SnapshotSchema":
        return cls(
            tasks=[TaskSchema.model_validate(t) for t in state.tasks],
            habits=[HabitSchema.model_validate(h) for h in state.habits],
            goals=[GoalSchema.model_validate(g) for g in state.goals],
        )

    def to_state(self) -> TrackerState:
        return TrackerState(
            tasks=tuple(t.to_entity() for t in self.tasks),
            habits=tuple(h.to_entity() for h in self.habits),
            goals=tuple(g.to_entity() for g in self.goals),
        )


def encode_snapshot(state: TrackerState) -> str:
    """Serialize ``state`` to JSON. Datetimes keep microseconds and offsets."""
    return SnapshotSchema.from_state(state).model_dump_json()


def decode_snapshot(raw: str | bytes | None) -> TrackerState:
    """Parse a stored snapshot; anything unreadable becomes the empty state."""
    if not raw:
        return TrackerState.empty()
    try:
        snapshot = SnapshotSchema.model_validate_json(raw)
    except SchemaValidationError as exc:
        logger.warning("snapshot_corrupt", errors=exc.error_count())
        return TrackerState.empty()
    if snapshot.version > SNAPSHOT_VERSION:
        logger.warning("snapshot_version_unknown", version=snapshot.version)
    return snapshot.to_state()
