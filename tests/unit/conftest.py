"""Shared fixtures for unit tests."""

import time
from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from itertools import count
from uuid import UUID

import pytest

from application.tracker import Tracker
from domain.entities.signal import Signal
from domain.entities.state import TrackerState
from domain.services.goal_service import GoalService
from domain.services.habit_service import HabitService
from domain.services.task_service import TaskService
from infrastructure.database.repositories.memory_snapshot_repo import (
    InMemorySnapshotRepository,
)

# A Monday, mid-morning UTC
START = datetime(2026, 3, 2, 9, 30, tzinfo=timezone.utc)


class FakeClock:
    """Controllable clock for simulating day boundaries."""

    def __init__(self, start: datetime = START) -> None:
        self.current = start

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current

    def set(self, value: datetime) -> None:
        self.current = value


class RecordingNotifier:
    """Notifier that keeps every signal it receives."""

    def __init__(self) -> None:
        self.signals: list[Signal] = []

    def notify(self, signal: Signal) -> None:
        self.signals.append(signal)

    def kinds(self) -> list[str]:
        return [s.kind for s in self.signals]


class SequentialIds:
    """Deterministic id factory: UUID(int=1), UUID(int=2), ..."""

    def __init__(self, *values: int) -> None:
        self._values = iter(values) if values else count(1)

    def __call__(self) -> UUID:
        return UUID(int=next(self._values))


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def state() -> TrackerState:
    return TrackerState.empty()


@pytest.fixture
def task_service(clock: FakeClock) -> TaskService:
    return TaskService(clock)


@pytest.fixture
def habit_service(clock: FakeClock) -> HabitService:
    return HabitService(clock)


@pytest.fixture
def goal_service(clock: FakeClock) -> GoalService:
    return GoalService(clock)


@pytest.fixture
def repository() -> InMemorySnapshotRepository:
    return InMemorySnapshotRepository()


@pytest.fixture
def tracker(
    repository: InMemorySnapshotRepository,
    notifier: RecordingNotifier,
    clock: FakeClock,
) -> Tracker:
    return Tracker(repository=repository, notifier=notifier, clock=clock)


@pytest.fixture
def berlin_local_time(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Run with the process-local zone set to Europe/Berlin."""
    if not hasattr(time, "tzset"):
        pytest.skip("needs time.tzset")
    monkeypatch.setenv("TZ", "Europe/Berlin")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
