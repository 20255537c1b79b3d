"""Unit tests for Habit service layer."""

from datetime import datetime, timedelta, timezone, tzinfo
from uuid import uuid4

import pytest

from core.clock import SystemClock
from core.exceptions import ClockSkewError, EmptyTitleError, HabitNotFoundError
from domain.entities.habit import Habit
from domain.entities.signal import ShowNotification, SignalKinds
from domain.entities.state import TrackerState
from domain.services.habit_service import HabitService
from tests.unit.conftest import START, FakeClock


@pytest.fixture
def created(habit_service: HabitService, state: TrackerState) -> tuple[TrackerState, Habit]:
    outcome = habit_service.create(state, "Read")
    return outcome.state, outcome.record


class TestHabitServiceCreate:
    def test_starts_without_streak(self, habit_service: HabitService, state: TrackerState) -> None:
        outcome = habit_service.create(state, " Read ")

        habit = outcome.record
        assert habit.title == "Read"
        assert habit.streak == 0
        assert habit.last_completed is None
        assert habit.completed_dates == ()
        assert habit.created_at == START
        assert outcome.state.habits == (habit,)

    def test_empty_title_raises(self, habit_service: HabitService, state: TrackerState) -> None:
        with pytest.raises(EmptyTitleError):
            habit_service.create(state, "  ")


class TestHabitServiceComplete:
    def test_first_completion_starts_streak(
        self,
        habit_service: HabitService,
        created: tuple[TrackerState, Habit],
    ) -> None:
        state, habit = created

        outcome = habit_service.complete(state, habit.id)

        assert outcome.record.streak == 1
        assert outcome.record.last_completed == START
        assert outcome.record.completed_dates == (START,)

    def test_signal_carries_streak(
        self,
        habit_service: HabitService,
        created: tuple[TrackerState, Habit],
    ) -> None:
        state, habit = created

        outcome = habit_service.complete(state, habit.id)

        (signal,) = outcome.signals
        assert isinstance(signal, ShowNotification)
        assert signal.kind == SignalKinds.HABIT_COMPLETED
        assert signal.metadata["streak"] == 1
        assert signal.body.startswith("1 day streak")

    def test_consecutive_days_build_streak(
        self,
        habit_service: HabitService,
        clock: FakeClock,
        created: tuple[TrackerState, Habit],
    ) -> None:
        """Test completions on D, D+1, D+2 give a streak of 3."""
        state, habit = created

        for _ in range(3):
            state = habit_service.complete(state, habit.id).state
            clock.advance(days=1)

        assert state.habits[0].streak == 3
        assert len(state.habits[0].completed_dates) == 3

    def test_gap_of_two_days_resets_streak(
        self,
        habit_service: HabitService,
        clock: FakeClock,
        created: tuple[TrackerState, Habit],
    ) -> None:
        state, habit = created
        state = habit_service.complete(state, habit.id).state
        clock.advance(days=1)
        state = habit_service.complete(state, habit.id).state

        clock.advance(days=2)
        outcome = habit_service.complete(state, habit.id)

        assert outcome.record.streak == 1
        assert len(outcome.record.completed_dates) == 3

    def test_second_completion_same_day_is_noop(
        self,
        habit_service: HabitService,
        clock: FakeClock,
        created: tuple[TrackerState, Habit],
    ) -> None:
        state, habit = created
        first = habit_service.complete(state, habit.id)
        clock.advance(hours=10)

        second = habit_service.complete(first.state, habit.id)

        assert second.changed is False
        assert second.state is first.state
        assert second.signals == ()
        assert second.record.streak == 1
        assert second.record.completed_dates == (START,)

    def test_uses_calendar_days_not_elapsed_hours(
        self, habit_service: HabitService, clock: FakeClock, state: TrackerState
    ) -> None:
        """Test 23:50 then 00:10 next day counts as consecutive days."""
        clock.set(datetime(2026, 3, 2, 23, 50, tzinfo=timezone.utc))
        outcome = habit_service.create(state, "Stretch")
        state = habit_service.complete(outcome.state, outcome.record.id).state

        clock.advance(minutes=20)
        result = habit_service.complete(state, outcome.record.id)

        assert result.changed is True
        assert result.record.streak == 2

    def test_nearly_two_days_is_gap_of_two(
        self, habit_service: HabitService, clock: FakeClock, state: TrackerState
    ) -> None:
        """Test 00:10 then 23:50 the day after next resets despite < 48h."""
        clock.set(datetime(2026, 3, 2, 0, 10, tzinfo=timezone.utc))
        outcome = habit_service.create(state, "Stretch")
        state = habit_service.complete(outcome.state, outcome.record.id).state

        clock.set(datetime(2026, 3, 3, 23, 50, tzinfo=timezone.utc))
        state = habit_service.complete(state, outcome.record.id).state
        assert state.habits[0].streak == 2

        clock.set(datetime(2026, 3, 5, 0, 5, tzinfo=timezone.utc))
        assert habit_service.complete(state, outcome.record.id).record.streak == 1

    def test_day_boundaries_follow_clock_zone(self, state: TrackerState) -> None:
        """Test a completion stored in UTC is compared by the clock's local day."""
        tz = timezone(timedelta(hours=-5))
        clock = FakeClock(datetime(2026, 3, 2, 21, 0, tzinfo=tz))
        service = HabitService(clock)
        # 2026-03-03 01:00 UTC is still 2026-03-02 in UTC-5
        habit = Habit(
            title="Walk",
            created_at=START,
            streak=4,
            last_completed=datetime(2026, 3, 3, 1, 0, tzinfo=timezone.utc),
        )
        state = TrackerState(habits=(habit,))

        assert service.complete(state, habit.id).changed is False

        clock.advance(hours=4)
        assert service.complete(state, habit.id).record.streak == 5

    def test_future_last_completed_raises(
        self, habit_service: HabitService, state: TrackerState
    ) -> None:
        habit = Habit(
            title="Walk",
            created_at=START,
            streak=2,
            last_completed=START + timedelta(days=3),
        )
        state = TrackerState(habits=(habit,))

        with pytest.raises(ClockSkewError):
            habit_service.complete(state, habit.id)

    def test_unknown_id_raises(self, habit_service: HabitService, state: TrackerState) -> None:
        with pytest.raises(HabitNotFoundError):
            habit_service.complete(state, uuid4())


@pytest.fixture(params=["named", "local"])
def berlin_zone(request: pytest.FixtureRequest) -> tzinfo:
    """Europe/Berlin, either by name or as the machine's local zone."""
    if request.param == "local":
        request.getfixturevalue("berlin_local_time")
        return SystemClock().zone
    return SystemClock.from_name("Europe/Berlin").zone


class TestHabitStreakAcrossDaylightSaving:
    CET = timezone(timedelta(hours=1))
    CEST = timezone(timedelta(hours=2))

    def test_spring_forward_continues_streak(self, berlin_zone: tzinfo) -> None:
        """Test Sat 23:30 CET then Sun 10:00 CEST counts as consecutive days."""
        service = HabitService(FakeClock(datetime(2026, 3, 29, 10, 0, tzinfo=berlin_zone)))
        habit = Habit(
            title="Stretch",
            created_at=START,
            streak=1,
            last_completed=datetime(2026, 3, 28, 23, 30, tzinfo=self.CET),
        )

        outcome = service.complete(TrackerState(habits=(habit,)), habit.id)

        assert outcome.changed is True
        assert outcome.record.streak == 2

    def test_fall_back_continues_streak(self, berlin_zone: tzinfo) -> None:
        """Test Sat 00:30 CEST then Sun 10:00 CET counts as consecutive days."""
        service = HabitService(FakeClock(datetime(2026, 10, 25, 10, 0, tzinfo=berlin_zone)))
        habit = Habit(
            title="Stretch",
            created_at=START,
            streak=3,
            last_completed=datetime(2026, 10, 24, 0, 30, tzinfo=self.CEST),
        )

        outcome = service.complete(TrackerState(habits=(habit,)), habit.id)

        assert outcome.changed is True
        assert outcome.record.streak == 4

    def test_same_sunday_across_change_is_noop(self, berlin_zone: tzinfo) -> None:
        service = HabitService(FakeClock(datetime(2026, 3, 29, 10, 0, tzinfo=berlin_zone)))
        habit = Habit(
            title="Stretch",
            created_at=START,
            streak=5,
            last_completed=datetime(2026, 3, 29, 0, 30, tzinfo=self.CET),
        )

        outcome = service.complete(TrackerState(habits=(habit,)), habit.id)

        assert outcome.changed is False
        assert outcome.record.streak == 5


class TestHabitServiceDelete:
    def test_removes_habit(
        self, habit_service: HabitService, created: tuple[TrackerState, Habit]
    ) -> None:
        state, habit = created

        assert habit_service.delete(state, habit.id).state.habits == ()

    def test_unknown_id_raises(self, habit_service: HabitService, state: TrackerState) -> None:
        with pytest.raises(HabitNotFoundError):
            habit_service.delete(state, uuid4())
