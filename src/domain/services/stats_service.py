"""Derived statistics and achievement unlocks.

Everything here is read-only: functions take a snapshot and the current
instant and never touch the state.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from core.clock import calendar_day, ensure_aware, is_same_day, week_bounds
from domain.entities.habit import Habit
from domain.entities.state import TrackerState

WEEK_WARRIOR_TASKS = 10
HABIT_BUILDER_HABITS = 3
STREAK_MASTER_DAYS = 7
CONSISTENCY_KING_COMPLETIONS = 5


@dataclass(frozen=True, slots=True)
class TrackerStats:
    """Counters shown on the overview and profile screens."""

    total_tasks: int
    completed_tasks: int
    active_tasks: int
    completion_rate: int
    task_progress: float
    total_streak: int
    longest_streak: int
    goals_achieved: int
    active_goals: int
    habit_count: int
    tasks_this_week: int
    habit_completions_this_week: int


@dataclass(frozen=True, slots=True)
class Achievement:
    """A badge and whether the current stats unlock it."""

    key: str
    title: str
    description: str
    unlocked: bool


@dataclass(frozen=True, slots=True)
class HabitDay:
    day: date
    completed: bool
    is_today: bool


def summarize(state: TrackerState, now: datetime) -> TrackerStats:
    """Compute all counters for ``state`` as of ``now``."""
    total = len(state.tasks)
    completed = sum(1 for t in state.tasks if t.completed)
    streaks = [h.streak for h in state.habits]

    week_start, week_end = week_bounds(now)

    def in_week(value: datetime) -> bool:
        return week_start <= ensure_aware(value, now) <= week_end

    return TrackerStats(
        total_tasks=total,
        completed_tasks=completed,
        active_tasks=total - completed,
        completion_rate=round(completed / total * 100) if total else 0,
        task_progress=completed / total * 100 if total else 0.0,
        total_streak=sum(streaks),
        longest_streak=max(streaks, default=0),
        # A goal with no milestones never counts as achieved
        goals_achieved=sum(
            1 for g in state.goals if g.milestones and all(m.completed for m in g.milestones)
        ),
        active_goals=len(state.goals),
        habit_count=len(state.habits),
        tasks_this_week=sum(1 for t in state.tasks if in_week(t.created_at)),
        habit_completions_this_week=sum(
            1 for h in state.habits for d in h.completed_dates if in_week(d)
        ),
    )


def achievements(stats: TrackerStats) -> list[Achievement]:
    """Evaluate every achievement against ``stats``, in display order."""
    return [
        Achievement(
            key="first_steps",
            title="First Steps",
            description="Complete your first task",
            unlocked=stats.completed_tasks > 0,
        ),
        Achievement(
            key="habit_builder",
            title="Habit Builder",
            description=f"Create {HABIT_BUILDER_HABITS} habits",
            unlocked=stats.habit_count >= HABIT_BUILDER_HABITS,
        ),
        Achievement(
            key="week_warrior",
            title="Week Warrior",
            description=f"Complete {WEEK_WARRIOR_TASKS} tasks in a week",
            # Counts tasks created this week, matching the original badge
            unlocked=stats.tasks_this_week >= WEEK_WARRIOR_TASKS,
        ),
        Achievement(
            key="streak_master",
            title="Streak Master",
            description=f"Reach a {STREAK_MASTER_DAYS}-day streak",
            unlocked=stats.longest_streak >= STREAK_MASTER_DAYS,
        ),
        Achievement(
            key="goal_getter",
            title="Goal Getter",
            description="Complete your first goal",
            unlocked=stats.goals_achieved > 0,
        ),
        Achievement(
            key="consistency_king",
            title="Consistency King",
            description=f"Complete {CONSISTENCY_KING_COMPLETIONS} habits in a week",
            unlocked=stats.habit_completions_this_week >= CONSISTENCY_KING_COMPLETIONS,
        ),
    ]


def is_completed_today(habit: Habit, now: datetime) -> bool:
    return habit.last_completed is not None and is_same_day(habit.last_completed, now)


def habit_week(habit: Habit, now: datetime) -> list[HabitDay]:
    """The last seven calendar days, oldest first, with completion flags."""
    done = {calendar_day(d, now) for d in habit.completed_dates}
    today = now.date()
    return [
        HabitDay(day=day, completed=day in done, is_today=day == today)
        for day in (today - timedelta(days=offset) for offset in range(6, -1, -1))
    ]
