"""Application entry point: wires settings, storage and the tracker."""

import structlog

from application.tracker import Tracker
from core.clock import SystemClock
from core.config import Settings, get_settings
from core.logging import setup_logging
from domain.services.goal_service import GoalService
from domain.services.habit_service import HabitService
from domain.services.task_service import TaskService
from infrastructure.database.repositories.sqlalchemy_snapshot_repo import (
    SQLAlchemySnapshotRepository,
)
from infrastructure.database.session import build_engine, build_session_factory, init_db
from infrastructure.notifications.logging_notifier import LoggingNotifier
from infrastructure.notifications.provider import INotifier

logger = structlog.get_logger()


def create_tracker(
    settings: Settings | None = None,
    notifier: INotifier | None = None,
) -> Tracker:
    """Create a Tracker backed by the configured store and load its snapshot."""
    settings = settings or get_settings()
    setup_logging(settings)

    engine = build_engine(settings)
    init_db(engine)
    repository = SQLAlchemySnapshotRepository(
        build_session_factory(engine),
        key=settings.snapshot_key,
    )

    clock = SystemClock.from_name(settings.timezone)
    tracker = Tracker(
        repository=repository,
        notifier=notifier or LoggingNotifier(),
        clock=clock,
        task_service=TaskService(clock),
        habit_service=HabitService(clock),
        goal_service=GoalService(clock),
    )
    tracker.load()

    logger.info(
        "tracker_ready",
        app=settings.app_name,
        environment=settings.app_env,
        database=engine.url.render_as_string(hide_password=True),
    )
    return tracker


if __name__ == "__main__":
    tracker = create_tracker()
    stats = tracker.stats()
    logger.info(
        "tracker_summary",
        tasks=stats.total_tasks,
        completion_rate=stats.completion_rate,
        total_streak=stats.total_streak,
        goals_achieved=stats.goals_achieved,
    )
