"""Notifier that writes signals to the log."""

import structlog

from domain.entities.signal import ScheduleReminder, Signal

logger = structlog.get_logger()


class LoggingNotifier:
    """INotifier implementation used when no real scheduler is attached."""

    def notify(self, signal: Signal) -> None:
        if isinstance(signal, ScheduleReminder):
            logger.info(
                "reminder_scheduled",
                kind=signal.kind,
                title=signal.title,
                when=signal.when.isoformat(),
            )
            return
        logger.info(
            "notification_shown",
            kind=signal.kind,
            heading=signal.heading,
            body=signal.body,
            **signal.metadata,
        )
