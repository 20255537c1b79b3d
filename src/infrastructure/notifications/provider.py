"""Notification consumer protocol."""

from typing import Protocol

from domain.entities.signal import Signal


class INotifier(Protocol):
    """Protocol for whatever delivers reminders and notifications."""

    def notify(self, signal: Signal) -> None:
        """
        Hand a signal over for delivery.

        Args:
            signal: A ScheduleReminder or ShowNotification

        Delivery timing, permissions and retries belong to the implementation.
        """
        ...
