"""Snapshot repository protocol."""

from typing import Protocol

from domain.entities.state import TrackerState


class ISnapshotRepository(Protocol):
    """Durable store for the whole tracker state as one unit."""

    def load(self) -> TrackerState:
        """Return the last saved state, or an empty state.

        Implementations never raise: missing or unreadable data yields
        ``TrackerState.empty()``.
        """
        ...

    def save(self, state: TrackerState) -> None:
        """Replace the stored snapshot with ``state``."""
        ...
