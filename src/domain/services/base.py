"""Shared plumbing for the domain engine services."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar
from uuid import UUID, uuid4

from core.clock import Clock, SystemClock
from core.exceptions import EmptyTitleError
from domain.entities.signal import Signal
from domain.entities.state import TrackerState

RecordT = TypeVar("RecordT")

IdFactory = Callable[[], UUID]


@dataclass(frozen=True)
class Outcome(Generic[RecordT]):
    """Result of a state transition.

    ``state`` is the new snapshot; the prior one is never modified.
    ``changed`` is False for accepted no-ops (repeat completions).
    """

    state: TrackerState
    record: RecordT
    signals: tuple[Signal, ...] = ()
    changed: bool = True


class EngineService:
    """Base for services that stamp records with time and ids."""

    def __init__(
        self,
        clock: Clock | None = None,
        id_factory: IdFactory = uuid4,
    ) -> None:
        self._clock = clock or SystemClock()
        self._id_factory = id_factory

    def _next_id(self, taken: set[UUID]) -> UUID:
        """Draw ids until one is not already in ``taken``; records it there."""
        new_id = self._id_factory()
        while new_id in taken:
            new_id = self._id_factory()
        taken.add(new_id)
        return new_id

    @staticmethod
    def _clean_title(title: str | None, record_type: str) -> str:
        cleaned = (title or "").strip()
        if not cleaned:
            raise EmptyTitleError(record_type)
        return cleaned
