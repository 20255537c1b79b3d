"""In-memory implementation of the snapshot repository."""

from domain.entities.state import TrackerState
from infrastructure.database.schemas import decode_snapshot, encode_snapshot


class InMemorySnapshotRepository:
    """ISnapshotRepository keeping only the serialized payload in memory.

    Goes through the same encoding as the database store, so state loaded
    from here never shares objects with the state that was saved.
    """

    def __init__(self, payload: str | None = None) -> None:
        self.payload = payload
        self.save_count = 0

    def load(self) -> TrackerState:
        return decode_snapshot(self.payload)

    def save(self, state: TrackerState) -> None:
        self.payload = encode_snapshot(state)
        self.save_count += 1
