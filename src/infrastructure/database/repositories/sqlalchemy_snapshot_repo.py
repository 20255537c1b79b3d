"""SQLAlchemy implementation of the snapshot repository."""

from datetime import datetime, timezone

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from domain.entities.state import TrackerState
from infrastructure.database.models import KeyValueModel
from infrastructure.database.schemas import decode_snapshot, encode_snapshot

logger = structlog.get_logger()


class SQLAlchemySnapshotRepository:
    """SQLAlchemy implementation of ISnapshotRepository.

    The snapshot is one JSON document in the ``kv_store`` table under a
    fixed key; every save replaces it whole.
    """

    def __init__(self, session_factory: sessionmaker[Session], key: str) -> None:
        self._session_factory = session_factory
        self._key = key

    def load(self) -> TrackerState:
        """Get the stored snapshot, or an empty state."""
        try:
            with self._session_factory() as session:
                model = session.get(KeyValueModel, self._key)
                raw = model.value if model else None
        except SQLAlchemyError:
            logger.warning("snapshot_load_failed", key=self._key, exc_info=True)
            return TrackerState.empty()

        state = decode_snapshot(raw)
        logger.debug(
            "snapshot_loaded",
            key=self._key,
            tasks=len(state.tasks),
            habits=len(state.habits),
            goals=len(state.goals),
        )
        return state

    def save(self, state: TrackerState) -> None:
        """Replace the stored snapshot."""
        payload = encode_snapshot(state)
        with self._session_factory() as session, session.begin():
            session.merge(
                KeyValueModel(
                    key=self._key,
                    value=payload,
                    updated_at=datetime.now(timezone.utc),
                )
            )
        logger.debug("snapshot_saved", key=self._key, size=len(payload))
