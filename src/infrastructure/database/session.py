"""Database engine and session management."""

from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from core.config import Settings
from infrastructure.database.models import Base


def build_engine(settings: Settings) -> Engine:
    """Create the engine for the configured key-value store."""
    connect_args: dict[str, Any] = {}
    if settings.database_url.startswith("sqlite"):
        # Single user, but the presentation layer may live on another thread
        connect_args["check_same_thread"] = False
    return create_engine(
        settings.database_url,
        echo=settings.debug,
        connect_args=connect_args,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        class_=Session,
        expire_on_commit=False,
        autoflush=False,
    )


def init_db(engine: Engine) -> None:
    """Create missing tables."""
    Base.metadata.create_all(engine)
