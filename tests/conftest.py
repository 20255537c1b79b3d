"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import Generator
from pathlib import Path

# Keep tests away from any developer .env database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import Settings
from infrastructure.database.session import build_engine, build_session_factory, init_db


@pytest.fixture
def db_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'questlog.db'}",
        snapshot_key="test-snapshot",
        log_level="WARNING",
    )


@pytest.fixture
def engine(db_settings: Settings) -> Generator[Engine, None, None]:
    """Create test database engine with tables."""
    engine = build_engine(db_settings)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create session factory."""
    return build_session_factory(engine)
