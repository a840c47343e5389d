"""Repository test fixtures — file-backed SQLite schema per test."""

import pytest

from beacon_identity.db.base import Base
from beacon_identity.infrastructure.database import DatabaseSessionManager
import beacon_identity.models  # noqa: F401


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path}/identity.db")
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()
