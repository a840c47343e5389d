"""API test fixtures — SQLite-backed app + httpx client.

Invariants:
    - Every test gets a fresh file-backed SQLite database with one active beacon
    - get_db_manager / get_identity_cache overridden; module singletons patched
      so health probes see the same stores as the routes
    - Lifespan is not run: ASGITransport skips it, fixtures own setup/teardown
"""

import pytest
from httpx import ASGITransport, AsyncClient

from beacon_identity.core.entities import BeaconDevice
from beacon_identity.db.base import Base
from beacon_identity.infrastructure.database import (
    DatabaseSessionManager,
    get_db_manager,
)
from beacon_identity.infrastructure.cache_manager import get_identity_cache
from beacon_identity.infrastructure.memory_cache import MemoryIdentityCache
from beacon_identity.repositories.beacon_repository import SqlBeaconRepository
import beacon_identity.infrastructure.cache_manager as cache_module
import beacon_identity.infrastructure.database as db_module
import beacon_identity.models  # noqa: F401
from beacon_identity.main import app

BEACON_UUID = "550e8400-e29b-41d4-a716-446655440000"


@pytest.fixture
async def test_db_manager(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path}/api.db")
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
def test_cache():
    return MemoryIdentityCache()


@pytest.fixture
async def seed_beacon(test_db_manager):
    beacon = BeaconDevice(
        beacon_id=BEACON_UUID, store_id="store100",
        major=100, minor=3, location="Table 3",
    )
    await SqlBeaconRepository(test_db_manager).save(beacon)
    return beacon


@pytest.fixture
async def client(test_db_manager, test_cache, seed_beacon, monkeypatch):
    """FastAPI test client wired to the test database and memory cache."""
    app.dependency_overrides[get_db_manager] = lambda: test_db_manager
    app.dependency_overrides[get_identity_cache] = lambda: test_cache
    monkeypatch.setattr(db_module, "db_manager", test_db_manager)
    monkeypatch.setattr(cache_module, "identity_cache", test_cache)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
