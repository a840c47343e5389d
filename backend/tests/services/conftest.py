"""Service test fixtures — IdentificationService over in-memory stores.

Invariants:
    - Every test gets fresh fake repositories and cache
    - The clock is fixed (NOW) so duplicate-window tests are deterministic
"""

import pytest

from beacon_identity.core.entities import BeaconDevice, BeaconReading
from beacon_identity.services.identification import IdentificationService
from tests.services.fake_stores import (
    BEACON_UUID,
    NOW,
    FakeBeaconRepository,
    FakeCustomerRepository,
    FakeIdentityCache,
)


@pytest.fixture
def active_beacon():
    return BeaconDevice(
        beacon_id=BEACON_UUID, store_id="store100",
        major=100, minor=3, location="Table 3", status="active",
    )


@pytest.fixture
def reading():
    return BeaconReading(uuid=BEACON_UUID, major=100, minor=3, rssi=-20)


@pytest.fixture
def customer_repo():
    return FakeCustomerRepository()


@pytest.fixture
def beacon_repo(active_beacon):
    return FakeBeaconRepository([active_beacon])


@pytest.fixture
def cache():
    return FakeIdentityCache()


@pytest.fixture
def service(customer_repo, beacon_repo, cache):
    return IdentificationService(
        customer_repo=customer_repo,
        beacon_repo=beacon_repo,
        cache=cache,
        clock=lambda: NOW,
    )
