"""Entities — construction-time validation and permitted mutations.

Tests cover:
    - BeaconReading: immutable, atomic construction
    - BeaconDevice: default status, set_status gating, revalidation
    - Customer: default preferences, UTC normalization, touch/add_preference
    - Location: name/type rules, enum coercion
"""

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from beacon_identity.core.domain_types import BeaconStatus, LocationType
from beacon_identity.core.entities import (
    BeaconDevice,
    BeaconReading,
    Customer,
    Location,
)
from beacon_identity.core.errors import ValidationError

VALID_UUID = "550e8400-e29b-41d4-a716-446655440000"


# ─── BeaconReading ───────────────────────────────────────────────

def test_reading_holds_fields():
    reading = BeaconReading(uuid=VALID_UUID, major=100, minor=3, rssi=-20)
    assert (reading.uuid, reading.major, reading.minor, reading.rssi) == (
        VALID_UUID, 100, 3, -20,
    )


def test_reading_is_immutable():
    reading = BeaconReading(uuid=VALID_UUID, major=100, minor=3, rssi=-20)
    with pytest.raises(dataclasses.FrozenInstanceError):
        reading.rssi = -10


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"uuid": "short"}, "uuid"),
        ({"major": 65536}, "major"),
        ({"minor": -1}, "minor"),
        ({"rssi": -101}, "rssi"),
        ({"rssi": 5}, "rssi"),
    ],
)
def test_reading_rejects_invalid_field(kwargs, field):
    values = {"uuid": VALID_UUID, "major": 1, "minor": 1, "rssi": -30, **kwargs}
    with pytest.raises(ValidationError) as exc:
        BeaconReading(**values)
    assert exc.value.field == field


# ─── BeaconDevice ────────────────────────────────────────────────

def _beacon(**overrides) -> BeaconDevice:
    values = {
        "beacon_id": VALID_UUID, "store_id": "store100",
        "major": 100, "minor": 3, "location": "Table 3",
    }
    values.update(overrides)
    return BeaconDevice(**values)


def test_beacon_defaults_to_active():
    beacon = _beacon()
    assert beacon.status is BeaconStatus.ACTIVE
    assert beacon.is_active


def test_beacon_empty_status_defaults_to_active():
    assert _beacon(status="").status is BeaconStatus.ACTIVE


def test_beacon_coerces_status_string():
    assert _beacon(status="maintenance").status is BeaconStatus.MAINTENANCE


def test_beacon_requires_store_id():
    with pytest.raises(ValidationError) as exc:
        _beacon(store_id="")
    assert exc.value.field == "store_id"


def test_beacon_rejects_long_location():
    with pytest.raises(ValidationError) as exc:
        _beacon(location="x" * 33)
    assert exc.value.field == "location"


def test_beacon_rejects_unknown_status():
    with pytest.raises(ValidationError):
        _beacon(status="broken")


def test_set_status_accepts_valid_states():
    beacon = _beacon()
    beacon.set_status(BeaconStatus.INACTIVE)
    assert beacon.status is BeaconStatus.INACTIVE
    beacon.set_status("maintenance")
    assert beacon.status is BeaconStatus.MAINTENANCE
    assert not beacon.is_active


def test_set_status_rejects_invalid_and_keeps_previous():
    beacon = _beacon()
    with pytest.raises(ValidationError):
        beacon.set_status("decommissioned")
    assert beacon.status is BeaconStatus.ACTIVE


def test_beacon_validate_catches_later_mutation():
    beacon = _beacon()
    beacon.major = 70000
    with pytest.raises(ValidationError):
        beacon.validate()


# ─── Customer ────────────────────────────────────────────────────

def test_customer_defaults():
    customer = Customer(customer_id="cust123")
    assert customer.preferences == {}
    assert customer.last_seen.tzinfo is not None


def test_customer_none_preferences_become_empty():
    assert Customer(customer_id="cust123", preferences=None).preferences == {}


def test_customer_naive_last_seen_read_as_utc():
    customer = Customer(customer_id="cust123", last_seen=datetime(2026, 1, 1, 12, 0))
    assert customer.last_seen == datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_customer_rejects_long_id():
    with pytest.raises(ValidationError):
        Customer(customer_id="c" * 65)


def test_customer_rejects_zero_last_seen():
    with pytest.raises(ValidationError) as exc:
        Customer(customer_id="cust123", last_seen=datetime.min)
    assert exc.value.field == "last_seen"


def test_touch_sets_last_seen():
    customer = Customer(customer_id="cust123")
    later = customer.last_seen + timedelta(minutes=5)
    customer.touch(later)
    assert customer.last_seen == later


def test_add_preference():
    customer = Customer(customer_id="cust123")
    customer.add_preference("drink", "coffee")
    assert customer.preferences == {"drink": "coffee"}


def test_add_preference_rejects_empty_key():
    customer = Customer(customer_id="cust123")
    with pytest.raises(ValidationError):
        customer.add_preference("", "coffee")


# ─── Location ────────────────────────────────────────────────────

def test_location_coerces_type():
    location = Location(name="Table 3", type="table")
    assert location.type is LocationType.TABLE


def test_location_requires_name():
    with pytest.raises(ValidationError) as exc:
        Location(name="", type=LocationType.ENTRANCE)
    assert exc.value.field == "name"


def test_location_rejects_long_name():
    with pytest.raises(ValidationError):
        Location(name="n" * 33, type=LocationType.COUNTER)


def test_location_rejects_unknown_type():
    with pytest.raises(ValidationError) as exc:
        Location(name="Patio", type="patio")
    assert exc.value.field == "type"
