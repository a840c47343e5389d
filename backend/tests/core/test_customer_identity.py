"""Customer Identity — aggregate construction rules and structural validation.

Tests cover:
    - Precondition order: customer, beacon, confidence range, floor, timestamp, window
    - Confidence floor boundary (0.79999 rejected, 0.8 accepted)
    - Duplicate window boundary (59s rejected, 60s accepted)
    - first_sighting skips the duplicate window only
    - Every constructed identity passes validate(); validate() skips the window
    - to_dict/from_dict document form
"""

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from beacon_identity.core.customer_identity import (
    CustomerIdentity,
    check_confidence_floor,
)
from beacon_identity.core.entities import BeaconDevice, Customer
from beacon_identity.core.errors import (
    DomainRuleViolation,
    DuplicateIdentificationError,
    LowConfidenceError,
    ValidationError,
)

VALID_UUID = "550e8400-e29b-41d4-a716-446655440000"
T0 = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def _customer(last_seen: datetime = T0) -> Customer:
    return Customer(customer_id="cust123", last_seen=last_seen)


def _beacon() -> BeaconDevice:
    return BeaconDevice(
        beacon_id=VALID_UUID, store_id="store100",
        major=100, minor=3, location="Table 3",
    )


def _create(confidence=0.9, detected_at=T0 + timedelta(minutes=2), **kwargs):
    return CustomerIdentity.create(
        _customer(), _beacon(), confidence, detected_at, **kwargs,
    )


# ─── Success ─────────────────────────────────────────────────────

def test_create_copies_identifying_fields():
    identity = _create()
    assert identity.customer_id == "cust123"
    assert identity.beacon_id == VALID_UUID
    assert identity.location == "Table 3"
    assert identity.confidence == 0.9
    assert identity.detected_at == T0 + timedelta(minutes=2)


def test_identity_is_immutable():
    identity = _create()
    with pytest.raises(dataclasses.FrozenInstanceError):
        identity.confidence = 1.0


def test_identity_holds_no_live_entity_reference():
    beacon = _beacon()
    identity = CustomerIdentity.create(
        _customer(), beacon, 0.9, T0 + timedelta(minutes=2),
    )
    beacon.location = "Counter"
    assert identity.location == "Table 3"


def test_created_identity_passes_validate():
    for confidence in (0.8, 0.85, 1.0):
        assert _create(confidence=confidence).validate() is None


def test_naive_detected_at_normalized_to_utc():
    identity = _create(detected_at=datetime(2026, 3, 1, 12, 5))
    assert identity.detected_at.tzinfo is not None


# ─── Required entities ───────────────────────────────────────────

def test_missing_customer_rejected():
    with pytest.raises(ValidationError) as exc:
        CustomerIdentity.create(None, _beacon(), 0.9, T0)
    assert exc.value.field == "customer"


def test_missing_beacon_rejected():
    with pytest.raises(ValidationError) as exc:
        CustomerIdentity.create(_customer(), None, 0.9, T0)
    assert exc.value.field == "beacon"


def test_invalid_customer_rejected_before_beacon():
    customer = _customer()
    customer.customer_id = "c" * 65
    with pytest.raises(ValidationError) as exc:
        CustomerIdentity.create(customer, None, 0.9, T0)
    assert exc.value.field == "customer_id"


def test_invalid_beacon_rejected():
    beacon = _beacon()
    beacon.minor = -5
    with pytest.raises(ValidationError) as exc:
        CustomerIdentity.create(_customer(), beacon, 0.9, T0 + timedelta(minutes=2))
    assert exc.value.field == "minor"


# ─── Confidence ──────────────────────────────────────────────────

@pytest.mark.parametrize("confidence", [-0.1, 1.5, float("nan"), float("inf")])
def test_confidence_outside_unit_interval_is_validation_error(confidence):
    with pytest.raises(ValidationError) as exc:
        _create(confidence=confidence)
    assert exc.value.field == "confidence"


def test_confidence_just_below_floor_rejected():
    with pytest.raises(LowConfidenceError) as exc:
        _create(confidence=0.79999)
    assert exc.value.threshold == 0.8
    assert exc.value.confidence == 0.79999
    assert isinstance(exc.value, DomainRuleViolation)


def test_confidence_at_floor_accepted():
    assert _create(confidence=0.8).confidence == 0.8


def test_confidence_checked_before_duplicate_window():
    with pytest.raises(LowConfidenceError):
        _create(confidence=0.5, detected_at=T0)


def test_nan_confidence_fails_floor_check():
    with pytest.raises(LowConfidenceError):
        check_confidence_floor(float("nan"))


# ─── detected_at ─────────────────────────────────────────────────

@pytest.mark.parametrize("detected_at", [None, datetime.min])
def test_unset_detected_at_rejected(detected_at):
    with pytest.raises(ValidationError) as exc:
        _create(detected_at=detected_at)
    assert exc.value.field == "detected_at"


# ─── Duplicate window ────────────────────────────────────────────

def test_sighting_59_seconds_after_last_seen_is_duplicate():
    detected_at = T0 + timedelta(seconds=59)
    with pytest.raises(DuplicateIdentificationError) as exc:
        _create(detected_at=detected_at)
    assert exc.value.last_seen == T0
    assert exc.value.detected_at == detected_at
    assert exc.value.context.debug_info["last_seen"] == T0.isoformat()


def test_sighting_60_seconds_after_last_seen_accepted():
    identity = _create(detected_at=T0 + timedelta(seconds=60))
    assert identity.detected_at == T0 + timedelta(seconds=60)


def test_sighting_before_last_seen_is_duplicate():
    with pytest.raises(DuplicateIdentificationError):
        _create(detected_at=T0 - timedelta(minutes=5))


def test_first_sighting_skips_duplicate_window():
    identity = _create(detected_at=T0, first_sighting=True)
    assert identity.detected_at == T0


def test_first_sighting_still_enforces_confidence_floor():
    with pytest.raises(LowConfidenceError):
        _create(confidence=0.5, detected_at=T0, first_sighting=True)


# ─── validate() ──────────────────────────────────────────────────

def test_validate_does_not_recheck_duplicate_window():
    identity = CustomerIdentity(
        customer_id="cust123", beacon_id=VALID_UUID, location="Table 3",
        confidence=0.9, detected_at=T0,
    )
    assert identity.validate() is None


def test_validate_rejects_low_confidence_instance():
    identity = CustomerIdentity(
        customer_id="cust123", beacon_id=VALID_UUID, location="Table 3",
        confidence=0.5, detected_at=T0,
    )
    with pytest.raises(LowConfidenceError):
        identity.validate()


def test_validate_rejects_nan_confidence_instance():
    identity = CustomerIdentity(
        customer_id="cust123", beacon_id=VALID_UUID, location="Table 3",
        confidence=float("nan"), detected_at=T0,
    )
    with pytest.raises(ValidationError) as exc:
        identity.validate()
    assert exc.value.field == "confidence"


def test_validate_rejects_short_beacon_id():
    identity = CustomerIdentity(
        customer_id="cust123", beacon_id="abc", location="Table 3",
        confidence=0.9, detected_at=T0,
    )
    with pytest.raises(ValidationError) as exc:
        identity.validate()
    assert exc.value.field == "beacon_id"


# ─── Document form ───────────────────────────────────────────────

def test_to_dict_uses_iso_timestamp():
    data = _create().to_dict()
    assert data["detected_at"] == (T0 + timedelta(minutes=2)).isoformat()
    assert data["customer_id"] == "cust123"


def test_from_dict_restores_identity():
    identity = _create()
    assert CustomerIdentity.from_dict(identity.to_dict()) == identity


def test_from_dict_rejects_missing_field():
    with pytest.raises(ValidationError):
        CustomerIdentity.from_dict({"customer_id": "cust123"})


def test_from_dict_rejects_structurally_invalid_document():
    data = _create().to_dict()
    data["confidence"] = 0.2
    with pytest.raises(LowConfidenceError):
        CustomerIdentity.from_dict(data)
