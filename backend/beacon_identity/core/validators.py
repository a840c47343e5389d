"""Value Validators — field-level checks shared by every entity and value object.

Invariants:
    - All functions are PURE: no IO, no async, no state, safe to call repeatedly
    - Return None on success, raise ValidationError (with the offending field) on failure
    - UUID check is length-only: any 36-character string is accepted

Design Decisions:
    - One function per rule, composed by each type's validate() — first error wins
    - bool rejected where an int is required (bool is an int subclass)
"""

import math
from datetime import datetime

from beacon_identity.core.domain_types import (
    UUID_LENGTH,
    MAX_CUSTOMER_ID_LENGTH,
    MAX_LOCATION_LENGTH,
    MIN_BEACON_NUMBER,
    MAX_BEACON_NUMBER,
    MIN_RSSI,
    MAX_RSSI,
    BeaconStatus,
    LocationType,
    is_unset,
)
from beacon_identity.core.errors import ValidationError


def _require_int(value: object, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{field} must be an integer, got {type(value).__name__}", field,
        )
    return value


def validate_uuid(value: object, field: str = "uuid") -> None:
    """Rule: UUID-shaped strings are exactly 36 characters."""
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{field} is required", field)
    if len(value) != UUID_LENGTH:
        raise ValidationError(
            f"{field} must be a valid UUID ({UUID_LENGTH} characters), got {len(value)}",
            field,
        )


def validate_beacon_number(value: object, field: str) -> None:
    """Rule: major/minor are integers in [0, 65535]."""
    number = _require_int(value, field)
    if number < MIN_BEACON_NUMBER or number > MAX_BEACON_NUMBER:
        raise ValidationError(
            f"{field} must be between {MIN_BEACON_NUMBER} and {MAX_BEACON_NUMBER}, got {number}",
            field,
        )


def validate_rssi(value: object, field: str = "rssi") -> None:
    """Rule: RSSI is an integer in [-100, 0] dBm."""
    rssi = _require_int(value, field)
    if rssi < MIN_RSSI or rssi > MAX_RSSI:
        raise ValidationError(
            f"{field} must be between {MIN_RSSI} and {MAX_RSSI} dBm, got {rssi}", field,
        )


def validate_customer_id(value: object, field: str = "customer_id") -> None:
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{field} is required", field)
    if len(value) > MAX_CUSTOMER_ID_LENGTH:
        raise ValidationError(
            f"{field} exceeds maximum length of {MAX_CUSTOMER_ID_LENGTH} characters",
            field,
        )


def validate_location(value: object, field: str = "location") -> None:
    """Rule: a beacon's location description may be empty but never over 32 chars."""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", field)
    if len(value) > MAX_LOCATION_LENGTH:
        raise ValidationError(
            f"{field} exceeds maximum length of {MAX_LOCATION_LENGTH} characters, "
            f"got {len(value)}",
            field,
        )


def validate_location_name(value: object, field: str = "name") -> None:
    """Rule: a Location's name is required and at most 32 chars."""
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{field} is required", field)
    validate_location(value, field)


def validate_non_empty(value: object, field: str) -> None:
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{field} is required", field)


def validate_beacon_status(value: object, field: str = "status") -> None:
    """Rule: status is one of active, inactive, maintenance."""
    try:
        BeaconStatus(value)
    except ValueError:
        raise ValidationError(
            f"invalid status: {value}, must be one of "
            f"{', '.join(s.value for s in BeaconStatus)}",
            field,
        )


def validate_location_type(value: object, field: str = "type") -> None:
    """Rule: location type is one of entrance, table, counter."""
    try:
        LocationType(value)
    except ValueError:
        raise ValidationError(
            f"invalid location type: {value}, must be one of "
            f"{', '.join(t.value for t in LocationType)}",
            field,
        )


def validate_timestamp(value: object, field: str) -> None:
    """Rule: timestamps must be set (not None, not the zero datetime)."""
    if value is not None and not isinstance(value, datetime):
        raise ValidationError(f"{field} must be a datetime", field)
    if is_unset(value):
        raise ValidationError(f"{field} must be set", field)


def validate_confidence_range(value: object, field: str = "confidence") -> None:
    """Rule: confidence is a finite number in [0.0, 1.0]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field} must be a number", field)
    if not math.isfinite(value) or not 0.0 <= value <= 1.0:
        raise ValidationError(
            f"{field} must be between 0.0 and 1.0, got {value}", field,
        )
