"""Customer Identity — aggregate root for one resolved beacon sighting.

Invariants:
    - Immutable once constructed (frozen dataclass)
    - confidence in [0.0, 1.0] and >= MIN_CONFIDENCE (0.8)
    - detected_at is set and timezone-aware UTC
    - create() rejects a sighting less than DUPLICATE_WINDOW after customer.last_seen
    - validate() rechecks structure only — the duplicate window depends on mutable
      customer state and is a construction-time rule
    - Holds copies of customer_id / beacon_id / location, never live entity references

Design Decisions:
    - create() checks preconditions in a fixed order, first failure wins
    - first_sighting=True skips the duplicate window: a customer being created by
      this sighting has no previous sighting to duplicate
    - to_dict()/from_dict() define the cache document; from_dict() re-validates
"""

from dataclasses import dataclass
from datetime import datetime

from beacon_identity.core.domain_types import (
    DUPLICATE_WINDOW,
    MIN_CONFIDENCE,
    BeaconId,
    ConfidenceScore,
    CustomerId,
    ensure_utc,
    is_unset,
)
from beacon_identity.core.entities import BeaconDevice, Customer
from beacon_identity.core.errors import (
    DuplicateIdentificationError,
    ErrorContext,
    LowConfidenceError,
    ValidationError,
)
from beacon_identity.core.validators import (
    validate_confidence_range,
    validate_customer_id,
    validate_location,
    validate_timestamp,
    validate_uuid,
)


def check_confidence_floor(confidence: float, context: ErrorContext | None = None) -> None:
    """Rule: identification requires confidence >= MIN_CONFIDENCE (NaN never passes)."""
    if not confidence >= MIN_CONFIDENCE:
        raise LowConfidenceError(confidence, MIN_CONFIDENCE, context)


def check_duplicate_window(
    last_seen: datetime, detected_at: datetime, context: ErrorContext | None = None,
) -> None:
    """Rule: two identifications of one customer are at least a minute apart."""
    if ensure_utc(detected_at) - ensure_utc(last_seen) < DUPLICATE_WINDOW:
        raise DuplicateIdentificationError(last_seen, detected_at, context)


@dataclass(frozen=True)
class CustomerIdentity:
    customer_id: CustomerId
    beacon_id: BeaconId
    location: str
    confidence: ConfidenceScore
    detected_at: datetime

    @classmethod
    def create(
        cls,
        customer: Customer | None,
        beacon: BeaconDevice | None,
        confidence: float,
        detected_at: datetime | None,
        *,
        first_sighting: bool = False,
    ) -> "CustomerIdentity":
        """Build an identity from a customer and the beacon that saw them.

        Raises ValidationError for missing/invalid inputs, LowConfidenceError below
        the floor, DuplicateIdentificationError inside the duplicate window.
        """
        if customer is None:
            raise ValidationError("customer entity is required", "customer")
        customer.validate()
        if beacon is None:
            raise ValidationError("beacon entity is required", "beacon")
        beacon.validate()

        context = ErrorContext(
            customer_id=customer.customer_id, beacon_id=beacon.beacon_id,
        )
        validate_confidence_range(confidence)
        check_confidence_floor(confidence, context)

        validate_timestamp(detected_at, "detected_at")
        detected_at = ensure_utc(detected_at)
        if not first_sighting:
            check_duplicate_window(customer.last_seen, detected_at, context)

        return cls(
            customer_id=CustomerId(customer.customer_id),
            beacon_id=BeaconId(beacon.beacon_id),
            location=beacon.location,
            confidence=ConfidenceScore(float(confidence)),
            detected_at=detected_at,
        )

    def validate(self) -> None:
        """Recheck structural invariants on an existing instance."""
        validate_customer_id(self.customer_id)
        validate_uuid(self.beacon_id, "beacon_id")
        validate_location(self.location)
        validate_confidence_range(self.confidence)
        check_confidence_floor(
            self.confidence,
            ErrorContext(customer_id=self.customer_id, beacon_id=self.beacon_id),
        )
        validate_timestamp(self.detected_at, "detected_at")

    def to_dict(self) -> dict:
        return {
            "customer_id": self.customer_id,
            "beacon_id": self.beacon_id,
            "location": self.location,
            "confidence": self.confidence,
            "detected_at": self.detected_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CustomerIdentity":
        """Restore a cached identity. Raises ValidationError on a malformed document."""
        try:
            detected_at = datetime.fromisoformat(
                str(data["detected_at"]).replace("Z", "+00:00"),
            )
            identity = cls(
                customer_id=CustomerId(data["customer_id"]),
                beacon_id=BeaconId(data["beacon_id"]),
                location=data.get("location", ""),
                confidence=ConfidenceScore(data["confidence"]),
                detected_at=detected_at if is_unset(detected_at) else ensure_utc(detected_at),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"malformed identity document: {e}", "identity")
        identity.validate()
        return identity
