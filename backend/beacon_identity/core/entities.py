"""Entities & Value Objects — beacon readings, beacon devices, customers, locations.

Invariants:
    - Every type validates itself in __post_init__: construction is atomic,
      an invalid instance is never returned
    - BeaconReading and Location are frozen (immutable value objects)
    - BeaconDevice.status only changes through set_status(), gated to BeaconStatus
    - Customer.preferences is never None (empty dict by default)
    - Customer.last_seen is always timezone-aware UTC

Design Decisions:
    - Dataclasses over ORM models: the core never imports SQLAlchemy; repositories map
      records to these types at the boundary
    - validate() is public so an instance mutated after construction can be rechecked
"""

from dataclasses import dataclass, field
from datetime import datetime

from beacon_identity.core.domain_types import (
    BeaconStatus,
    LocationType,
    ensure_utc,
    is_unset,
    utc_now,
)
from beacon_identity.core.errors import ValidationError
from beacon_identity.core.validators import (
    validate_beacon_number,
    validate_beacon_status,
    validate_customer_id,
    validate_location,
    validate_location_name,
    validate_location_type,
    validate_non_empty,
    validate_rssi,
    validate_timestamp,
    validate_uuid,
)


@dataclass(frozen=True)
class BeaconReading:
    """Raw broadcast received from a beacon — immutable."""
    uuid: str
    major: int
    minor: int
    rssi: int

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        validate_uuid(self.uuid, "uuid")
        validate_beacon_number(self.major, "major")
        validate_beacon_number(self.minor, "minor")
        validate_rssi(self.rssi, "rssi")


@dataclass
class BeaconDevice:
    """Physical beacon registered to a store."""
    beacon_id: str
    store_id: str
    major: int
    minor: int
    location: str = ""
    status: BeaconStatus = BeaconStatus.ACTIVE

    def __post_init__(self):
        if not self.status:
            self.status = BeaconStatus.ACTIVE
        self.validate()
        self.status = BeaconStatus(self.status)

    @property
    def is_active(self) -> bool:
        return self.status == BeaconStatus.ACTIVE

    def set_status(self, status: BeaconStatus | str) -> None:
        """Change operational status. Unknown states are rejected, status unchanged."""
        validate_beacon_status(status)
        self.status = BeaconStatus(status)

    def validate(self) -> None:
        validate_uuid(self.beacon_id, "beacon_id")
        validate_non_empty(self.store_id, "store_id")
        validate_beacon_number(self.major, "major")
        validate_beacon_number(self.minor, "minor")
        validate_location(self.location, "location")
        validate_beacon_status(self.status)


@dataclass
class Customer:
    """Identified customer — created on first sighting, touched on every resolution."""
    customer_id: str
    last_seen: datetime = field(default_factory=utc_now)
    preferences: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.preferences is None:
            self.preferences = {}
        if isinstance(self.last_seen, datetime) and not is_unset(self.last_seen):
            self.last_seen = ensure_utc(self.last_seen)
        self.validate()

    def touch(self, at: datetime | None = None) -> None:
        """Record a sighting. Defaults to now (UTC)."""
        at = at or utc_now()
        validate_timestamp(at, "last_seen")
        self.last_seen = ensure_utc(at)

    def add_preference(self, key: str, value: str) -> None:
        if not key:
            raise ValidationError("preference key cannot be empty", "preferences")
        self.preferences[key] = value

    def validate(self) -> None:
        validate_customer_id(self.customer_id)
        validate_timestamp(self.last_seen, "last_seen")
        if not isinstance(self.preferences, dict):
            raise ValidationError("preferences must be a mapping", "preferences")


@dataclass(frozen=True)
class Location:
    """Named physical placement inside a store — immutable."""
    name: str
    type: LocationType

    def __post_init__(self):
        self.validate()
        object.__setattr__(self, "type", LocationType(self.type))

    def validate(self) -> None:
        validate_location_name(self.name, "name")
        validate_location_type(self.type)
