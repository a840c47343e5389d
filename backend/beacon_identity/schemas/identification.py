"""Identification Schemas — Pydantic models for beacon readings and resolved identities.

Invariants:
    - BeaconReadingIn: uuid exactly 36 chars, major/minor 0–65535, rssi -100..0
    - IdentityOut mirrors CustomerIdentity field-for-field
    - BeaconStatusUpdate.status restricted to BeaconStatus values
"""

from datetime import datetime

from pydantic import BaseModel, Field

from beacon_identity.core.customer_identity import CustomerIdentity
from beacon_identity.core.domain_types import BeaconStatus
from beacon_identity.core.entities import BeaconDevice, BeaconReading


class BeaconReadingIn(BaseModel):
    """Raw reading posted by a gateway."""
    uuid: str = Field(min_length=36, max_length=36)
    major: int = Field(ge=0, le=65535)
    minor: int = Field(ge=0, le=65535)
    rssi: int = Field(ge=-100, le=0)

    def to_reading(self) -> BeaconReading:
        return BeaconReading(
            uuid=self.uuid, major=self.major, minor=self.minor, rssi=self.rssi,
        )


class IdentityOut(BaseModel):
    customer_id: str
    beacon_id: str
    location: str
    confidence: float
    detected_at: datetime

    @classmethod
    def from_identity(cls, identity: CustomerIdentity) -> "IdentityOut":
        return cls(**identity.to_dict())


class BeaconStatusUpdate(BaseModel):
    status: BeaconStatus


class BeaconOut(BaseModel):
    beacon_id: str
    store_id: str
    major: int
    minor: int
    location: str
    status: BeaconStatus

    @classmethod
    def from_beacon(cls, beacon: BeaconDevice) -> "BeaconOut":
        return cls(
            beacon_id=beacon.beacon_id,
            store_id=beacon.store_id,
            major=beacon.major,
            minor=beacon.minor,
            location=beacon.location,
            status=beacon.status,
        )
