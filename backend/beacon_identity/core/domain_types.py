"""Domain Types — identifiers, bounded scores, and enums shared by the core.

Invariants:
    - CustomerId is at most 64 chars; BeaconId is exactly 36 chars (UUID-shaped)
    - ConfidenceScore is bounded 0.0–1.0
    - All valid states encoded as Enums — no raw string matching
    - Every timestamp leaving this module is timezone-aware UTC

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and to the DB status column without custom encoders
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CustomerId = NewType("CustomerId", str)
BeaconId = NewType("BeaconId", str)


# ─── Value Types ─────────────────────────────────────────────────

ConfidenceScore = NewType("ConfidenceScore", float)   # 0.0–1.0


# ─── Limits ──────────────────────────────────────────────────────

UUID_LENGTH = 36
MAX_CUSTOMER_ID_LENGTH = 64
MAX_LOCATION_LENGTH = 32
MIN_BEACON_NUMBER = 0
MAX_BEACON_NUMBER = 65535
MIN_RSSI = -100
MAX_RSSI = 0

MIN_CONFIDENCE = 0.8
DUPLICATE_WINDOW = timedelta(minutes=1)
IDENTITY_CACHE_TTL = timedelta(hours=1)


# ─── Enums ───────────────────────────────────────────────────────

class BeaconStatus(str, Enum):
    """Beacon operational states — maps to DB `status` column."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    MAINTENANCE = "maintenance"


class LocationType(str, Enum):
    """Kinds of physical placement inside a store."""
    ENTRANCE = "entrance"
    TABLE = "table"
    COUNTER = "counter"


# ─── Timestamps ──────────────────────────────────────────────────

def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_unset(value: datetime | None) -> bool:
    """True for None and for the zero datetime (datetime.min, naive or aware)."""
    if value is None:
        return True
    return value.replace(tzinfo=None) == datetime.min


def ensure_utc(value: datetime) -> datetime:
    """Naive datetimes are read as UTC; aware ones are converted to UTC."""
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
