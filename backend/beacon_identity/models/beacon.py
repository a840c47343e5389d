"""Beacon ORM — persists registered beacon devices.

Invariants:
    - beacon_id is the UUID string primary key (36 chars)
    - status is one of active / inactive / maintenance (BeaconStatus values)
    - updated_at refreshed on every write

Design Decisions:
    - status stored as String(20), not a DB enum: adding a state needs no migration
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from beacon_identity.db.base import Base


class BeaconRecord(Base):
    """Row form of core.entities.BeaconDevice."""
    __tablename__ = "beacons"

    beacon_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    store_id: Mapped[str] = mapped_column(String(64), nullable=False)
    major: Mapped[int] = mapped_column(Integer, nullable=False)
    minor: Mapped[int] = mapped_column(Integer, nullable=False)
    location: Mapped[str] = mapped_column(
        String(32), nullable=False, default="",
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="active",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
