"""Customer ORM — persists identified customers.

Invariants:
    - customer_id is the primary key, at most 64 chars
    - last_seen is timezone-aware and non-nullable
    - preferences is a JSON object of string keys/values, never NULL (empty object)
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from beacon_identity.db.base import Base


class CustomerRecord(Base):
    """Row form of core.entities.Customer."""
    __tablename__ = "customers"

    customer_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    last_seen: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    preferences: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
