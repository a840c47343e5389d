"""SQL Beacon Repository — BeaconRepository over SQLAlchemy async sessions.

Invariants:
    - find_by_uuid returns None for an unknown UUID
    - A stored row that fails BeaconDevice validation is a RepositoryError
      ("decode_beacon"), never a client-facing ValidationError
    - update_status is the only in-scope mutation; it goes through
      BeaconDevice.set_status so invalid states never reach the table
    - save exists for seeding and tests; provisioning is handled elsewhere
"""

import logging

from sqlalchemy import select

from beacon_identity.core.domain_types import BeaconStatus
from beacon_identity.core.entities import BeaconDevice
from beacon_identity.core.errors import (
    BeaconNotFoundError,
    RepositoryError,
    ValidationError,
)
from beacon_identity.infrastructure.database import DatabaseSessionManager
from beacon_identity.models.beacon import BeaconRecord

logger = logging.getLogger(__name__)


def _to_entity(record: BeaconRecord) -> BeaconDevice:
    try:
        return BeaconDevice(
            beacon_id=record.beacon_id,
            store_id=record.store_id,
            major=record.major,
            minor=record.minor,
            location=record.location,
            status=record.status,
        )
    except ValidationError as e:
        raise RepositoryError(
            f"stored beacon {record.beacon_id} is invalid: {e.message}",
            "decode_beacon",
        ) from e


class SqlBeaconRepository:
    """Beacon lookup and status updates backed by the `beacons` table."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def find_by_uuid(self, uuid: str) -> BeaconDevice | None:
        async with self.db.session() as session:
            record = await session.get(BeaconRecord, uuid)
        if record is None:
            return None
        return _to_entity(record)

    async def save(self, beacon: BeaconDevice) -> None:
        beacon.validate()
        async with self.db.session() as session:
            await session.merge(BeaconRecord(
                beacon_id=beacon.beacon_id,
                store_id=beacon.store_id,
                major=beacon.major,
                minor=beacon.minor,
                location=beacon.location,
                status=beacon.status.value,
            ))
            await session.commit()

    async def update_status(
        self, beacon_id: str, status: BeaconStatus | str,
    ) -> BeaconDevice:
        """Set a beacon's status. Raises BeaconNotFoundError / ValidationError."""
        async with self.db.session() as session:
            result = await session.execute(
                select(BeaconRecord).where(BeaconRecord.beacon_id == beacon_id),
            )
            record = result.scalar_one_or_none()
            if record is None:
                raise BeaconNotFoundError(beacon_id)
            beacon = _to_entity(record)
            beacon.set_status(status)
            record.status = beacon.status.value
            await session.commit()
        logger.info(
            f"Beacon status set to {beacon.status.value}",
            extra={"beacon_id": beacon_id},
        )
        return beacon
