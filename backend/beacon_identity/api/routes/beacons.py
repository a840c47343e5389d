"""Beacon Routes — operational status changes for registered beacons."""

from fastapi import APIRouter, Depends

from beacon_identity.api.dependencies import get_beacon_repository
from beacon_identity.repositories.beacon_repository import SqlBeaconRepository
from beacon_identity.schemas.identification import BeaconOut, BeaconStatusUpdate

router = APIRouter(prefix="/api/v1/beacons", tags=["beacons"])


@router.patch("/{beacon_id}/status", response_model=BeaconOut)
async def update_beacon_status(
    beacon_id: str,
    body: BeaconStatusUpdate,
    repo: SqlBeaconRepository = Depends(get_beacon_repository),
):
    """Set a beacon to active, inactive, or maintenance."""
    beacon = await repo.update_status(beacon_id, body.status)
    return BeaconOut.from_beacon(beacon)
