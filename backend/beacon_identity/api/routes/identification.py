"""Identification Routes — resolve readings and read back cached identities.

Invariants:
    - POST returns 201 with the identity; every rejection is a BeaconIdentityError
      rendered by the global handler (4xx for input/domain, 5xx for stores)
    - GET reads the cache only; a miss is 404, never a store lookup
"""

import logging

from fastapi import APIRouter, Depends, status

from beacon_identity.api.dependencies import get_identification_service
from beacon_identity.core.errors import ResourceNotFoundError
from beacon_identity.schemas.identification import BeaconReadingIn, IdentityOut
from beacon_identity.services.identification import IdentificationService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/identifications", tags=["identifications"])


@router.post(
    "", response_model=IdentityOut,
    status_code=status.HTTP_201_CREATED,
)
async def identify_customer(
    body: BeaconReadingIn,
    service: IdentificationService = Depends(get_identification_service),
):
    """Resolve a beacon reading into a customer identity."""
    identity = await service.identify(body.to_reading())
    return IdentityOut.from_identity(identity)


@router.get("/{customer_id}", response_model=IdentityOut)
async def get_cached_identity(
    customer_id: str,
    service: IdentificationService = Depends(get_identification_service),
):
    """Most recent identity for a customer, if still cached."""
    identity = await service.lookup(customer_id)
    if identity is None:
        raise ResourceNotFoundError("Identity", customer_id)
    return IdentityOut.from_identity(identity)
