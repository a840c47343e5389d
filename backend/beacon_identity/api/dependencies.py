"""API Dependencies — wires repositories and cache into request-scoped services.

Invariants:
    - Every request gets an IdentificationService built from the shared
      db_manager and identity cache (no per-request connections opened here)
"""

from fastapi import Depends

from beacon_identity.infrastructure.cache_manager import get_identity_cache
from beacon_identity.infrastructure.database import (
    DatabaseSessionManager,
    get_db_manager,
)
from beacon_identity.repositories.beacon_repository import SqlBeaconRepository
from beacon_identity.repositories.customer_repository import SqlCustomerRepository
from beacon_identity.services.identification import IdentificationService


def get_beacon_repository(
    db: DatabaseSessionManager = Depends(get_db_manager),
) -> SqlBeaconRepository:
    return SqlBeaconRepository(db)


def get_identification_service(
    db: DatabaseSessionManager = Depends(get_db_manager),
    cache=Depends(get_identity_cache),
) -> IdentificationService:
    return IdentificationService(
        customer_repo=SqlCustomerRepository(db),
        beacon_repo=SqlBeaconRepository(db),
        cache=cache,
    )
