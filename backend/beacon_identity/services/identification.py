"""Identification Service — resolves a beacon reading into a customer identity.

Invariants:
    - Steps run in order, first failure wins: validate reading -> beacon lookup ->
      score -> customer lookup -> aggregate -> persist -> cache
    - Scorer output outside [0.0, 1.0] (NaN included) and low confidence both
      short-circuit before any customer lookup or write
    - A new customer is written once, after the aggregate is built; a failed
      identification leaves the customer store untouched
    - Repository failures propagate as RepositoryError; nothing is retried
    - Cache failures are logged and dropped — the cache is advisory

Design Decisions:
    - Repositories, cache, scorer, and clock are injected at construction
    - derive_customer_id is the single place the reading -> customer mapping lives
"""

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import TypeVar

from beacon_identity.core.confidence import ConfidenceScorer, LinearRssiScorer
from beacon_identity.core.customer_identity import (
    CustomerIdentity,
    check_confidence_floor,
)
from beacon_identity.core.domain_types import CustomerId, utc_now
from beacon_identity.core.entities import BeaconReading, Customer
from beacon_identity.core.errors import (
    BeaconIdentityError,
    BeaconNotActiveError,
    BeaconNotFoundError,
    CacheError,
    ErrorContext,
    RepositoryError,
)
from beacon_identity.core.repository_protocols import (
    BeaconRepository,
    CustomerRepository,
    IdentityCache,
)
from beacon_identity.core.validators import validate_confidence_range

logger = logging.getLogger(__name__)

T = TypeVar("T")


def derive_customer_id(reading: BeaconReading) -> CustomerId:
    """Deterministic customer id for a reading: same beacon vector, same id."""
    return CustomerId(f"cust-{reading.uuid}-{reading.major}-{reading.minor}")


async def _repository_call(operation: str, call: Awaitable[T]) -> T:
    try:
        return await call
    except BeaconIdentityError:
        raise
    except Exception as e:
        raise RepositoryError(str(e) or type(e).__name__, operation) from e


class IdentificationService:
    """Orchestrates beacon -> customer identification over injected stores."""

    def __init__(
        self,
        customer_repo: CustomerRepository,
        beacon_repo: BeaconRepository,
        cache: IdentityCache | None = None,
        scorer: ConfidenceScorer | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        if customer_repo is None:
            raise ValueError("customer repository is required")
        if beacon_repo is None:
            raise ValueError("beacon repository is required")
        self.customer_repo = customer_repo
        self.beacon_repo = beacon_repo
        self.cache = cache
        self.scorer = scorer or LinearRssiScorer()
        self.clock = clock or utc_now

    async def identify(self, reading: BeaconReading) -> CustomerIdentity:
        """Resolve a reading to a CustomerIdentity or raise a BeaconIdentityError."""
        reading.validate()

        beacon = await _repository_call(
            "find_beacon", self.beacon_repo.find_by_uuid(reading.uuid),
        )
        if beacon is None:
            raise BeaconNotFoundError(reading.uuid)
        if not beacon.is_active:
            raise BeaconNotActiveError(beacon.beacon_id, beacon.status.value)

        confidence = self.scorer.score(reading)
        validate_confidence_range(confidence)
        check_confidence_floor(confidence, ErrorContext(beacon_id=beacon.beacon_id))

        customer_id = derive_customer_id(reading)
        customer = await _repository_call(
            "find_customer", self.customer_repo.find_by_id(customer_id),
        )
        detected_at = self.clock()
        first_sighting = customer is None
        if first_sighting:
            customer = Customer(customer_id=customer_id, last_seen=detected_at)

        identity = CustomerIdentity.create(
            customer, beacon, confidence, detected_at,
            first_sighting=first_sighting,
        )

        customer.touch(identity.detected_at)
        await _repository_call("save_customer", self.customer_repo.save(customer))

        logger.info(
            "Customer identified",
            extra={
                "customer_id": identity.customer_id,
                "beacon_id": identity.beacon_id,
                "confidence": identity.confidence,
                "first_sighting": first_sighting,
            },
        )
        await self._cache_put(identity)
        return identity

    async def lookup(self, customer_id: str) -> CustomerIdentity | None:
        """Most recent cached identity for a customer, or None."""
        if self.cache is None:
            return None
        try:
            return await self.cache.get(customer_id)
        except CacheError as e:
            logger.warning(
                f"Identity cache read failed: {e.message}",
                extra={"customer_id": customer_id, "error_code": e.code},
            )
            return None

    async def _cache_put(self, identity: CustomerIdentity) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.put(identity)
        except CacheError as e:
            logger.warning(
                f"Identity cache write failed: {e.message}",
                extra={"customer_id": identity.customer_id, "error_code": e.code},
            )
