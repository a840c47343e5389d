"""
In-process identity cache.

IdentityCache backed by a cachetools TTLCache: same key scheme and fixed
1-hour lifetime as the Redis cache, for single-process deployments and tests.
"""

import logging
import time
from collections.abc import Callable

from cachetools import TTLCache

from beacon_identity.core.customer_identity import CustomerIdentity
from beacon_identity.core.domain_types import IDENTITY_CACHE_TTL
from beacon_identity.core.errors import CacheError
from beacon_identity.infrastructure.redis_cache import cache_key

logger = logging.getLogger(__name__)


class MemoryIdentityCache:
    """
    TTL-bounded in-memory identity cache.

    Attributes:
        cache: TTLCache keyed by customer:{customer_id}
        hits: Number of cache hits
        misses: Number of misses (absent or expired)
    """

    def __init__(
        self,
        max_size: int = 10_000,
        timer: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            max_size: Maximum number of identities held (least recently used evicted)
            timer: Clock in seconds; injectable so tests can advance time
        """
        self.cache: TTLCache = TTLCache(
            maxsize=max_size, ttl=IDENTITY_CACHE_TTL.total_seconds(), timer=timer,
        )
        self.hits = 0
        self.misses = 0

    async def put(self, identity: CustomerIdentity) -> None:
        if identity is None:
            raise CacheError("identity is required", "put")
        identity.validate()
        self.cache[cache_key(identity.customer_id)] = identity

    async def get(self, customer_id: str) -> CustomerIdentity | None:
        if not customer_id:
            raise CacheError("customer_id is required", "get")
        identity = self.cache.get(cache_key(customer_id))
        if identity is None:
            self.misses += 1
            logger.debug(f"Memory cache MISS: {customer_id}")
            return None
        self.hits += 1
        return identity

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.cache.clear()
