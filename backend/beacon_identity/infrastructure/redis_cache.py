"""Redis Identity Cache — IdentityCache over redis.asyncio.

Invariants:
    - Key format: customer:{customer_id}
    - Every entry written with SETEX and a fixed 1-hour TTL
    - put() re-validates the identity before writing
    - get() returns None for a missing/expired key; transport and decode
      failures raise CacheError

Design Decisions:
    - JSON documents (CustomerIdentity.to_dict) rather than pickles: readable in redis-cli
    - Client built from a URL with a bounded pool; lifecycle owned by the app lifespan
"""

import json
import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from beacon_identity.core.customer_identity import CustomerIdentity
from beacon_identity.core.domain_types import IDENTITY_CACHE_TTL
from beacon_identity.core.errors import BeaconIdentityError, CacheError, ErrorContext

logger = logging.getLogger(__name__)

KEY_PREFIX = "customer:"


def cache_key(customer_id: str) -> str:
    return f"{KEY_PREFIX}{customer_id}"


def create_redis_client(redis_url: str, max_connections: int = 10) -> redis.Redis:
    """Build a pooled async client. No IO happens until first command."""
    return redis.Redis.from_url(
        redis_url,
        max_connections=max_connections,
        decode_responses=True,
    )


class RedisIdentityCache:
    """Resolved identities in Redis with a fixed TTL."""

    def __init__(self, client: redis.Redis):
        self.redis = client
        self.ttl_seconds = int(IDENTITY_CACHE_TTL.total_seconds())

    async def put(self, identity: CustomerIdentity) -> None:
        if identity is None:
            raise CacheError("identity is required", "put")
        identity.validate()
        key = cache_key(identity.customer_id)
        try:
            await self.redis.setex(key, self.ttl_seconds, json.dumps(identity.to_dict()))
        except RedisError as e:
            raise CacheError(
                f"failed to set identity for key {key}: {e}", "put",
                ErrorContext(customer_id=identity.customer_id),
            ) from e
        logger.debug(f"Cached identity: {key} (TTL: {self.ttl_seconds}s)")

    async def get(self, customer_id: str) -> CustomerIdentity | None:
        if not customer_id:
            raise CacheError("customer_id is required", "get")
        key = cache_key(customer_id)
        try:
            raw = await self.redis.get(key)
        except RedisError as e:
            raise CacheError(
                f"failed to get identity for key {key}: {e}", "get",
                ErrorContext(customer_id=customer_id),
            ) from e
        if raw is None:
            logger.debug(f"Redis cache MISS: {key}")
            return None
        try:
            return CustomerIdentity.from_dict(json.loads(raw))
        except (ValueError, BeaconIdentityError) as e:
            raise CacheError(
                f"failed to decode identity for key {key}: {e}", "decode",
                ErrorContext(customer_id=customer_id),
            ) from e

    async def health_check(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.redis.aclose()
