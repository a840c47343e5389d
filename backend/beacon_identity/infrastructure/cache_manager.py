"""Identity Cache Lifecycle — selects and holds the process-wide cache backend.

Invariants:
    - identity_cache is None when caching is disabled (cache_backend="none")
    - Initialized on startup, closed on shutdown (FastAPI lifespan)
"""

import logging

from beacon_identity.config import Settings
from beacon_identity.infrastructure.memory_cache import MemoryIdentityCache
from beacon_identity.infrastructure.redis_cache import (
    RedisIdentityCache,
    create_redis_client,
)

logger = logging.getLogger(__name__)

# Singleton (initialized on startup)
identity_cache: RedisIdentityCache | MemoryIdentityCache | None = None


def init_cache(settings: Settings) -> RedisIdentityCache | MemoryIdentityCache | None:
    global identity_cache
    if settings.cache_backend == "redis":
        identity_cache = RedisIdentityCache(
            create_redis_client(settings.redis_url, settings.redis_max_connections),
        )
    elif settings.cache_backend == "memory":
        identity_cache = MemoryIdentityCache(max_size=settings.cache_max_entries)
    else:
        identity_cache = None
    logger.info(f"Identity cache backend: {settings.cache_backend}")
    return identity_cache


async def close_cache() -> None:
    global identity_cache
    if identity_cache is not None:
        await identity_cache.close()
    identity_cache = None


def get_identity_cache() -> RedisIdentityCache | MemoryIdentityCache | None:
    """FastAPI dependency for the configured cache (None when disabled)."""
    return identity_cache
