"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)
    - An unreachable cache is reported but does not fail readiness (cache is advisory)
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import beacon_identity.infrastructure.cache_manager as cache_module
import beacon_identity.infrastructure.database as db_module

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "beacon-identity-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — includes database and cache connectivity."""
    db_manager = db_module.db_manager
    db_ok = await db_manager.health_check() if db_manager else False
    cache = cache_module.identity_cache
    if cache is None:
        cache_state = "disabled"
    else:
        cache_state = "healthy" if await cache.health_check() else "unavailable"
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
                "checks": {"database": "unavailable", "cache": cache_state},
            },
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy", "cache": cache_state},
    }
