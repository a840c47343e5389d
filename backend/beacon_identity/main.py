"""Beacon Identity API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BeaconIdentityError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and identity cache initialized on startup, released on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py and are registered here
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from beacon_identity.api.error_handlers import register_error_handlers
from beacon_identity.api.routes import beacons, health, identification
from beacon_identity.config import get_settings
from beacon_identity.infrastructure.cache_manager import close_cache, init_cache
from beacon_identity.infrastructure.database import init_db
from beacon_identity.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_cache(settings)
    logger.info("Beacon Identity API started")
    yield
    logger.info("Beacon Identity API shutting down")
    await close_cache()
    await db_manager.dispose()


app = FastAPI(
    title="Beacon Identity API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(identification.router)
app.include_router(beacons.router)

register_error_handlers(app)
