"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach real infrastructure
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("CACHE_BACKEND", "memory")
os.environ.setdefault("LOG_FORMAT", "text")
