"""Database Metadata — SQLAlchemy declarative Base shared by models and migrations.

Invariants:
    - Engine and sessions live in infrastructure/database.py, not here
    - alembic/env.py and test fixtures build schema from Base.metadata

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
