"""Alembic environment — async migrations for the customers and beacons tables.

Invariants:
    - Target metadata is Base.metadata with every record imported via beacon_identity.models
    - The database URL resolves the same way as the running service
      (Settings.database_url), unless overridden with `alembic -x url=...`
    - SQLite migrations run in batch mode (ALTER TABLE support is limited there)

Design Decisions:
    - compare_type=True so autogenerate notices String length changes
      (customer_id 64, location 32, status 20)
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

from beacon_identity.config import Settings
from beacon_identity.db.base import Base
import beacon_identity.models  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _database_url() -> str:
    override = context.get_x_argument(as_dictionary=True).get("url")
    if override:
        return Settings(database_url=override).database_url
    return Settings().database_url


def _configure(dialect_name: str, **kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=dialect_name == "sqlite",
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL for the migrations without a live connection."""
    url = make_url(_database_url())
    _configure(
        url.get_backend_name(), url=url,
        literal_binds=True, dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    _configure(connection.dialect.name, connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    engine = create_async_engine(_database_url(), poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
