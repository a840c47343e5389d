"""SQL Customer Repository — CustomerRepository over SQLAlchemy async sessions.

Invariants:
    - find_by_id returns None for an unknown id (never raises for not-found)
    - save is an upsert keyed on customer_id: concurrent first sightings resolve
      last-write-wins instead of failing on the primary key
    - Preferences stored as a JSON object; non-string values and rows failing
      Customer validation surface as RepositoryError ("decode_customer")
    - SQLAlchemy failures surface as RepositoryError via DatabaseSessionManager
"""

import logging

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite

from beacon_identity.core.domain_types import ensure_utc
from beacon_identity.core.entities import Customer
from beacon_identity.core.errors import RepositoryError, ValidationError
from beacon_identity.infrastructure.database import DatabaseSessionManager
from beacon_identity.models.customer import CustomerRecord

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _to_entity(record: CustomerRecord) -> Customer:
    preferences = record.preferences or {}
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in preferences.items()):
        raise RepositoryError(
            f"preferences for customer {record.customer_id} are not a string mapping",
            "decode_customer",
        )
    try:
        return Customer(
            customer_id=record.customer_id,
            last_seen=ensure_utc(record.last_seen),
            preferences=dict(preferences),
        )
    except ValidationError as e:
        raise RepositoryError(
            f"stored customer {record.customer_id} is invalid: {e.message}",
            "decode_customer",
        ) from e


class SqlCustomerRepository:
    """Customer persistence backed by the `customers` table."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    async def find_by_id(self, customer_id: str) -> Customer | None:
        async with self.db.session() as session:
            result = await session.execute(
                select(CustomerRecord).where(
                    CustomerRecord.customer_id == customer_id,
                ),
            )
            record = result.scalar_one_or_none()
        if record is None:
            return None
        return _to_entity(record)

    async def save(self, customer: Customer) -> None:
        customer.validate()
        values = {
            "customer_id": customer.customer_id,
            "last_seen": customer.last_seen,
            "preferences": dict(customer.preferences),
        }
        insert = _UPSERT_DIALECTS.get(self.db.engine.dialect.name)
        async with self.db.session() as session:
            if insert is None:
                await session.merge(CustomerRecord(**values))
            else:
                stmt = insert(CustomerRecord).values(**values)
                stmt = stmt.on_conflict_do_update(
                    index_elements=[CustomerRecord.customer_id],
                    set_={
                        "last_seen": stmt.excluded.last_seen,
                        "preferences": stmt.excluded.preferences,
                    },
                )
                await session.execute(stmt)
            await session.commit()
        logger.debug(
            "Customer saved", extra={"customer_id": customer.customer_id},
        )
