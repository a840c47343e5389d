"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM records never cross into core/; repositories map them to core entities

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete before create_all/migrations
"""

from beacon_identity.models.customer import CustomerRecord  # noqa: F401
from beacon_identity.models.beacon import BeaconRecord  # noqa: F401
