"""Initial schema — customers, beacons.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("customer_id", sa.String(64), primary_key=True),
        sa.Column("last_seen", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("preferences", sa.JSON, nullable=False, server_default=sa.text("'{}'")),
    )

    op.create_table(
        "beacons",
        sa.Column("beacon_id", sa.String(36), primary_key=True),
        sa.Column("store_id", sa.String(64), nullable=False),
        sa.Column("major", sa.Integer, nullable=False),
        sa.Column("minor", sa.Integer, nullable=False),
        sa.Column("location", sa.String(32), nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("major BETWEEN 0 AND 65535", name="ck_beacons_major_range"),
        sa.CheckConstraint("minor BETWEEN 0 AND 65535", name="ck_beacons_minor_range"),
        sa.CheckConstraint(
            "status IN ('active', 'inactive', 'maintenance')", name="ck_beacons_status",
        ),
    )
    op.create_index("ix_beacons_store_id", "beacons", ["store_id"])


def downgrade() -> None:
    op.drop_index("ix_beacons_store_id", table_name="beacons")
    op.drop_table("beacons")
    op.drop_table("customers")
