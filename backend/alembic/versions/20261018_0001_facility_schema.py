"""Create tenant and facility availability tables.

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 00:00:01
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261018_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("now()"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "tenants",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "timezone",
            sa.String(length=64),
            nullable=False,
            server_default=sa.text("'Asia/Tokyo'"),
        ),
        _created_at(),
    )

    op.create_table(
        "user_tenants",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("tenant_id", sa.String(length=36), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_user_tenants_user_id", "user_tenants", ["user_id"], unique=False)
    op.create_index("ix_user_tenants_tenant_id", "user_tenants", ["tenant_id"], unique=False)

    op.create_table(
        "facilities",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("tenant_id", sa.String(length=36), nullable=False),
        sa.Column("facility_name", sa.String(length=255), nullable=False),
        sa.Column("facility_type", sa.String(length=32), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_facilities_tenant_id", "facilities", ["tenant_id"], unique=False)

    op.create_table(
        "facility_settings",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("tenant_id", sa.String(length=36), nullable=False),
        sa.Column("facility_id", sa.String(length=36), nullable=False),
        sa.Column("slot_duration_minutes", sa.Integer(), nullable=True),
        sa.Column("available_from_time", sa.String(length=5), nullable=True),
        sa.Column("available_to_time", sa.String(length=5), nullable=True),
        sa.Column("min_reservation_minutes", sa.Integer(), nullable=True),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["facility_id"], ["facilities.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("facility_id", name="uq_facility_settings_facility_id"),
    )
    op.create_index(
        "ix_facility_settings_tenant_id", "facility_settings", ["tenant_id"], unique=False
    )

    op.create_table(
        "facility_slots",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("tenant_id", sa.String(length=36), nullable=False),
        sa.Column("facility_id", sa.String(length=36), nullable=False),
        sa.Column("slot_key", sa.String(length=64), nullable=False),
        sa.Column("slot_name", sa.String(length=255), nullable=False),
        sa.Column(
            "status",
            sa.String(length=32),
            nullable=False,
            server_default=sa.text("'active'"),
        ),
        _created_at(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["facility_id"], ["facilities.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_facility_slots_tenant_id", "facility_slots", ["tenant_id"], unique=False)
    op.create_index(
        "ix_facility_slots_facility_id", "facility_slots", ["facility_id"], unique=False
    )
    op.create_index("ix_facility_slots_status", "facility_slots", ["status"], unique=False)

    op.create_table(
        "facility_reservations",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("tenant_id", sa.String(length=36), nullable=False),
        sa.Column("facility_id", sa.String(length=36), nullable=False),
        sa.Column("slot_id", sa.String(length=36), nullable=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["facility_id"], ["facilities.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["slot_id"], ["facility_slots.id"], ondelete="SET NULL"),
        sa.CheckConstraint("start_at < end_at", name="ck_facility_reservations_range"),
    )
    for column in ("tenant_id", "facility_id", "slot_id", "user_id", "status"):
        op.create_index(
            f"ix_facility_reservations_{column}",
            "facility_reservations",
            [column],
            unique=False,
        )

    op.create_table(
        "facility_blocked_ranges",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("tenant_id", sa.String(length=36), nullable=False),
        sa.Column("facility_id", sa.String(length=36), nullable=False),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["facility_id"], ["facilities.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_facility_blocked_ranges_tenant_id",
        "facility_blocked_ranges",
        ["tenant_id"],
        unique=False,
    )
    op.create_index(
        "ix_facility_blocked_ranges_facility_id",
        "facility_blocked_ranges",
        ["facility_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_facility_blocked_ranges_facility_id", table_name="facility_blocked_ranges")
    op.drop_index("ix_facility_blocked_ranges_tenant_id", table_name="facility_blocked_ranges")
    op.drop_table("facility_blocked_ranges")

    for column in ("status", "user_id", "slot_id", "facility_id", "tenant_id"):
        op.drop_index(f"ix_facility_reservations_{column}", table_name="facility_reservations")
    op.drop_table("facility_reservations")

    op.drop_index("ix_facility_slots_status", table_name="facility_slots")
    op.drop_index("ix_facility_slots_facility_id", table_name="facility_slots")
    op.drop_index("ix_facility_slots_tenant_id", table_name="facility_slots")
    op.drop_table("facility_slots")

    op.drop_index("ix_facility_settings_tenant_id", table_name="facility_settings")
    op.drop_table("facility_settings")

    op.drop_index("ix_facilities_tenant_id", table_name="facilities")
    op.drop_table("facilities")

    op.drop_index("ix_user_tenants_tenant_id", table_name="user_tenants")
    op.drop_index("ix_user_tenants_user_id", table_name="user_tenants")
    op.drop_table("user_tenants")

    op.drop_table("tenants")
