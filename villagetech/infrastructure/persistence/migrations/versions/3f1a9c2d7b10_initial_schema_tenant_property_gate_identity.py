"""Initial schema: tenant, property, gate, identity_user, user_profile

Revision ID: 3f1a9c2d7b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1a9c2d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create initial schema."""
    # Create tenant table
    op.create_table(
        "tenant",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("legal_name", sa.String(), nullable=False),
        sa.Column("subdomain", sa.String(length=63), nullable=False),
        sa.Column("community_type", sa.String(), nullable=False),
        sa.Column("year_established", sa.Integer(), nullable=True),
        sa.Column("timezone", sa.String(), nullable=False),
        sa.Column("language", sa.String(), nullable=False),
        sa.Column("total_residences", sa.Integer(), nullable=False),
        sa.Column("max_residences", sa.Integer(), nullable=False),
        sa.Column("max_admin_users", sa.Integer(), nullable=False),
        sa.Column("max_security_users", sa.Integer(), nullable=False),
        sa.Column("storage_quota_gb", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("subdomain = lower(subdomain)", name="tenant_subdomain_lowercase"),
        sa.CheckConstraint(
            "community_type IN ('HOA', 'Condo', 'Gated Village', 'Subdivision')",
            name="tenant_community_type_check",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tenant_subdomain"), "tenant", ["subdomain"], unique=True)

    # Create property table
    op.create_table(
        "property",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("address", sa.String(), nullable=False),
        sa.Column("phase", sa.String(), nullable=True),
        sa.Column("block", sa.String(), nullable=True),
        sa.Column("lot", sa.String(), nullable=True),
        sa.Column("unit", sa.String(), nullable=True),
        sa.Column("property_type", sa.String(), nullable=False),
        sa.Column("property_size_sqm", sa.Float(), nullable=True),
        sa.Column("lot_size_sqm", sa.Float(), nullable=True),
        sa.Column("bedrooms", sa.Integer(), nullable=True),
        sa.Column("bathrooms", sa.Integer(), nullable=True),
        sa.Column("parking_slots", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "property_type IN ('single_family', 'townhouse', 'condo', 'lot_only')",
            name="property_type_check",
        ),
        sa.CheckConstraint(
            "status IN ('vacant', 'occupied', 'under_construction')",
            name="property_status_check",
        ),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenant.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_property_tenant_id"), "property", ["tenant_id"], unique=False)
    op.create_index(op.f("ix_property_status"), "property", ["status"], unique=False)

    # Create gate table
    op.create_table(
        "gate",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("gate_type", sa.String(), nullable=False),
        sa.Column("operating_hours_start", sa.String(length=5), nullable=True),
        sa.Column("operating_hours_end", sa.String(length=5), nullable=True),
        sa.Column("gps_lat", sa.Float(), nullable=True),
        sa.Column("gps_lng", sa.Float(), nullable=True),
        sa.Column("rfid_reader_serial", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "gate_type IN ('primary', 'secondary', 'service', 'emergency')",
            name="gate_type_check",
        ),
        sa.CheckConstraint(
            "status IN ('active', 'inactive', 'maintenance')", name="gate_status_check"
        ),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenant.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_gate_tenant_id"), "gate", ["tenant_id"], unique=False)

    # Create identity_user table (local identity backend)
    op.create_table(
        "identity_user",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("email_confirmed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("user_metadata", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_identity_user_email"), "identity_user", ["email"], unique=True)

    # Create user_profile table
    op.create_table(
        "user_profile",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("tenant_id", sa.String(), nullable=True),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("phone_number", sa.String(), nullable=True),
        sa.Column("position", sa.String(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "role IN ('superadmin', 'admin_head', 'admin_officer')",
            name="user_profile_role_check",
        ),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenant.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_user_profile_tenant_id"), "user_profile", ["tenant_id"], unique=False
    )
    op.create_index(op.f("ix_user_profile_role"), "user_profile", ["role"], unique=False)
    op.create_index(
        "uq_user_profile_tenant_admin_head",
        "user_profile",
        ["tenant_id"],
        unique=True,
        postgresql_where=sa.text("role = 'admin_head'"),
        sqlite_where=sa.text("role = 'admin_head'"),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("uq_user_profile_tenant_admin_head", table_name="user_profile")
    op.drop_index(op.f("ix_user_profile_role"), table_name="user_profile")
    op.drop_index(op.f("ix_user_profile_tenant_id"), table_name="user_profile")
    op.drop_table("user_profile")
    op.drop_index(op.f("ix_identity_user_email"), table_name="identity_user")
    op.drop_table("identity_user")
    op.drop_index(op.f("ix_gate_tenant_id"), table_name="gate")
    op.drop_table("gate")
    op.drop_index(op.f("ix_property_status"), table_name="property")
    op.drop_index(op.f("ix_property_tenant_id"), table_name="property")
    op.drop_table("property")
    op.drop_index(op.f("ix_tenant_subdomain"), table_name="tenant")
    op.drop_table("tenant")
