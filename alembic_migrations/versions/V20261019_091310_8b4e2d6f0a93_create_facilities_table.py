"""create_facilities_table

Revision ID: 8b4e2d6f0a93
Revises: 3f1c8a2b7d10
Create Date: 2026-10-19 09:13:10.402917

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "8b4e2d6f0a93"
down_revision = "3f1c8a2b7d10"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "facilities",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("organization_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "facility_type",
            sa.String(length=50),
            nullable=True,
            comment="office, warehouse, factory, retail, data_center or other",
        ),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column("state", sa.String(length=100), nullable=True),
        sa.Column("country", sa.String(length=100), nullable=True),
        sa.Column("postal_code", sa.String(length=20), nullable=True),
        sa.Column("latitude", sa.Numeric(precision=9, scale=6), nullable=True),
        sa.Column("longitude", sa.Numeric(precision=9, scale=6), nullable=True),
        sa.Column(
            "grid_region",
            sa.String(length=100),
            nullable=True,
            comment="Electricity grid region, e.g. 'US-WECC (Seattle)'",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["organization_id"], ["organizations.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        comment="Organization facilities",
    )
    op.create_index(
        op.f("ix_facilities_organization_id"),
        "facilities",
        ["organization_id"],
        unique=False,
    )
    op.create_index(
        "ix_facilities_organization_active",
        "facilities",
        ["organization_id", "is_active"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_facilities_organization_active", table_name="facilities")
    op.drop_index(op.f("ix_facilities_organization_id"), table_name="facilities")
    op.drop_table("facilities")
