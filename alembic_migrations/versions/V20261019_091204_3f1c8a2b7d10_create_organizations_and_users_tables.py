"""create_organizations_and_users_tables

Revision ID: 3f1c8a2b7d10
Revises:
Create Date: 2026-10-19 09:12:04.118274

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f1c8a2b7d10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "organizations",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "legal_name",
            sa.String(length=255),
            nullable=False,
            comment="Registered legal name",
        ),
        sa.Column(
            "fiscal_id",
            sa.String(length=100),
            nullable=False,
            comment="Tax identifier (Tax ID / NIT / RFC)",
        ),
        sa.Column("industry_sector", sa.String(length=100), nullable=True),
        sa.Column("geographic_location", sa.String(length=200), nullable=True),
        sa.Column("logo_url", sa.String(length=500), nullable=True),
        sa.Column("default_currency", sa.String(length=3), nullable=False),
        sa.Column("distance_unit", sa.String(length=10), nullable=False),
        sa.Column("volume_unit", sa.String(length=10), nullable=False),
        sa.Column("language", sa.String(length=10), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("fiscal_id"),
        comment="Tenant organizations",
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column(
            "organization_id",
            sa.Uuid(),
            nullable=True,
            comment="Organization the user belongs to, NULL while unaffiliated",
        ),
        sa.Column(
            "role",
            sa.String(length=20),
            nullable=False,
            comment="admin, manager, user or viewer",
        ),
        sa.Column("job_title", sa.String(length=100), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["organization_id"], ["organizations.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        comment="Users and their organization membership",
    )
    op.create_index(
        op.f("ix_users_organization_id"), "users", ["organization_id"], unique=False
    )
    op.create_index(
        "ix_users_organization_role", "users", ["organization_id", "role"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_users_organization_role", table_name="users")
    op.drop_index(op.f("ix_users_organization_id"), table_name="users")
    op.drop_table("users")
    op.drop_table("organizations")
