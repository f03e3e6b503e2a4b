"""create_emission_reference_tables

Revision ID: c57a91e3b2f4
Revises: 8b4e2d6f0a93
Create Date: 2026-10-19 09:14:22.730561

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "c57a91e3b2f4"
down_revision = "8b4e2d6f0a93"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "emission_categories",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column(
            "scope",
            sa.Integer(),
            nullable=False,
            comment="GHG Protocol scope (1, 2, or 3), display only",
        ),
        sa.Column("icon", sa.String(length=50), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        comment="Emission categories (reference data)",
    )
    op.create_index(
        op.f("ix_emission_categories_name"),
        "emission_categories",
        ["name"],
        unique=False,
    )

    op.create_table(
        "emission_factors",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("category_id", sa.Uuid(), nullable=False),
        sa.Column(
            "unit",
            sa.String(length=50),
            nullable=False,
            comment="Unit of measurement (e.g., kWh, m³, liters)",
        ),
        sa.Column(
            "co2e_per_unit",
            sa.Numeric(precision=12, scale=6),
            nullable=False,
            comment="kg CO2e emitted per unit",
        ),
        sa.Column(
            "year", sa.Integer(), nullable=False, comment="Reference year of the factor"
        ),
        sa.Column(
            "valid_until",
            sa.Date(),
            nullable=True,
            comment="Last date the factor applies, NULL for open-ended",
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column(
            "source",
            sa.String(length=200),
            nullable=True,
            comment="Source of the emission factor (e.g., 'DEFRA 2024', 'EPA 2023')",
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["category_id"], ["emission_categories.id"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id"),
        comment="Emission factor lookup table for CO2e calculations",
    )
    op.create_index(
        op.f("ix_emission_factors_category_id"),
        "emission_factors",
        ["category_id"],
        unique=False,
    )
    op.create_index(
        "ix_emission_factors_category_unit",
        "emission_factors",
        ["category_id", "unit"],
        unique=False,
    )
    op.create_index(
        "ix_emission_factors_category_year",
        "emission_factors",
        ["category_id", "year"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_emission_factors_category_year", table_name="emission_factors")
    op.drop_index("ix_emission_factors_category_unit", table_name="emission_factors")
    op.drop_index(op.f("ix_emission_factors_category_id"), table_name="emission_factors")
    op.drop_table("emission_factors")
    op.drop_index(op.f("ix_emission_categories_name"), table_name="emission_categories")
    op.drop_table("emission_categories")
