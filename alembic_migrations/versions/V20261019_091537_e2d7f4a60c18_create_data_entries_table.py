"""create_data_entries_table

Revision ID: e2d7f4a60c18
Revises: c57a91e3b2f4
Create Date: 2026-10-19 09:15:37.285190

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "e2d7f4a60c18"
down_revision = "c57a91e3b2f4"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "data_entries",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("organization_id", sa.Uuid(), nullable=False),
        sa.Column("facility_id", sa.Uuid(), nullable=True),
        sa.Column("category_id", sa.Uuid(), nullable=False),
        sa.Column("created_by_user_id", sa.Uuid(), nullable=True),
        sa.Column(
            "entry_date",
            sa.Date(),
            nullable=False,
            comment="Date the consumption refers to",
        ),
        sa.Column("quantity", sa.Numeric(precision=14, scale=4), nullable=False),
        sa.Column("unit", sa.String(length=50), nullable=False),
        sa.Column(
            "emission_factor_id",
            sa.Uuid(),
            nullable=True,
            comment="Factor used for co2e_kg, NULL when none applied",
        ),
        sa.Column(
            "co2e_kg",
            sa.Numeric(precision=28, scale=10),
            nullable=True,
            comment="quantity x co2e_per_unit of emission_factor_id",
        ),
        sa.Column("document_filename", sa.String(length=500), nullable=True),
        sa.Column("document_url", sa.String(length=1000), nullable=True),
        sa.Column("vendor_name", sa.String(length=255), nullable=True),
        sa.Column("invoice_number", sa.String(length=100), nullable=True),
        sa.Column("total_cost", sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column(
            "confidence_level",
            sa.String(length=10),
            nullable=True,
            comment="OCR confidence (high, medium, low), NULL for manual entries",
        ),
        sa.Column("verification_status", sa.String(length=20), nullable=False),
        sa.Column("verified_by_user_id", sa.Uuid(), nullable=True),
        sa.Column("verified_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "(emission_factor_id IS NULL) = (co2e_kg IS NULL)",
            name="ck_data_entries_emission_pair",
        ),
        sa.CheckConstraint("quantity >= 0", name="ck_data_entries_quantity_non_negative"),
        sa.ForeignKeyConstraint(
            ["organization_id"], ["organizations.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["facility_id"], ["facilities.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(
            ["category_id"], ["emission_categories.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(
            ["created_by_user_id"], ["users.id"], ondelete="SET NULL"
        ),
        sa.ForeignKeyConstraint(
            ["emission_factor_id"], ["emission_factors.id"], ondelete="RESTRICT"
        ),
        sa.ForeignKeyConstraint(
            ["verified_by_user_id"], ["users.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        comment="Consumption data entries with derived CO2e",
    )
    op.create_index(
        op.f("ix_data_entries_facility_id"), "data_entries", ["facility_id"], unique=False
    )
    op.create_index(
        op.f("ix_data_entries_category_id"), "data_entries", ["category_id"], unique=False
    )
    op.create_index(
        "ix_data_entries_org_entry_date",
        "data_entries",
        ["organization_id", "entry_date"],
        unique=False,
    )
    op.create_index(
        "ix_data_entries_org_status",
        "data_entries",
        ["organization_id", "verification_status"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_data_entries_org_status", table_name="data_entries")
    op.drop_index("ix_data_entries_org_entry_date", table_name="data_entries")
    op.drop_index(op.f("ix_data_entries_category_id"), table_name="data_entries")
    op.drop_index(op.f("ix_data_entries_facility_id"), table_name="data_entries")
    op.drop_table("data_entries")
