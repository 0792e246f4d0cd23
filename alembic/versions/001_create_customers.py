"""Create customers table

Revision ID: 001_create_customers
Revises:
Create Date: 2026-10-19

Creates the customers table backing the Customer aggregate:
- Money stored as unscaled NUMERIC amounts plus a shared currency column
- Address flattened into columns
- version column for optimistic concurrency
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_create_customers"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

customer_status = sa.Enum("ACTIVE", "INACTIVE", "SUSPENDED", name="customer_status")


def upgrade() -> None:
    """Create customers table and its indexes."""
    op.create_table(
        "customers",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "email",
            sa.String(320),
            nullable=False,
            comment="Normalized lower-case email",
        ),
        sa.Column("street", sa.String(255), nullable=True),
        sa.Column("city", sa.String(255), nullable=True),
        sa.Column("state", sa.String(100), nullable=True),
        sa.Column("postal_code", sa.String(20), nullable=True),
        sa.Column(
            "country",
            sa.String(100),
            nullable=False,
            server_default=sa.text("'United States'"),
        ),
        sa.Column(
            "credit_limit_amount",
            sa.Numeric(),
            nullable=False,
            server_default=sa.text("0"),
        ),
        sa.Column(
            "available_credit_amount",
            sa.Numeric(),
            nullable=False,
            server_default=sa.text("0"),
        ),
        sa.Column(
            "currency",
            sa.String(3),
            nullable=False,
            server_default=sa.text("'USD'"),
            comment="ISO currency shared by credit limit and available credit",
        ),
        sa.Column("status", customer_status, nullable=False, server_default=sa.text("'ACTIVE'")),
        sa.Column(
            "version",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("1"),
            comment="Optimistic concurrency version",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
    )

    op.create_index("uq_customers_email", "customers", ["email"], unique=True)
    op.create_index("idx_customers_status", "customers", ["status"])
    op.create_index("idx_customers_created_at", "customers", [sa.text("created_at DESC")])
    op.create_index("idx_customers_status_created_at", "customers", ["status", "created_at"])
    op.create_index("idx_customers_credit_limit", "customers", ["credit_limit_amount"])


def downgrade() -> None:
    """Drop customers table."""
    op.drop_index("idx_customers_credit_limit", table_name="customers")
    op.drop_index("idx_customers_status_created_at", table_name="customers")
    op.drop_index("idx_customers_created_at", table_name="customers")
    op.drop_index("idx_customers_status", table_name="customers")
    op.drop_index("uq_customers_email", table_name="customers")
    op.drop_table("customers")
    customer_status.drop(op.get_bind(), checkfirst=True)
