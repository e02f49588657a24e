# ruff: noqa: I001
"""Ledger core tables: categories and transactions.

Revision ID: 0001_ledger_core
Revises: None
Create Date: 2026-10-17
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0001_ledger_core"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "ledger_categories",
        sa.Column("id", sa.String(36), primary_key=True),
        # No unique constraint on title; lookups are by exact equality.
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_ledger_categories_title", "ledger_categories", ["title"])

    op.create_table(
        "ledger_transactions",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("value", sa.Numeric(18, 2), nullable=False),
        sa.Column(
            "category_id",
            sa.String(36),
            sa.ForeignKey("ledger_categories.id"),
            nullable=True,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("type in ('income','outcome')", name="ck_ledger_tx_type"),
    )


def downgrade() -> None:
    op.drop_table("ledger_transactions")
    op.drop_index("ix_ledger_categories_title", table_name="ledger_categories")
    op.drop_table("ledger_categories")
