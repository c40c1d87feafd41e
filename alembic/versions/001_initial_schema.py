"""Initial schema: users, bills, visits.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from __future__ import annotations

from typing import Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, tuple[str, ...], None] = None
depends_on: Union[str, tuple[str, ...], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), server_default=sa.text("gen_random_uuid()"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("jid", sa.String(100), nullable=False),
        sa.Column("account_officer", sa.String(100), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="member"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_jid", "users", ["jid"], unique=True)

    op.create_table(
        "bills",
        sa.Column("no_spk", sa.String(30), nullable=False),
        sa.Column("customer_id", sa.String(30)),
        sa.Column("name", sa.String(200)),
        sa.Column("address", sa.Text()),
        sa.Column("branch", sa.String(100)),
        sa.Column("account_officer", sa.String(100)),
        sa.Column("product", sa.String(100)),
        sa.Column("plafond", sa.BigInteger()),
        sa.Column("principal", sa.BigInteger()),
        sa.Column("debit_tray", sa.BigInteger()),
        sa.Column("last_interest", sa.BigInteger()),
        sa.Column("last_principal", sa.BigInteger()),
        sa.Column("last_installment", sa.BigInteger()),
        sa.Column("penalty_interest", sa.BigInteger()),
        sa.Column("penalty_principal", sa.BigInteger()),
        sa.Column("realization_date", sa.Date()),
        sa.Column("due_date", sa.Date()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_bills_no_spk", "bills", ["no_spk"], unique=True)
    op.create_index("ix_bills_account_officer", "bills", ["account_officer"])

    op.create_table(
        "visits",
        sa.Column("user_id", sa.String(100), nullable=False, comment="Officer WhatsApp JID"),
        sa.Column("visit_type", sa.String(20), nullable=False),
        sa.Column("visit_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("spk", sa.String(30)),
        sa.Column("name", sa.String(200)),
        sa.Column("address", sa.Text()),
        sa.Column("debit_tray", sa.BigInteger()),
        sa.Column("interest", sa.BigInteger()),
        sa.Column("principal", sa.BigInteger()),
        sa.Column("plafond", sa.BigInteger()),
        sa.Column("penalty", sa.BigInteger()),
        sa.Column("note", sa.Text()),
        sa.Column("image_url", sa.Text()),
        sa.Column("appointment", sa.BigInteger(), comment="Promised payment (Rp)"),
        sa.Column("reminder_date", sa.Date()),
        sa.Column("business_condition", sa.Text()),
        sa.Column("interest_level", sa.String(30)),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_visits_user_id", "visits", ["user_id"])
    op.create_index("ix_visits_visit_type", "visits", ["visit_type"])
    op.create_index("ix_visits_spk", "visits", ["spk"])
    op.create_index("ix_visits_reminder_date", "visits", ["reminder_date"])


def downgrade() -> None:
    op.drop_table("visits")
    op.drop_table("bills")
    op.drop_table("users")
