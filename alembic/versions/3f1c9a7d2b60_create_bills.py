"""create bills document table

Revision ID: 3f1c9a7d2b60
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "3f1c9a7d2b60"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "bills",
        sa.Column("bill_id", sa.String(32), primary_key=True),
        sa.Column("customer_name", sa.Text, nullable=False, server_default=""),
        sa.Column("status", sa.String(10), nullable=False),
        sa.Column("total_amount", sa.Integer, nullable=False, server_default="0"),
        sa.Column("document", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
    )
    op.create_index("ix_bills_created_at", "bills", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_bills_created_at", table_name="bills")
    op.drop_table("bills")
