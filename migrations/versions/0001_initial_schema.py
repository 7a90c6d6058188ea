"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 00:00:00.000000

One key-value table. The habit collection, wellness stats and profile name
each live in a single row, keyed by storage key.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "kv_entries",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("key", sa.String(128), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_kv_entries_id", "kv_entries", ["id"])
    op.create_index("ix_kv_entries_key", "kv_entries", ["key"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_kv_entries_key", table_name="kv_entries")
    op.drop_index("ix_kv_entries_id", table_name="kv_entries")
    op.drop_table("kv_entries")
