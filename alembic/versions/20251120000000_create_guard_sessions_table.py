"""Create guard_sessions table for server-side guard slots.

Revision ID: 20251120000000
Revises: 20251108000000
Create Date: 2025-11-20

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "20251120000000"
down_revision: Union[str, None] = "20251108000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "guard_sessions",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("guards", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_guard_sessions_expires_at"), "guard_sessions", ["expires_at"])


def downgrade() -> None:
    op.drop_index(op.f("ix_guard_sessions_expires_at"), table_name="guard_sessions")
    op.drop_table("guard_sessions")
