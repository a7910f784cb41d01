"""Create events table

Revision ID: 0001_create_events
Revises:
Create Date: 2026-10-19 12:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_create_events"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("place", sa.String(255), nullable=False),
        sa.Column("gradient", sa.String(255), nullable=False),
        sa.Column("icon", sa.String(255), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.Time(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("qr_code_path", sa.String(512), nullable=True),
        sa.Column("photo_path", sa.String(512), nullable=True),
    )
    op.create_index("ix_events_id", "events", ["id"])
    op.create_index("ix_events_date", "events", ["date"])


def downgrade():
    op.drop_index("ix_events_date", table_name="events")
    op.drop_index("ix_events_id", table_name="events")
    op.drop_table("events")
