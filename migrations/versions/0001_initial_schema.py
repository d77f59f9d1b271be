"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2025-10-01 12:00:00
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("event_id", sa.Integer(), primary_key=True),
        sa.Column("event_title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("interested_count", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_events_event_id", "events", ["event_id"])
    op.create_index("ix_events_start_time", "events", ["start_time"])

    op.create_table(
        "categories",
        sa.Column("category_id", sa.Integer(), primary_key=True),
        sa.Column("category_name", sa.String(length=100), nullable=False),
    )

    op.create_table(
        "event_photos",
        sa.Column("photo_id", sa.Integer(), primary_key=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.event_id", ondelete="CASCADE"), nullable=False),
        sa.Column("photo_url", sa.Text(), nullable=False),
    )
    op.create_index("ix_event_photos_event_id", "event_photos", ["event_id"])

    op.create_table(
        "event_categories",
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.event_id", ondelete="CASCADE"), primary_key=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.category_id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "interested_events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.event_id", ondelete="CASCADE"), nullable=False),
        sa.UniqueConstraint("user_id", "event_id", name="uq_interested_events_user_event"),
    )
    op.create_index("ix_interested_events_user_id", "interested_events", ["user_id"])
    op.create_index("ix_interested_events_event_id", "interested_events", ["event_id"])

    op.create_table(
        "interested_category",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.category_id", ondelete="CASCADE"), nullable=False),
        sa.UniqueConstraint("user_id", "category_id", name="uq_interested_category_user_category"),
    )
    op.create_index("ix_interested_category_user_id", "interested_category", ["user_id"])

    op.create_table(
        "feedback",
        sa.Column("feedback_id", sa.String(length=36), primary_key=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.event_id", ondelete="CASCADE"), nullable=False),
        sa.Column("text_content", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_feedback_event_id", "feedback", ["event_id"])


def downgrade() -> None:
    op.drop_table("feedback")
    op.drop_table("interested_category")
    op.drop_table("interested_events")
    op.drop_table("event_categories")
    op.drop_table("event_photos")
    op.drop_table("categories")
    op.drop_table("events")
