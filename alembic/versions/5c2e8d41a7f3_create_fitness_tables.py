"""Create users, activities, challenges, follows and login_attempts tables

Revision ID: 5c2e8d41a7f3
Revises:
Create Date: 2026-10-19 10:12:31.408115

"""
from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '5c2e8d41a7f3'
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Initial schema.  Reference columns carry no foreign keys: removing a
    user orphans its activities, challenges and follows."""

    # --- users ---
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("points", sa.Integer, nullable=False, server_default="0"),
        sa.Column("seq", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )
    op.create_index("ix_users_points_desc", "users", ["points"])

    # --- activities ---
    op.create_table(
        "activities",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("type", sa.String(100), nullable=False),
        sa.Column("duration", sa.Float, nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_activities_user_date", "activities", ["user_id", "date"])

    # --- challenges ---
    op.create_table(
        "challenges",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("creator_id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("participants", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_challenges_creator", "challenges", ["creator_id"])

    # --- follows ---
    op.create_table(
        "follows",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("follower_id", sa.String(36), nullable=False),
        sa.Column("following_id", sa.String(36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
    )
    op.create_index("ix_follows_following", "follows", ["following_id"])

    # --- login_attempts ---
    op.create_table(
        "login_attempts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(254), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_login_attempts_email_ts", "login_attempts", ["email", "timestamp"])


def downgrade() -> None:
    op.drop_index("ix_login_attempts_email_ts", table_name="login_attempts")
    op.drop_table("login_attempts")
    op.drop_index("ix_follows_following", table_name="follows")
    op.drop_table("follows")
    op.drop_index("ix_challenges_creator", table_name="challenges")
    op.drop_table("challenges")
    op.drop_index("ix_activities_user_date", table_name="activities")
    op.drop_table("activities")
    op.drop_index("ix_users_points_desc", table_name="users")
    op.drop_table("users")
