"""Initial schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates initial database tables:
- users: User accounts, unique email
- travel_stories: Travel journal entries owned by a user
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all initial tables."""
    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    # Create travel_stories table
    op.create_table(
        "travel_stories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("story", sa.Text(), nullable=False),
        sa.Column("visited_location", sa.JSON(), nullable=False),
        sa.Column("image_url", sa.String(length=1024), nullable=False),
        sa.Column("visited_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_favourite", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_travel_stories_user_id", "travel_stories", ["user_id"])
    op.create_index("ix_travel_stories_visited_date", "travel_stories", ["visited_date"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("ix_travel_stories_visited_date", table_name="travel_stories")
    op.drop_index("ix_travel_stories_user_id", table_name="travel_stories")
    op.drop_table("travel_stories")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
