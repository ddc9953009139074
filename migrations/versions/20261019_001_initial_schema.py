"""Initial schema: users, swipes and mirrored matches

Revision ID: 20261019_001
Revises:
Create Date: 2026-10-19 09:00:00

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from models.user import Geography

# revision identifiers, used by Alembic.
revision: str = "20261019_001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS postgis")

    # Create user table
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("gender", sa.String(length=16), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("location", Geography(), nullable=False),
        sa.CheckConstraint("age >= 18", name="minimum_age"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_user_email"), "user", ["email"], unique=True)
    op.create_index("idx_user_location", "user", ["location"], postgresql_using="gist")

    # Create swipe table
    op.create_table(
        "swipe",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("swiped_user_id", sa.Integer(), nullable=False),
        sa.Column("preference", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], name="swipe_user_id_fkey", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["swiped_user_id"], ["user.id"], name="swipe_swiped_user_id_fkey", ondelete="CASCADE"
        ),
        sa.UniqueConstraint("user_id", "swiped_user_id", name="unique_swiped_user_per_user"),
        sa.CheckConstraint("user_id <> swiped_user_id", name="no_matching_user_ids"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_swipe_swiped_user_id", "swipe", ["swiped_user_id", "preference"], unique=False)

    # Create match table, one row per direction of a mutual like
    op.create_table(
        "match",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("matched_user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["matched_user_id"], ["user.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "matched_user_id", name="unique_matched_user_per_user"),
        sa.CheckConstraint("user_id <> matched_user_id", name="no_matching_matched_user_ids"),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("match")
    op.drop_index("idx_swipe_swiped_user_id", table_name="swipe")
    op.drop_table("swipe")
    op.drop_index("idx_user_location", table_name="user")
    op.drop_index(op.f("ix_user_email"), table_name="user")
    op.drop_table("user")
