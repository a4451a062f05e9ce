"""create user_profiles & onboarding_responses

Revision ID: 4b1e7c2a9f10
Revises:
Create Date: 2026-10-19 20:10:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "4b1e7c2a9f10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # ---- user_profiles ----
    op.create_table(
        "user_profiles",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("firebase_uid", sa.String(length=128), nullable=True),
        sa.Column("full_name", sa.String(length=255), nullable=True),
        sa.Column("gender", sa.String(length=50), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("onboarding_completed", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_user_profiles_email"), "user_profiles", ["email"], unique=True)
    op.create_index(op.f("ix_user_profiles_firebase_uid"), "user_profiles", ["firebase_uid"], unique=False)

    # ---- onboarding_responses ----
    op.create_table(
        "onboarding_responses",
        sa.Column("id", sa.String(length=36), nullable=False),
        # user_profiles.id is VARCHAR(36)
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("fitness_goal", sa.String(length=255), nullable=True),
        sa.Column("current_fitness_level", sa.String(length=255), nullable=True),
        sa.Column("workout_frequency", sa.String(length=255), nullable=True),
        sa.Column("diet_preference", sa.String(length=255), nullable=True),
        sa.Column("motivation", sa.Text(), nullable=True),
        sa.Column("biggest_challenge", sa.Text(), nullable=True),
        sa.Column("how_found_us", sa.String(length=255), nullable=True),
        # JSON-encoded list of strings
        sa.Column("feature_interest", sa.Text(), nullable=False),
        sa.Column("willing_to_pay", sa.String(length=255), nullable=True),
        sa.Column("price_range", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["user_profiles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_onboarding_responses_user_id", "onboarding_responses", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_onboarding_responses_user_id", table_name="onboarding_responses")
    op.drop_table("onboarding_responses")

    op.drop_index(op.f("ix_user_profiles_firebase_uid"), table_name="user_profiles")
    op.drop_index(op.f("ix_user_profiles_email"), table_name="user_profiles")
    op.drop_table("user_profiles")
