"""Initial schema — users, user_blocks, user_interactions, user_preferences_learned.

Creates:
- users: discovery profiles read by the ranker
- user_blocks: per-user block lists
- user_interactions: append-only interaction events
- user_preferences_learned: one learned preference model per user (JSONB weight maps)

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID, JSONB

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1. users
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("full_name", sa.String(255)),
        sa.Column("avatar_url", sa.Text),
        sa.Column("photos", JSONB),
        sa.Column("bio", sa.Text),
        sa.Column("city", sa.String(100)),
        sa.Column("profile_type", sa.String(50)),
        sa.Column("age", sa.Integer),
        sa.Column("tags", JSONB),
        sa.Column("interests", JSONB),
        sa.Column("looking_for", JSONB),
        sa.Column("archetypes", JSONB),
        sa.Column("essentials", JSONB),
        sa.Column("dealbreakers", JSONB),
        sa.Column("last_lat", sa.Float),
        sa.Column("last_lng", sa.Float),
        sa.Column("last_seen", sa.DateTime(timezone=True)),
        sa.Column("verified", sa.Boolean, server_default=sa.text("false"), nullable=False),
        sa.Column("verified_seller", sa.Boolean, server_default=sa.text("false"), nullable=False),
        sa.Column("verified_organizer", sa.Boolean, server_default=sa.text("false"), nullable=False),
        sa.Column("onboarding_complete", sa.Boolean, server_default=sa.text("false"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_city", "users", ["city"])
    op.create_index("ix_users_onboarding_complete", "users", ["onboarding_complete"])

    # 2. user_blocks
    op.create_table(
        "user_blocks",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_email", sa.String(255), sa.ForeignKey("users.email", ondelete="CASCADE"), nullable=False),
        sa.Column("blocked_email", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("user_email", "blocked_email", name="uq_user_blocks_pair"),
    )
    op.create_index("ix_user_blocks_user_email", "user_blocks", ["user_email"])

    # 3. user_interactions
    op.create_table(
        "user_interactions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_email", sa.String(255), sa.ForeignKey("users.email", ondelete="CASCADE"), nullable=False),
        sa.Column("target_email", sa.String(255), nullable=False),
        sa.Column("interaction_type", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("distance_km", sa.Float),
        sa.Column("lat", sa.Float),
        sa.Column("lng", sa.Float),
        sa.Column("duration_seconds", sa.Integer),
        sa.Column("metadata", JSONB),
    )
    op.create_index("idx_interactions_user_created", "user_interactions", ["user_email", "created_at"])
    op.create_index("idx_interactions_target", "user_interactions", ["target_email"])

    # 4. user_preferences_learned
    op.create_table(
        "user_preferences_learned",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("user_email", sa.String(255), sa.ForeignKey("users.email", ondelete="CASCADE"), unique=True, nullable=False),
        sa.Column("preferred_age_range", sa.String(20)),
        sa.Column("preferred_distance_km", sa.Integer),
        sa.Column("preferred_profile_types", JSONB, server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column("preferred_interests", JSONB, server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column("preferred_archetypes", JSONB, server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column("interaction_weights", JSONB, server_default=sa.text("'{}'::jsonb"), nullable=False),
        sa.Column("interaction_count", sa.Integer, server_default=sa.text("0"), nullable=False),
        sa.Column("last_updated", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("user_preferences_learned")
    op.drop_table("user_interactions")
    op.drop_table("user_blocks")
    op.drop_table("users")
