"""Initial schema: administrative hierarchy, accounts, representatives, ratings, comments.

Revision ID: 001
Revises: None
Create Date: 2026-10-18
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # Administrative hierarchy
    op.create_table(
        "regions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
    )
    op.create_table(
        "sub_regions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("region_id", UUID(as_uuid=True), sa.ForeignKey("regions.id", ondelete="CASCADE"), nullable=False),
        sa.UniqueConstraint("region_id", "name", name="uq_sub_region_region_name"),
    )
    op.create_index("ix_sub_regions_region_id", "sub_regions", ["region_id"])
    op.create_table(
        "local_units",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column(
            "sub_region_id", UUID(as_uuid=True), sa.ForeignKey("sub_regions.id", ondelete="CASCADE"), nullable=False
        ),
        sa.UniqueConstraint("sub_region_id", "name", name="uq_local_unit_sub_region_name"),
    )
    op.create_index("ix_local_units_sub_region_id", "local_units", ["sub_region_id"])

    # Accounts
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default="true"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "citizen_profiles",
        sa.Column("id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("full_name", sa.String(200), nullable=True),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("national_id", sa.String(20), nullable=True),
        sa.Column("photo_url", sa.Text, nullable=True),
        sa.Column("region_id", UUID(as_uuid=True), sa.ForeignKey("regions.id"), nullable=True),
        sa.Column("sub_region_id", UUID(as_uuid=True), sa.ForeignKey("sub_regions.id"), nullable=True),
        sa.Column("local_unit_id", UUID(as_uuid=True), sa.ForeignKey("local_units.id"), nullable=True),
        sa.Column("is_representative", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("is_aspirant", sa.Boolean, nullable=False, server_default="false"),
        *_timestamps(),
    )

    # Representatives
    op.create_table(
        "representatives",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("position", sa.String(30), nullable=False),
        sa.Column("region_id", UUID(as_uuid=True), sa.ForeignKey("regions.id"), nullable=True),
        sa.Column("sub_region_id", UUID(as_uuid=True), sa.ForeignKey("sub_regions.id"), nullable=True),
        sa.Column("local_unit_id", UUID(as_uuid=True), sa.ForeignKey("local_units.id"), nullable=True),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("manifesto", sa.Text, nullable=True),
        sa.Column("photo_url", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_representatives_position", "representatives", ["position"])
    op.create_index("ix_representatives_region", "representatives", ["region_id"])
    op.create_index("ix_representatives_sub_region", "representatives", ["sub_region_id"])
    op.create_index("ix_representatives_local_unit", "representatives", ["local_unit_id"])

    # Feedback
    op.create_table(
        "ratings",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("citizen_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "representative_id",
            UUID(as_uuid=True),
            sa.ForeignKey("representatives.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("value", sa.Integer, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("citizen_id", "representative_id", name="uq_rating_citizen_representative"),
        sa.CheckConstraint("value BETWEEN 1 AND 5", name="ck_rating_value_range"),
    )
    op.create_index("ix_ratings_representative_id", "ratings", ["representative_id"])

    op.create_table(
        "comments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "representative_id",
            UUID(as_uuid=True),
            sa.ForeignKey("representatives.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("author_id", UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("body", sa.Text, nullable=False),
        sa.Column("parent_id", UUID(as_uuid=True), sa.ForeignKey("comments.id", ondelete="CASCADE"), nullable=True),
        sa.Column("hidden", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_comments_representative_created", "comments", ["representative_id", "created_at"])
    op.create_index("ix_comments_author_id", "comments", ["author_id"])
    op.create_index("ix_comments_parent_id", "comments", ["parent_id"])


def downgrade() -> None:
    op.drop_table("comments")
    op.drop_table("ratings")
    op.drop_table("representatives")
    op.drop_table("citizen_profiles")
    op.drop_table("users")
    op.drop_table("local_units")
    op.drop_table("sub_regions")
    op.drop_table("regions")
