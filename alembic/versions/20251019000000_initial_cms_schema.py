"""Initial CMS schema: users, blacklisted_tokens, news, members.

Revision ID: 20251019000000
Revises:
Create Date: 2025-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20251019000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
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
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="admin"),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("role IN ('admin', 'super_admin')", name="ck_users_role"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "blacklisted_tokens",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("token_hash", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_blacklisted_tokens_token_hash"), "blacklisted_tokens", ["token_hash"], unique=True
    )
    op.create_index(op.f("ix_blacklisted_tokens_user_id"), "blacklisted_tokens", ["user_id"])
    op.create_index(op.f("ix_blacklisted_tokens_expires_at"), "blacklisted_tokens", ["expires_at"])

    op.create_table(
        "news",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("news_title", sa.String(length=512), nullable=False),
        sa.Column("slug", sa.String(length=600), nullable=False),
        sa.Column("category", sa.String(length=255), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="Drafted"),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("image", sa.String(length=2048), nullable=False, server_default=""),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_news_slug"), "news", ["slug"], unique=True)
    op.create_index(op.f("ix_news_category"), "news", ["category"])
    op.create_index(op.f("ix_news_status"), "news", ["status"])
    op.create_index(op.f("ix_news_deleted_at"), "news", ["deleted_at"])

    op.create_table(
        "members",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("title_position", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone_number", sa.String(length=64), nullable=False, server_default=""),
        sa.Column("linkedin", sa.String(length=1024), nullable=False, server_default=""),
        sa.Column("business_card", sa.String(length=2048), nullable=False, server_default=""),
        sa.Column("display_image", sa.String(length=2048), nullable=False, server_default=""),
        sa.Column("detail_image", sa.String(length=2048), nullable=False, server_default=""),
        sa.Column("biography", sa.Text(), nullable=False, server_default=""),
        sa.Column("practice_focus", sa.JSON(), nullable=False),
        sa.Column("education", sa.JSON(), nullable=False),
        sa.Column("language", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_members_email"), "members", ["email"], unique=True)
    op.create_index(op.f("ix_members_deleted_at"), "members", ["deleted_at"])


def downgrade() -> None:
    op.drop_index(op.f("ix_members_deleted_at"), table_name="members")
    op.drop_index(op.f("ix_members_email"), table_name="members")
    op.drop_table("members")
    op.drop_index(op.f("ix_news_deleted_at"), table_name="news")
    op.drop_index(op.f("ix_news_status"), table_name="news")
    op.drop_index(op.f("ix_news_category"), table_name="news")
    op.drop_index(op.f("ix_news_slug"), table_name="news")
    op.drop_table("news")
    op.drop_index(op.f("ix_blacklisted_tokens_expires_at"), table_name="blacklisted_tokens")
    op.drop_index(op.f("ix_blacklisted_tokens_user_id"), table_name="blacklisted_tokens")
    op.drop_index(op.f("ix_blacklisted_tokens_token_hash"), table_name="blacklisted_tokens")
    op.drop_table("blacklisted_tokens")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
