"""Initial schema: users, forum posts, audit trail

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


user_role_enum = sa.Enum(
    "student", "trainer", "admin",
    name="user_role_enum", create_constraint=True,
)
forum_category_enum = sa.Enum(
    "general", "question", "discussion", "announcement", "help", "feedback",
    name="forum_category_enum", create_constraint=True,
)
post_status_enum = sa.Enum(
    "pending", "approved", "rejected",
    name="post_status_enum", create_constraint=True,
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("role", user_role_enum, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "forum_posts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "author_id", sa.Integer(), sa.ForeignKey("users.id"),
            nullable=False,
        ),
        sa.Column("category", forum_category_enum, nullable=False),
        sa.Column("status", post_status_enum, nullable=False),
        sa.Column(
            "moderated_by", sa.Integer(), sa.ForeignKey("users.id"),
            nullable=True,
        ),
        sa.Column("moderated_at", sa.DateTime(), nullable=True),
        sa.Column("moderation_reason", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index(
        "ix_forum_posts_author_id", "forum_posts", ["author_id"]
    )
    op.create_index(
        "ix_forum_posts_status_created_at",
        "forum_posts",
        ["status", "created_at"],
    )

    # No foreign keys: actor and resource are soft references
    op.create_table(
        "audit_trail",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("resource_type", sa.String(50), nullable=True),
        sa.Column("resource_id", sa.Integer(), nullable=True),
        sa.Column("details", sa.Text(), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True),
        sa.Column("ip_address", sa.String(45), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_audit_trail_user_id", "audit_trail", ["user_id"])
    op.create_index("ix_audit_trail_action", "audit_trail", ["action"])
    op.create_index("ix_audit_trail_timestamp", "audit_trail", ["timestamp"])
    op.create_index(
        "ix_audit_trail_resource",
        "audit_trail",
        ["resource_type", "resource_id"],
    )


def downgrade() -> None:
    op.drop_table("audit_trail")
    op.drop_table("forum_posts")
    op.drop_table("users")
    post_status_enum.drop(op.get_bind(), checkfirst=True)
    forum_category_enum.drop(op.get_bind(), checkfirst=True)
    user_role_enum.drop(op.get_bind(), checkfirst=True)
