"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from lms_admin.models.base import Base
from lms_admin.models.enums import (
    UserRole,
    ForumCategory,
    PostStatus,
    MODERATION_TARGETS,
)
from lms_admin.models.user import User
from lms_admin.models.forum_post import ForumPost
from lms_admin.models.audit_entry import AuditEntry

__all__ = [
    "Base",
    "UserRole",
    "ForumCategory",
    "PostStatus",
    "MODERATION_TARGETS",
    "User",
    "ForumPost",
    "AuditEntry",
]
