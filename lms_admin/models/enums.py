"""
Shared enumerations for database models.

Python enums mapped to database enums, so an unknown role,
category or post status is rejected by the database too.
"""

import enum


class UserRole(str, enum.Enum):
    STUDENT = "student"
    TRAINER = "trainer"
    ADMIN = "admin"


class ForumCategory(str, enum.Enum):
    GENERAL = "general"
    QUESTION = "question"
    DISCUSSION = "discussion"
    ANNOUNCEMENT = "announcement"
    HELP = "help"
    FEEDBACK = "feedback"


class PostStatus(str, enum.Enum):
    """
    Moderation state of a forum post.

    Posts start APPROVED unless a content flow flags them
    PENDING. Moderators can only move a post to APPROVED
    or REJECTED.
    """
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# Targets accepted by the moderation handler
MODERATION_TARGETS: tuple[PostStatus, ...] = (
    PostStatus.APPROVED,
    PostStatus.REJECTED,
)
