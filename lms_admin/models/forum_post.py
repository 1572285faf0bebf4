"""
Forum post model.

Only the moderation handler writes status, moderated_by,
moderated_at and moderation_reason. The moderator fields stay
NULL until the first moderation, so "was this ever moderated"
is simply moderated_at IS NOT NULL.
"""

from datetime import datetime

from sqlalchemy import (
    String, Text, DateTime, ForeignKey, Index,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lms_admin.models.base import Base
from lms_admin.models.enums import ForumCategory, PostStatus

MODERATION_REASON_MAX_LENGTH = 500


class ForumPost(Base):
    __tablename__ = "forum_posts"
    __table_args__ = (
        Index("ix_forum_posts_status_created_at", "status", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )
    category: Mapped[ForumCategory] = mapped_column(
        SAEnum(
            ForumCategory,
            name="forum_category_enum",
            create_constraint=True,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=ForumCategory.GENERAL,
    )
    status: Mapped[PostStatus] = mapped_column(
        SAEnum(
            PostStatus,
            name="post_status_enum",
            create_constraint=True,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=PostStatus.APPROVED,
    )
    moderated_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id"), nullable=True, default=None
    )
    moderated_at: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, default=None
    )
    moderation_reason: Mapped[str | None] = mapped_column(
        String(MODERATION_REASON_MAX_LENGTH), nullable=True, default=None
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    author: Mapped["User"] = relationship(foreign_keys=[author_id])

    def __repr__(self) -> str:
        return f"<ForumPost {self.id} ({self.status.value})>"
