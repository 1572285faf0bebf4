"""
Moderation service: approve or reject forum posts.

The handler accepts any approved/rejected target from any
current status, so an admin can always override an earlier
decision. PENDING is never a target: posts only enter it
through content flows.

Every successful moderation is recorded in the audit trail.
The post is committed first and the audit entry second; if the
audit write fails the moderation stands and the failure is
only logged.
"""

import json
from datetime import datetime
from typing import Any

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from lms_admin.exceptions import (
    InvalidStatusError,
    NotFoundError,
    ValidationError,
)
from lms_admin.logging_setup import get_logger
from lms_admin.models.enums import MODERATION_TARGETS, PostStatus, UserRole
from lms_admin.models.forum_post import ForumPost, MODERATION_REASON_MAX_LENGTH
from lms_admin.models.user import User
from lms_admin.schemas.stats import DashboardStats, ModerationCounts, UserCounts
from lms_admin.services.audit_service import AuditService

logger = get_logger(__name__)


def parse_moderation_target(status: Any) -> PostStatus:
    """Validate a requested status against the moderation targets."""
    allowed = [s.value for s in MODERATION_TARGETS]
    if not isinstance(status, str) or status not in allowed:
        raise InvalidStatusError(
            f"Invalid status. Must be one of: {', '.join(allowed)}"
        )
    return PostStatus(status)


def coerce_reason(reason: Any) -> str | None:
    """
    Turn whatever the caller sent as a reason into plain text.

    Mappings and lists become their JSON text, other scalars go
    through str(). Only the resulting string is ever stored.
    """
    if reason is None or reason == "":
        return None
    if isinstance(reason, str):
        text = reason
    elif isinstance(reason, (dict, list)):
        text = json.dumps(reason, sort_keys=True, default=str)
    else:
        text = str(reason)

    if len(text) > MODERATION_REASON_MAX_LENGTH:
        raise ValidationError(
            f"Moderation reason cannot exceed "
            f"{MODERATION_REASON_MAX_LENGTH} characters"
        )
    return text


class ModerationService:

    def __init__(self, db: Session, audit: AuditService | None = None):
        self.db = db
        self.audit = audit or AuditService(db)

    def moderate(
        self,
        post_id: int,
        status: Any,
        reason: Any,
        actor: User,
        ip_address: str | None = None,
    ) -> ForumPost:
        """
        Set a post's moderation status and record who did it.

        Validation happens before any read or write. This method
        commits: the post update is its own unit of work, and the
        audit entry is written after it.
        """
        new_status = parse_moderation_target(status)
        reason_text = coerce_reason(reason)

        post = self.db.get(ForumPost, post_id)
        if not post:
            raise NotFoundError("Forum post not found")

        post.status = new_status
        post.moderated_by = actor.id
        post.moderated_at = datetime.utcnow()
        post.moderation_reason = reason_text
        self.db.commit()

        logger.info(
            "forum_post_moderated",
            post_id=post_id,
            status=new_status.value,
            moderator_id=actor.id,
        )

        self.audit.record(
            actor.id,
            "moderate",
            resource_type="Forum",
            resource_id=post_id,
            details=f"Moderated forum post: {new_status.value}",
            metadata={"reason": reason_text} if reason_text is not None else None,
            ip_address=ip_address,
        )
        return post

    def list_posts(self, status: str = PostStatus.PENDING.value) -> list[ForumPost]:
        """Posts in the given moderation state, newest first."""
        try:
            wanted = PostStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in PostStatus)
            raise InvalidStatusError(
                f"Invalid status. Must be one of: {allowed}"
            ) from None

        posts = self.db.execute(
            select(ForumPost)
            .where(ForumPost.status == wanted)
            .order_by(ForumPost.created_at.desc(), ForumPost.id.desc())
        ).scalars().all()
        return list(posts)

    def dashboard_stats(self) -> DashboardStats:
        """Counts shown on the moderation dashboard."""
        pending = self.db.execute(
            select(func.count()).select_from(ForumPost)
            .where(ForumPost.status == PostStatus.PENDING)
        ).scalar_one()

        role_counts = dict(self.db.execute(
            select(User.role, func.count()).group_by(User.role)
        ).all())

        return DashboardStats(
            moderation=ModerationCounts(pending_forums=pending),
            users=UserCounts(
                total=sum(role_counts.values()),
                students=role_counts.get(UserRole.STUDENT, 0),
                trainers=role_counts.get(UserRole.TRAINER, 0),
                admins=role_counts.get(UserRole.ADMIN, 0),
            ),
        )
