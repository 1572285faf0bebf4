"""
Pydantic schemas for forum moderation.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from lms_admin.models.enums import ForumCategory, PostStatus
from lms_admin.schemas.common import ActorSummary, CamelModel


class ModerationRequest(BaseModel):
    """
    Body of a moderation call.

    Both fields are accepted as-is and checked by the service,
    so a bad status is reported as "Invalid status" rather than
    a generic schema error, and a non-string reason is coerced
    instead of rejected.
    """
    status: Any = None
    reason: Any = None


class ForumPostResponse(CamelModel):
    id: int
    title: str
    content: str
    author_id: int
    author: ActorSummary | None = None
    category: ForumCategory
    status: PostStatus
    moderated_by: int | None
    moderated_at: datetime | None
    moderation_reason: str | None
    created_at: datetime
    updated_at: datetime
