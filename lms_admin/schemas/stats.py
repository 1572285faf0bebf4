"""
Pydantic schemas for the moderation dashboard.
"""

from lms_admin.schemas.common import CamelModel


class ModerationCounts(CamelModel):
    pending_forums: int


class UserCounts(CamelModel):
    total: int
    students: int
    trainers: int
    admins: int


class DashboardStats(CamelModel):
    moderation: ModerationCounts
    users: UserCounts
