"""Business logic services."""

from lms_admin.services.audit_service import AuditService
from lms_admin.services.moderation_service import ModerationService

__all__ = ["AuditService", "ModerationService"]
