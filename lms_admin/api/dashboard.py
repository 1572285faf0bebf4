"""
Moderation dashboard statistics.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lms_admin.models.base import get_db
from lms_admin.models.user import User
from lms_admin.schemas.common import Envelope
from lms_admin.schemas.stats import DashboardStats
from lms_admin.security import require_admin
from lms_admin.services.moderation_service import ModerationService

router = APIRouter(prefix="/api/admin/cms", tags=["Dashboard"])


@router.get("/stats", response_model=Envelope[DashboardStats])
def get_dashboard_stats(
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Pending-post and user counts for the admin dashboard."""
    return Envelope[DashboardStats](
        data=ModerationService(db).dashboard_stats()
    )
