"""
Audit trail endpoints.

Read-only by construction: the audit trail has no create,
update or delete route. Entries are only written by the
handlers performing the audited action.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from lms_admin.config import get_settings
from lms_admin.models.base import get_db
from lms_admin.models.user import User
from lms_admin.schemas.audit import AuditEntryResponse, AuditTrailFilters
from lms_admin.schemas.common import ID_MAX, ID_MIN, PageEnvelope
from lms_admin.security import require_admin
from lms_admin.services.audit_service import AuditService, page_count

settings = get_settings()

router = APIRouter(prefix="/api/admin/cms/audit-trail", tags=["Audit Trail"])


def _page(entries, total: int, page: int, limit: int):
    return PageEnvelope[AuditEntryResponse](
        count=len(entries),
        total=total,
        page=page,
        pages=page_count(total, limit),
        data=[AuditEntryResponse.model_validate(e) for e in entries],
    )


@router.get("", response_model=PageEnvelope[AuditEntryResponse])
def get_audit_trail(
    action: str | None = None,
    resource_type: str | None = Query(default=None, alias="resourceType"),
    resource_id: int | None = Query(
        default=None, alias="resourceId", ge=ID_MIN, le=ID_MAX
    ),
    user_id: int | None = Query(
        default=None, alias="userId", ge=ID_MIN, le=ID_MAX
    ),
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    page: int = Query(default=1, ge=1, le=ID_MAX),
    limit: int = Query(default=settings.AUDIT_PAGE_LIMIT, ge=1, le=100),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Search the audit trail, newest first."""
    filters = AuditTrailFilters(
        action=action,
        resource_type=resource_type,
        resource_id=resource_id,
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
        page=page,
        limit=limit,
    )
    entries, total = AuditService(db).search(filters)
    return _page(entries, total, page, limit)


@router.get(
    "/resource/{resource_type}/{resource_id}",
    response_model=PageEnvelope[AuditEntryResponse],
)
def get_resource_audit_trail(
    resource_type: str,
    resource_id: int = Path(ge=ID_MIN, le=ID_MAX),
    page: int = Query(default=1, ge=1, le=ID_MAX),
    limit: int = Query(default=settings.RESOURCE_AUDIT_PAGE_LIMIT, ge=1, le=100),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Full history of one resource, newest first."""
    entries, total = AuditService(db).for_resource(
        resource_type, resource_id, page=page, limit=limit
    )
    return _page(entries, total, page, limit)
