"""
Audit service: the append-only audit trail.

record() is the only write path and it is best-effort: it
never raises. Callers commit their own mutation first, then
record it, so a failed audit write can only lose the audit
entry, never the mutation it describes.
"""

import math
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from lms_admin.logging_setup import get_logger
from lms_admin.models.audit_entry import AuditEntry
from lms_admin.schemas.audit import AuditTrailFilters

logger = get_logger(__name__)


def _naive_utc(value: datetime) -> datetime:
    # Timestamps are stored as naive UTC
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


class AuditService:

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        user_id: int,
        action: str,
        resource_type: str | None = None,
        resource_id: int | None = None,
        details: str | None = None,
        metadata: dict[str, Any] | None = None,
        ip_address: str | None = None,
    ) -> None:
        """
        Append one audit entry and commit it.

        Any failure is rolled back and logged. Nothing is returned
        and nothing is raised, so callers cannot depend on it.
        """
        try:
            entry = AuditEntry(
                user_id=user_id,
                action=action,
                resource_type=resource_type,
                resource_id=resource_id,
                details=details,
                extra=metadata,
                ip_address=ip_address,
            )
            self.db.add(entry)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.error(
                "audit_write_failed",
                user_id=user_id,
                action=action,
                resource_type=resource_type,
                resource_id=resource_id,
                exc_info=True,
            )

    def search(
        self, filters: AuditTrailFilters
    ) -> tuple[list[AuditEntry], int]:
        """
        Return one page of matching entries, newest first,
        together with the total number of matches.
        """
        conditions = []
        if filters.action:
            conditions.append(AuditEntry.action == filters.action)
        if filters.resource_type:
            conditions.append(AuditEntry.resource_type == filters.resource_type)
        if filters.resource_id is not None:
            conditions.append(AuditEntry.resource_id == filters.resource_id)
        if filters.user_id is not None:
            conditions.append(AuditEntry.user_id == filters.user_id)
        if filters.start_date:
            conditions.append(
                AuditEntry.timestamp >= _naive_utc(filters.start_date)
            )
        if filters.end_date:
            conditions.append(
                AuditEntry.timestamp <= _naive_utc(filters.end_date)
            )

        total = self.db.execute(
            select(func.count()).select_from(AuditEntry).where(*conditions)
        ).scalar_one()

        entries = self.db.execute(
            select(AuditEntry)
            .where(*conditions)
            .order_by(AuditEntry.timestamp.desc(), AuditEntry.id.desc())
            .offset((filters.page - 1) * filters.limit)
            .limit(filters.limit)
        ).scalars().all()
        return list(entries), total

    def for_resource(
        self,
        resource_type: str,
        resource_id: int,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[AuditEntry], int]:
        """Entries for a single resource, newest first."""
        return self.search(AuditTrailFilters(
            resource_type=resource_type,
            resource_id=resource_id,
            page=page,
            limit=limit,
        ))
