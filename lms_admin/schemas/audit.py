"""
Pydantic schemas for the audit trail.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from lms_admin.schemas.common import ActorSummary, CamelModel, ID_MAX, ID_MIN


class AuditTrailFilters(BaseModel):
    """Search criteria for the audit trail. Unset fields match everything."""
    action: str | None = None
    resource_type: str | None = None
    resource_id: int | None = Field(default=None, ge=ID_MIN, le=ID_MAX)
    user_id: int | None = Field(default=None, ge=ID_MIN, le=ID_MAX)
    start_date: datetime | None = None
    end_date: datetime | None = None
    page: int = Field(default=1, ge=1, le=ID_MAX)
    limit: int = Field(default=50, ge=1, le=100)


class AuditEntryResponse(CamelModel):
    id: int
    user_id: int
    user: ActorSummary | None = None
    action: str
    resource_type: str | None
    resource_id: int | None
    details: str | None
    # The ORM attribute is "extra"; "metadata" is reserved there
    metadata: dict[str, Any] | None = Field(
        default=None,
        validation_alias="extra",
        serialization_alias="metadata",
    )
    ip_address: str | None
    timestamp: datetime
