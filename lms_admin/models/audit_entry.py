"""
Audit trail model.

Records every administrative mutation for accountability.
The actor and the resource are soft references: no foreign
keys, so deleting a user or a resource never touches history.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import String, DateTime, Text, Integer, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from lms_admin.models.base import Base


class AuditEntry(Base):
    """
    Immutable record of an admin action.

    Append-only. Nothing in the service layer or the API
    updates or deletes an audit entry.
    """

    __tablename__ = "audit_trail"
    __table_args__ = (
        Index("ix_audit_trail_resource", "resource_type", "resource_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    resource_type: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )
    resource_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    # "metadata" is reserved on declarative classes
    extra: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata", JSON, nullable=True
    )
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, index=True
    )

    # Display-only join to the actor
    user: Mapped["User | None"] = relationship(
        primaryjoin="foreign(AuditEntry.user_id) == User.id",
        viewonly=True,
        lazy="joined",
    )

    def __repr__(self) -> str:
        return (
            f"<AuditEntry {self.action} "
            f"{self.resource_type}:{self.resource_id}>"
        )
