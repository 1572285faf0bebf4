"""
Shared schema pieces: camelCase wire format and the
{success, message, data} envelope every endpoint returns.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from lms_admin.models.enums import UserRole

T = TypeVar("T")

# Ids are INTEGER columns (32-bit on PostgreSQL); anything wider
# is rejected at the edge instead of overflowing in the driver.
ID_MIN = -(2 ** 31)
ID_MAX = 2 ** 31 - 1


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ActorSummary(CamelModel):
    """The few user fields embedded in posts and audit entries."""
    id: int
    name: str
    email: str
    role: UserRole


class Envelope(CamelModel, Generic[T]):
    success: bool = True
    message: str | None = None
    data: T


class ListEnvelope(CamelModel, Generic[T]):
    success: bool = True
    count: int
    data: list[T]


class PageEnvelope(CamelModel, Generic[T]):
    success: bool = True
    count: int
    total: int
    page: int
    pages: int
    data: list[T]
