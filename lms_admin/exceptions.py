"""
Domain errors raised by the service layer.

Services never raise HTTP errors. The API layer catches these
and chooses the status code, so the same service can be driven
from tests or scripts without FastAPI in the picture.
"""


class AdminError(Exception):
    """Base class for all admin service errors."""


class ValidationError(AdminError, ValueError):
    """Request data failed validation. Maps to 400."""


class InvalidStatusError(ValidationError):
    """Moderation status outside the accepted set."""


class NotFoundError(AdminError, LookupError):
    """Target resource does not exist. Maps to 404."""
