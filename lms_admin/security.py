"""
Bearer-token guard for the admin API.

Tokens are HS256 JWTs whose "sub" claim is the user id. The
guard resolves the token to an active User and then checks the
admin role. Issuing tokens (login) lives outside this service;
create_access_token exists for operators and tests.
"""

from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from lms_admin.config import get_settings
from lms_admin.logging_setup import get_logger
from lms_admin.models.base import get_db
from lms_admin.models.user import User

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(
    user_id: int, expires_minutes: int | None = None
) -> str:
    """Sign an access token for the given user."""
    settings = get_settings()
    minutes = (
        expires_minutes if expires_minutes is not None
        else settings.JWT_EXPIRE_MINUTES
    )
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(minutes=minutes),
    }
    return jwt.encode(
        claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM
    )


def decode_access_token(token: str) -> int:
    """
    Return the user id carried by a token.

    Raises ValueError for expired, tampered or malformed tokens.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
        return int(payload["sub"])
    except (JWTError, KeyError, TypeError, ValueError) as e:
        raise ValueError("Invalid or expired token") from e


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to an active user, or answer 401."""
    if credentials is None:
        raise _unauthorized("Not authorized to access this route")

    try:
        user_id = decode_access_token(credentials.credentials)
    except ValueError as e:
        raise _unauthorized(str(e))

    user = db.get(User, user_id)
    if not user or not user.is_active:
        raise _unauthorized("Not authorized to access this route")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Allow only admin actors through."""
    if not user.is_admin:
        logger.warning(
            "admin_access_denied", user_id=user.id, role=user.role.value
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"User role '{user.role.value}' is not authorized "
                   f"to access this route",
        )
    return user
