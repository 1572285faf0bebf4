"""
Forum moderation endpoints.

Thin HTTP layer over ModerationService: it resolves the actor
and source address, maps domain errors to status codes, and
wraps results in the response envelope.
"""

from fastapi import APIRouter, Depends, HTTPException, Path, Request
from sqlalchemy.orm import Session

from lms_admin.exceptions import NotFoundError, ValidationError
from lms_admin.models.base import get_db
from lms_admin.models.enums import PostStatus
from lms_admin.models.user import User
from lms_admin.schemas.common import Envelope, ID_MAX, ID_MIN, ListEnvelope
from lms_admin.schemas.forum import ForumPostResponse, ModerationRequest
from lms_admin.security import require_admin
from lms_admin.services.moderation_service import ModerationService

router = APIRouter(prefix="/api/admin/cms/moderation", tags=["Moderation"])


def client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


@router.get("/forums", response_model=ListEnvelope[ForumPostResponse])
def list_forum_posts(
    status: str = PostStatus.PENDING.value,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """List forum posts by moderation status (pending by default)."""
    service = ModerationService(db)
    try:
        posts = service.list_posts(status)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ListEnvelope[ForumPostResponse](
        count=len(posts),
        data=[ForumPostResponse.model_validate(p) for p in posts],
    )


@router.put("/forums/{post_id}", response_model=Envelope[ForumPostResponse])
def moderate_forum_post(
    body: ModerationRequest,
    request: Request,
    post_id: int = Path(ge=ID_MIN, le=ID_MAX),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """
    Approve or reject a forum post.

    The post is saved and then the action is written to the
    audit trail. An audit failure does not fail this request.
    """
    service = ModerationService(db)
    try:
        post = service.moderate(
            post_id,
            body.status,
            body.reason,
            actor=admin,
            ip_address=client_ip(request),
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return Envelope[ForumPostResponse](
        message="Forum post moderated successfully",
        data=ForumPostResponse.model_validate(post),
    )
