"""
Comments Router

Endpoints for comments on reviews.

Endpoints:
- POST /comments - Post a comment on a review
- GET /comments - List all comments
- GET /comments/review/{review_id} - List a review's comments, oldest first
- DELETE /comments/{comment_id} - Delete a comment
"""

from typing import List

from fastapi import APIRouter, Request

from app.config import get_settings
from app.dependencies import CommentId, DbSession, ReviewId
from app.schemas.comment import CommentCreate, CommentResponse
from app.schemas.review import ErrorResponse, MessageResponse
from app.services import comments as comment_store
from app.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/comments",
    tags=["Comments"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
)


@router.post(
    "",
    response_model=CommentResponse,
    summary="Post a comment",
    description="Add a comment to an existing review. Unknown review ids are rejected with 404.",
    responses={404: {"model": ErrorResponse, "description": "Review not found"}},
)
@limiter.limit(settings.rate_limit_write)
def create_comment(
    request: Request,
    comment_data: CommentCreate,
    db: DbSession,
) -> CommentResponse:
    """Create a comment on a review."""
    comment = comment_store.create_comment(db, comment_data)
    return CommentResponse.model_validate(comment)


@router.get(
    "",
    response_model=List[CommentResponse],
    summary="List all comments",
)
@limiter.limit(settings.rate_limit_default)
def list_comments(request: Request, db: DbSession) -> List[CommentResponse]:
    """List every comment, oldest first."""
    comments = comment_store.list_comments(db)
    return [CommentResponse.model_validate(c) for c in comments]


@router.get(
    "/review/{review_id}",
    response_model=List[CommentResponse],
    summary="List comments on a review",
)
@limiter.limit(settings.rate_limit_default)
def list_review_comments(
    request: Request,
    review_id: ReviewId,
    db: DbSession,
) -> List[CommentResponse]:
    """List the comments on one review in posting order."""
    comments = comment_store.list_comments_by_review(db, review_id)
    return [CommentResponse.model_validate(c) for c in comments]


@router.delete(
    "/{comment_id}",
    response_model=MessageResponse,
    summary="Delete a comment",
    responses={404: {"model": ErrorResponse, "description": "Comment not found"}},
)
@limiter.limit(settings.rate_limit_write)
def delete_comment(
    request: Request,
    comment_id: CommentId,
    db: DbSession,
) -> MessageResponse:
    """Delete a single comment."""
    comment_store.delete_comment(db, comment_id)
    return MessageResponse(message="Comment deleted successfully")
