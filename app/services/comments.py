"""
Comment Store

Persistence operations for comments on reviews.

A comment can only be created for a review that exists; posting to an
unknown review_id raises NotFoundError instead of storing an orphan.
"""

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from app.models import Comment, Review
from app.schemas.comment import CommentCreate
from app.services.reviews import get_review
from app.utils.db import storage_errors

logger = logging.getLogger(__name__)


def create_comment(db: Session, data: CommentCreate) -> Comment:
    """
    Insert a new comment on an existing review.

    Args:
        db: Database session
        data: Validated comment fields

    Returns:
        The stored comment, including its generated comment_id

    Raises:
        NotFoundError: If data.review_id does not reference a review
        StorageError: On constraint violation or connection failure
    """
    get_review(db, data.review_id)

    comment = Comment(
        user_id=data.user_id,
        review_id=data.review_id,
        comment=data.comment,
        displayname=data.displayname,
        photo_url=data.photo_url,
    )

    with storage_errors(db, "create comment"):
        db.add(comment)
        try:
            db.commit()
        except IntegrityError as exc:
            # The review may have been deleted after the check above
            db.rollback()
            if db.get(Review, data.review_id, populate_existing=True) is None:
                raise NotFoundError("Review", data.review_id) from exc
            raise
        db.refresh(comment)

    logger.info(f"Comment {comment.comment_id} added to review {comment.review_id}")
    return comment


def list_comments(db: Session) -> Sequence[Comment]:
    """Return every comment in insertion order."""
    stmt = select(Comment).order_by(Comment.comment_id)
    with storage_errors(db, "list comments"):
        return db.execute(stmt).scalars().all()


def list_comments_by_review(db: Session, review_id: int) -> Sequence[Comment]:
    """
    Return the comments on one review, oldest first.

    An unknown review_id yields an empty list.
    """
    stmt = (
        select(Comment)
        .where(Comment.review_id == review_id)
        .order_by(Comment.comment_id)
    )
    with storage_errors(db, "list comments by review"):
        return db.execute(stmt).scalars().all()


def delete_comment(db: Session, comment_id: int) -> None:
    """
    Delete a single comment.

    Raises:
        NotFoundError: If no comment has this id
        StorageError: If the delete fails
    """
    with storage_errors(db, "load comment"):
        comment = db.get(Comment, comment_id, with_for_update=True)

    if comment is None:
        raise NotFoundError("Comment", comment_id)

    with storage_errors(db, "delete comment"):
        db.delete(comment)
        db.commit()

    logger.info(f"Comment {comment_id} deleted")
