"""
Review Store

Persistence operations for movie reviews.

All functions take the request's SQLAlchemy session. Writes commit
before returning; any database failure is rolled back and re-raised
as StorageError (see app.utils.db.storage_errors).

Operations:
- create_review: insert a review
- list_reviews: all reviews, oldest first
- list_reviews_by_user: a user's reviews ("my reviews")
- list_reviews_by_movie: a movie's reviews with their comments loaded
- list_recent_reviews: newest reviews first (feed)
- get_review: one review or NotFoundError
- delete_review: delete a review and its comments in one transaction
"""

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.exc import StaleDataError

from app.exceptions import NotFoundError
from app.models import Review
from app.schemas.review import ReviewCreate
from app.utils.db import storage_errors

logger = logging.getLogger(__name__)


def create_review(db: Session, data: ReviewCreate) -> Review:
    """
    Insert a new review.

    Args:
        db: Database session
        data: Validated review fields

    Returns:
        The stored review, including its generated review_id

    Raises:
        StorageError: On constraint violation or connection failure
    """
    review = Review(
        movie_id=data.movie_id,
        user_id=data.user_id,
        rating=data.rating,
        title=data.title,
        content=data.content,
        displayname=data.displayname,
        photo_url=data.photo_url,
    )

    with storage_errors(db, "create review"):
        db.add(review)
        db.commit()
        db.refresh(review)

    logger.info(
        f"Review {review.review_id} created for movie {review.movie_id} by {review.user_id}"
    )
    return review


def list_reviews(db: Session) -> Sequence[Review]:
    """Return every review in insertion order."""
    stmt = select(Review).order_by(Review.review_id)
    with storage_errors(db, "list reviews"):
        return db.execute(stmt).scalars().all()


def list_reviews_by_user(db: Session, user_id: str) -> Sequence[Review]:
    """
    Return the reviews written by one user.

    An unknown user_id is not an error; it yields an empty list.
    """
    stmt = (
        select(Review)
        .where(Review.user_id == user_id)
        .order_by(Review.review_id)
    )
    with storage_errors(db, "list reviews by user"):
        return db.execute(stmt).scalars().all()


def list_reviews_by_movie(db: Session, movie_id: int) -> Sequence[Review]:
    """
    Return the reviews for one movie with their comments eager-loaded.

    Comments on each review are ordered oldest first.
    """
    stmt = (
        select(Review)
        .options(selectinload(Review.comments))
        .where(Review.movie_id == movie_id)
        .order_by(Review.review_id)
    )
    with storage_errors(db, "list reviews by movie"):
        return db.execute(stmt).scalars().all()


def list_recent_reviews(db: Session, limit: int) -> Sequence[Review]:
    """Return the newest reviews first, at most `limit` of them."""
    stmt = (
        select(Review)
        .order_by(Review.created_at.desc(), Review.review_id.desc())
        .limit(limit)
    )
    with storage_errors(db, "list recent reviews"):
        return db.execute(stmt).scalars().all()


def get_review(db: Session, review_id: int, *, for_update: bool = False) -> Review:
    """
    Get a review by id.

    With for_update=True the row is locked (SELECT ... FOR UPDATE) and the
    identity map is bypassed, so a review deleted by a concurrent request
    is reported as missing once that request commits.

    Raises:
        NotFoundError: If no review has this id
    """
    with storage_errors(db, "load review"):
        review = db.get(Review, review_id, with_for_update=True if for_update else None)

    if review is None:
        raise NotFoundError("Review", review_id)
    return review


def delete_review(db: Session, review_id: int) -> None:
    """
    Delete a review together with all of its comments.

    Both deletes happen in a single commit: the ORM cascade removes the
    loaded comments and the foreign key's ON DELETE CASCADE covers any
    it did not see. If the commit fails, nothing is deleted.

    Deleting an id that does not exist (including a second delete of the
    same id, concurrent or not) raises NotFoundError.

    Raises:
        NotFoundError: If no review has this id
        StorageError: If the transaction fails
    """
    review = get_review(db, review_id, for_update=True)

    with storage_errors(db, "delete review"):
        comment_count = len(review.comments)
        db.delete(review)
        try:
            db.commit()
        except StaleDataError as exc:
            # Another request deleted the row first
            db.rollback()
            raise NotFoundError("Review", review_id) from exc

    logger.info(f"Review {review_id} deleted along with {comment_count} comment(s)")
