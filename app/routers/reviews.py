"""
Reviews Router

CRUD endpoints for movie reviews.

Endpoints:
- POST /reviews - Create a review
- GET /reviews - List all reviews
- GET /reviews/user/{user_id} - List reviews written by a user
- GET /reviews/movie/{movie_id} - List a movie's reviews with comments
- DELETE /reviews/{review_id} - Delete a review and its comments

Business Rules:
- Rating must be 0-10 (400 otherwise)
- Reviews are never updated
- Deleting a review deletes its comments; deleting a missing review is a 404
"""

from typing import List

from fastapi import APIRouter, Request

from app.config import get_settings
from app.dependencies import DbSession, MovieId, ReviewId
from app.schemas.review import (
    ErrorResponse,
    MessageResponse,
    ReviewCreate,
    ReviewResponse,
    ReviewWithComments,
)
from app.services import reviews as review_store
from app.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/reviews",
    tags=["Reviews"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
)


@router.post(
    "",
    response_model=ReviewResponse,
    summary="Create a review",
    description="Store a new review for a movie. The author's display name and photo are snapshotted.",
)
@limiter.limit(settings.rate_limit_write)
def create_review(
    request: Request,
    review_data: ReviewCreate,
    db: DbSession,
) -> ReviewResponse:
    """
    Create a new review.

    Returns:
        The stored review, including its generated review_id
    """
    review = review_store.create_review(db, review_data)
    return ReviewResponse.model_validate(review)


@router.get(
    "",
    response_model=List[ReviewResponse],
    summary="List all reviews",
)
@limiter.limit(settings.rate_limit_default)
def list_reviews(request: Request, db: DbSession) -> List[ReviewResponse]:
    """List every review, oldest first."""
    reviews = review_store.list_reviews(db)
    return [ReviewResponse.model_validate(r) for r in reviews]


@router.get(
    "/user/{user_id}",
    response_model=List[ReviewResponse],
    summary="List reviews by a user",
    description="Reviews written by the given identity-provider user id. Unknown users get an empty list.",
)
@limiter.limit(settings.rate_limit_default)
def list_user_reviews(
    request: Request,
    user_id: str,
    db: DbSession,
) -> List[ReviewResponse]:
    """List reviews written by one user (the "my reviews" view)."""
    reviews = review_store.list_reviews_by_user(db, user_id)
    return [ReviewResponse.model_validate(r) for r in reviews]


@router.get(
    "/movie/{movie_id}",
    response_model=List[ReviewWithComments],
    summary="List reviews for a movie",
    description="Reviews for the given movie id, each with its comments in posting order.",
)
@limiter.limit(settings.rate_limit_default)
def list_movie_reviews(
    request: Request,
    movie_id: MovieId,
    db: DbSession,
) -> List[ReviewWithComments]:
    """List a movie's reviews with their comments."""
    reviews = review_store.list_reviews_by_movie(db, movie_id)
    return [ReviewWithComments.model_validate(r) for r in reviews]


@router.delete(
    "/{review_id}",
    response_model=MessageResponse,
    summary="Delete a review",
    description="Delete a review and all of its comments in one transaction.",
    responses={404: {"model": ErrorResponse, "description": "Review not found"}},
)
@limiter.limit(settings.rate_limit_write)
def delete_review(
    request: Request,
    review_id: ReviewId,
    db: DbSession,
) -> MessageResponse:
    """
    Delete a review.

    Raises:
        NotFoundError: 404 if the review does not exist
    """
    review_store.delete_review(db, review_id)
    return MessageResponse(message="Review deleted successfully")
