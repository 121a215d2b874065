"""
Review Pydantic Schemas

Schemas for movie reviews.

Schemas:
- AuthorSnapshot: displayname/photoUrl fields shared with comments
- ReviewBase: Shared fields for review operations
- ReviewCreate: Create a new review
- ReviewResponse: Review data for API responses
- ReviewWithComments: Review plus its comments (movie detail view)
- FeedReviewResponse: Review plus a movie summary (feed view)

Business Rules:
- Rating must be 0-10 (validated at schema level)
- Reviews are never updated, so there is no ReviewUpdate
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.comment import MAX_ID, AuthorSnapshot, CommentResponse
from app.schemas.movie import MovieSummary


class ReviewBase(AuthorSnapshot):
    """
    Base schema with shared review fields.

    Contains validation for:
    - Rating (must be 0-10)
    - Title and content (not blank)
    """

    movie_id: int = Field(
        ...,
        ge=1,
        le=MAX_ID,
        description="Movie id in the external metadata API",
        examples=[42, 550],
    )

    user_id: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Identity provider subject id of the author",
        examples=["u1"],
    )

    rating: float = Field(
        ...,
        ge=0,
        le=10,
        description="Rating from 0 to 10",
        examples=[8, 6.5],
    )

    title: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Review headline",
        examples=["Great", "Disappointing sequel"],
    )

    content: str = Field(
        ...,
        min_length=1,
        max_length=10000,
        description="Review text content",
    )

    @field_validator("title", "content")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        """Reject whitespace-only text and strip the rest."""
        if not v.strip():
            raise ValueError("must not be empty or whitespace")
        return v.strip()


class ReviewCreate(ReviewBase):
    """
    Schema for creating a new review.

    Example request body:
    {
        "movie_id": 42,
        "user_id": "u1",
        "rating": 8,
        "title": "Great",
        "content": "Loved every minute.",
        "displayname": "Jane Doe",
        "photoUrl": "https://example.com/jane.png"
    }
    """

    pass


class ReviewResponse(ReviewBase):
    """Schema for review responses."""

    review_id: int = Field(..., description="Unique review identifier")
    created_at: datetime = Field(..., description="When the review was created")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "review_id": 1,
                "movie_id": 42,
                "user_id": "u1",
                "rating": 8,
                "title": "Great",
                "content": "Loved every minute.",
                "displayname": "Jane Doe",
                "photoUrl": "https://example.com/jane.png",
                "created_at": "2025-01-15T10:30:00Z",
            }
        },
    )


class ReviewWithComments(ReviewResponse):
    """Review with its comments, oldest first."""

    comments: list[CommentResponse] = Field(
        default_factory=list,
        description="Comments on this review in posting order",
    )


class FeedReviewResponse(ReviewResponse):
    """
    Review enriched with the reviewed movie's title and poster.

    `movie` is None when the metadata API could not provide the movie.
    """

    movie: MovieSummary | None = Field(
        default=None,
        description="Summary of the reviewed movie",
    )


class MessageResponse(BaseModel):
    """Confirmation body returned by delete endpoints."""

    message: str = Field(..., examples=["Review deleted successfully"])


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""

    error: str = Field(..., examples=["Review with id 9999 not found"])
    details: list[dict] | None = Field(
        default=None,
        description="Field-level validation errors, when available",
    )
