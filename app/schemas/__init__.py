"""
Pydantic Schemas Package

This package contains Pydantic models for request/response validation.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Validation: Input rules (rating range, blank text) live in one place
2. Wire format: JSON field names (e.g. photoUrl) stay stable while ORM
   attributes follow Python naming
3. Documentation: Schemas generate OpenAPI documentation

Schema Naming Convention:
- XxxCreate: Fields required when creating a new record
- XxxResponse: Fields returned in API responses
"""

from app.schemas.comment import (
    AuthorSnapshot,
    CommentCreate,
    CommentResponse,
)
from app.schemas.movie import (
    MovieDetail,
    MovieGenre,
    MovieSearchResponse,
    MovieSummary,
    ProductionCompany,
)
from app.schemas.review import (
    ErrorResponse,
    FeedReviewResponse,
    MessageResponse,
    ReviewCreate,
    ReviewResponse,
    ReviewWithComments,
)

__all__ = [
    # Comment schemas
    "AuthorSnapshot",
    "CommentCreate",
    "CommentResponse",
    # Movie schemas
    "MovieGenre",
    "ProductionCompany",
    "MovieSummary",
    "MovieDetail",
    "MovieSearchResponse",
    # Review schemas
    "ReviewCreate",
    "ReviewResponse",
    "ReviewWithComments",
    "FeedReviewResponse",
    # Shared
    "MessageResponse",
    "ErrorResponse",
]
