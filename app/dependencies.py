"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

Common Dependency Patterns used here:
- Database sessions (per-request)
- Feed size query parameter
- Bounded id path parameters
"""

from typing import Annotated

from fastapi import Depends, Path, Query
from sqlalchemy.orm import Session

from app.config import get_settings
from app.database import get_db
from app.schemas.comment import MAX_ID

settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def list_reviews(db: Session = Depends(get_db)):
#
# You can write:
#   def list_reviews(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


def get_feed_limit(
    limit: int | None = Query(
        default=None,
        ge=1,
        le=100,
        description="Number of reviews to return (max 100)",
    ),
) -> int:
    """Resolve the feed size, falling back to the configured default."""
    return limit if limit is not None else settings.feed_default_limit


FeedLimit = Annotated[int, Depends(get_feed_limit)]


# =============================================================================
# Path Parameters
# =============================================================================
# Ids outside the INTEGER column range are rejected with 400 before any query.

ReviewId = Annotated[int, Path(ge=1, le=MAX_ID, description="Review id")]
CommentId = Annotated[int, Path(ge=1, le=MAX_ID, description="Comment id")]
MovieId = Annotated[
    int, Path(ge=1, le=MAX_ID, description="Movie id in the external metadata API")
]
