"""
Feed Router

The community feed: the newest reviews, each enriched with the reviewed
movie's title and poster from the movie metadata API.

Movies that can't be fetched leave `movie` as null instead of failing
the whole feed.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, Request

from app.config import get_settings
from app.dependencies import DbSession, FeedLimit
from app.schemas.review import ErrorResponse, FeedReviewResponse, ReviewResponse
from app.services import movies as movie_service
from app.services import reviews as review_store
from app.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/feed",
    tags=["Feed"],
    responses={500: {"model": ErrorResponse, "description": "Storage failure"}},
)


def load_recent_reviews(db: DbSession, limit: FeedLimit) -> List[ReviewResponse]:
    """
    Read the newest reviews.

    A plain def dependency, so FastAPI runs the blocking query in its
    threadpool while the route itself awaits TMDB on the event loop.
    """
    return [
        ReviewResponse.model_validate(r)
        for r in review_store.list_recent_reviews(db, limit)
    ]


RecentReviews = Annotated[List[ReviewResponse], Depends(load_recent_reviews)]


@router.get(
    "",
    response_model=List[FeedReviewResponse],
    summary="Recent reviews feed",
    description="Newest reviews first, with movie title and poster.",
)
@limiter.limit(settings.rate_limit_default)
async def review_feed(
    request: Request,
    reviews: RecentReviews,
) -> List[FeedReviewResponse]:
    movies = await movie_service.get_movie_summaries([r.movie_id for r in reviews])

    return [
        FeedReviewResponse(**review.model_dump(), movie=movies.get(review.movie_id))
        for review in reviews
    ]
