"""
Movies Router

Read-only proxy over the external movie metadata API.

Endpoints:
- GET /movies/trending - Today's trending movies
- GET /movies/popular - Popular movies
- GET /movies/search?query=... - Search movies by title
- GET /movies/{movie_id} - Movie details

Fixed paths are declared before /movies/{movie_id} so they match first.
"""

from typing import List

from fastapi import APIRouter, Query, Request

from app.config import get_settings
from app.dependencies import MovieId
from app.schemas.movie import MovieDetail, MovieSearchResponse, MovieSummary
from app.schemas.review import ErrorResponse
from app.services import movies as movie_service
from app.services.rate_limiter import limiter

settings = get_settings()

router = APIRouter(
    prefix="/movies",
    tags=["Movies"],
    responses={
        502: {"model": ErrorResponse, "description": "Movie metadata API failure"},
    },
)


@router.get(
    "/trending",
    response_model=List[MovieSummary],
    summary="Trending movies",
    description="Movies trending today.",
)
@limiter.limit(settings.rate_limit_default)
async def trending_movies(request: Request) -> List[MovieSummary]:
    return await movie_service.get_trending_movies()


@router.get(
    "/popular",
    response_model=List[MovieSummary],
    summary="Popular movies",
)
@limiter.limit(settings.rate_limit_default)
async def popular_movies(
    request: Request,
    page: int = Query(default=1, ge=1, le=500, description="Result page"),
) -> List[MovieSummary]:
    return await movie_service.get_popular_movies(page)


@router.get(
    "/search",
    response_model=MovieSearchResponse,
    summary="Search movies",
    description="Free-text search over movie titles.",
)
@limiter.limit(settings.rate_limit_default)
async def search_movies(
    request: Request,
    query: str = Query(..., min_length=1, max_length=200, description="Search text"),
    page: int = Query(default=1, ge=1, le=500, description="Result page"),
) -> MovieSearchResponse:
    """Search movies; the query is trimmed before it is sent upstream."""
    return await movie_service.search_movies(query.strip(), page)


@router.get(
    "/{movie_id}",
    response_model=MovieDetail,
    summary="Movie details",
    responses={404: {"model": ErrorResponse, "description": "Movie not found"}},
)
@limiter.limit(settings.rate_limit_default)
async def get_movie(request: Request, movie_id: MovieId) -> MovieDetail:
    return await movie_service.get_movie(movie_id)
