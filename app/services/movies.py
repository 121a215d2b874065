"""
Movie Metadata Service

Async client for the external movie metadata API (TMDB v3).

This service:
1. Calls TMDB with the configured Bearer token
2. Normalizes responses (every field optional, placeholders for gaps)
3. Caches normalized results in Redis (see app.services.cache)
4. Maps failures onto the application's error types:
   - TMDB 404 for a movie id -> NotFoundError
   - Other non-200 responses, timeouts, connection errors -> UpstreamError

Endpoints used:
- GET /movie/{id}            movie details
- GET /search/movie          free-text search (paginated)
- GET /trending/movie/day    today's trending movies
- GET /discover/movie        popular movies
"""

import asyncio
import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from app.config import get_settings
from app.exceptions import AppError, NotFoundError, UpstreamError
from app.schemas.movie import (
    PLACEHOLDER_OVERVIEW,
    PLACEHOLDER_TITLE,
    MovieDetail,
    MovieGenre,
    MovieSearchResponse,
    MovieSummary,
    ProductionCompany,
)
from app.services.cache import cached_movie_lookup, movie_cache_key

logger = logging.getLogger(__name__)
settings = get_settings()

POSTER_SIZE = "w500"
BACKDROP_SIZE = "original"


# =============================================================================
# HTTP
# =============================================================================


async def _tmdb_get(
    path: str,
    params: dict[str, Any] | None = None,
    *,
    missing_movie_id: int | None = None,
) -> dict:
    """
    GET a TMDB endpoint and return the decoded JSON body.

    Args:
        path: Path relative to tmdb_base_url, e.g. "/movie/550"
        params: Extra query parameters (language is always added)
        missing_movie_id: Movie the path refers to; a 404 for it becomes
            NotFoundError. Listing endpoints leave it unset, and a 404
            from them is an upstream failure.

    Raises:
        NotFoundError: If TMDB answers 404 for missing_movie_id
        UpstreamError: If TMDB is not configured, unreachable, or errors
    """
    if not settings.tmdb_configured:
        raise UpstreamError("Movie metadata API is not configured")

    query = {"language": settings.tmdb_language}
    if params:
        query.update(params)

    try:
        async with httpx.AsyncClient(
            base_url=settings.tmdb_base_url,
            headers={
                "Accept": "application/json",
                "Authorization": f"Bearer {settings.tmdb_api_token}",
            },
            timeout=settings.tmdb_timeout,
        ) as client:
            response = await client.get(path, params=query)
    except httpx.HTTPError as e:
        logger.error(f"TMDB request to {path} failed: {e}")
        raise UpstreamError("Movie metadata API is unreachable") from e

    if response.status_code == 404 and missing_movie_id is not None:
        raise NotFoundError("Movie", missing_movie_id)

    if response.status_code != 200:
        logger.error(f"TMDB {path} returned {response.status_code}: {response.text}")
        raise UpstreamError(
            f"Movie metadata API returned status {response.status_code}"
        )

    return response.json()


# =============================================================================
# Normalization
# =============================================================================


def image_url(path: str | None, size: str) -> str | None:
    """Build an absolute TMDB image URL, or None if there is no image."""
    if not path:
        return None
    return f"{settings.tmdb_image_base_url}/{size}{path}"


def to_movie_summary(data: dict) -> MovieSummary:
    """Normalize a TMDB movie object into a MovieSummary."""
    poster_path = data.get("poster_path") or None
    return MovieSummary(
        id=data["id"],
        title=data.get("title") or PLACEHOLDER_TITLE,
        overview=data.get("overview") or PLACEHOLDER_OVERVIEW,
        poster_path=poster_path,
        poster_url=image_url(poster_path, POSTER_SIZE),
        release_date=data.get("release_date") or None,
        vote_average=data.get("vote_average") or 0.0,
    )


def to_movie_detail(data: dict) -> MovieDetail:
    """Normalize a TMDB movie details object into a MovieDetail."""
    summary = to_movie_summary(data)
    backdrop_path = data.get("backdrop_path") or None
    return MovieDetail(
        **summary.model_dump(),
        tagline=data.get("tagline") or None,
        backdrop_path=backdrop_path,
        backdrop_url=image_url(backdrop_path, BACKDROP_SIZE),
        runtime=data.get("runtime") or 0,
        status=data.get("status"),
        original_language=data.get("original_language"),
        budget=data.get("budget") or 0,
        revenue=data.get("revenue") or 0,
        genres=[MovieGenre(**g) for g in data.get("genres") or []],
        production_companies=[
            ProductionCompany(**c) for c in data.get("production_companies") or []
        ],
    )


def _to_summaries(payload: dict) -> list[MovieSummary]:
    return [to_movie_summary(item) for item in payload.get("results") or []]


# =============================================================================
# Public API
# =============================================================================

_movie_detail = TypeAdapter(MovieDetail)
_movie_list = TypeAdapter(list[MovieSummary])
_search_result = TypeAdapter(MovieSearchResponse)


async def get_movie(movie_id: int) -> MovieDetail:
    """
    Get full details for one movie.

    Raises:
        NotFoundError: If the movie does not exist upstream
        UpstreamError: If the metadata API fails
    """

    async def load() -> MovieDetail:
        return to_movie_detail(
            await _tmdb_get(f"/movie/{movie_id}", missing_movie_id=movie_id)
        )

    return await cached_movie_lookup(
        movie_cache_key("movie", movie_id=movie_id), _movie_detail, load
    )


async def search_movies(query: str, page: int = 1) -> MovieSearchResponse:
    """Search movies by free-text title query."""

    async def load() -> MovieSearchResponse:
        payload = await _tmdb_get(
            "/search/movie",
            {"query": query, "page": page, "include_adult": "false"},
        )
        return MovieSearchResponse(
            query=query,
            page=payload.get("page") or page,
            total_pages=payload.get("total_pages") or 0,
            total_results=payload.get("total_results") or 0,
            results=_to_summaries(payload),
        )

    return await cached_movie_lookup(
        movie_cache_key("search", query=query.lower(), page=page),
        _search_result,
        load,
    )


async def get_trending_movies() -> list[MovieSummary]:
    """Get today's trending movies."""

    async def load() -> list[MovieSummary]:
        return _to_summaries(await _tmdb_get("/trending/movie/day"))

    return await cached_movie_lookup(movie_cache_key("trending"), _movie_list, load)


async def get_popular_movies(page: int = 1) -> list[MovieSummary]:
    """Get popular movies (discover sorted by popularity)."""

    async def load() -> list[MovieSummary]:
        payload = await _tmdb_get(
            "/discover/movie",
            {
                "include_adult": "false",
                "include_video": "false",
                "sort_by": "popularity.desc",
                "page": page,
            },
        )
        return _to_summaries(payload)

    return await cached_movie_lookup(
        movie_cache_key("popular", page=page), _movie_list, load
    )


async def get_movie_summaries(movie_ids: list[int]) -> dict[int, MovieSummary | None]:
    """
    Look up several movies concurrently for the review feed.

    A movie that cannot be fetched maps to None so one bad id doesn't
    fail the whole feed.

    Returns:
        Mapping of movie id to summary (or None)
    """
    unique_ids = list(dict.fromkeys(movie_ids))

    async def fetch(movie_id: int) -> MovieSummary | None:
        try:
            return await get_movie(movie_id)
        except AppError as e:
            logger.warning(f"Movie {movie_id} unavailable for feed: {e}")
            return None

    results = await asyncio.gather(*(fetch(movie_id) for movie_id in unique_ids))
    summaries: dict[int, MovieSummary | None] = {}
    for movie_id, movie in zip(unique_ids, results):
        summaries[movie_id] = (
            MovieSummary(**movie.model_dump(include=set(MovieSummary.model_fields)))
            if movie is not None
            else None
        )
    return summaries
