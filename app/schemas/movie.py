"""
Movie Pydantic Schemas

Normalized views of the external movie metadata API (TMDB).

Every upstream field is treated as optional: missing values fall back to
placeholders so the client never has to guard against absent keys.
"""

from pydantic import BaseModel, Field

PLACEHOLDER_TITLE = "Untitled"
PLACEHOLDER_OVERVIEW = "No overview available."


class MovieGenre(BaseModel):
    """A genre attached to a movie."""

    id: int
    name: str = ""


class ProductionCompany(BaseModel):
    """A production company credited on a movie."""

    id: int
    name: str = ""
    logo_path: str | None = None


class MovieSummary(BaseModel):
    """
    Minimal movie info used in listings, search results and the feed.
    """

    id: int = Field(..., description="Movie id in the metadata API")
    title: str = Field(default=PLACEHOLDER_TITLE)
    overview: str = Field(default=PLACEHOLDER_OVERVIEW)
    poster_path: str | None = Field(default=None)
    poster_url: str | None = Field(
        default=None,
        description="Absolute poster URL (w500), or null if the movie has no poster",
    )
    release_date: str | None = Field(default=None, examples=["1999-10-15"])
    vote_average: float = Field(default=0.0, ge=0)


class MovieDetail(MovieSummary):
    """Full movie info for the movie detail view."""

    tagline: str | None = None
    backdrop_path: str | None = None
    backdrop_url: str | None = None
    runtime: int = 0
    status: str | None = None
    original_language: str | None = None
    budget: int = 0
    revenue: int = 0
    genres: list[MovieGenre] = Field(default_factory=list)
    production_companies: list[ProductionCompany] = Field(default_factory=list)


class MovieSearchResponse(BaseModel):
    """One page of movie search results."""

    query: str
    page: int = Field(default=1, ge=1)
    total_pages: int = Field(default=0, ge=0)
    total_results: int = Field(default=0, ge=0)
    results: list[MovieSummary] = Field(default_factory=list)
