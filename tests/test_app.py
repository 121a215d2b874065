"""
Tests for application wiring: error mapping, health check and helpers.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import status
from pydantic import TypeAdapter
from redis.exceptions import RedisError

from app.config import get_settings
from app.exceptions import UpstreamError
from app.main import describe_validation_errors
from app.schemas.movie import MovieSummary
from app.services.cache import cached_movie_lookup, get_cache_stats, movie_cache_key
from app.services.rate_limiter import get_client_ip


class TestErrorMapping:
    """Every failure kind maps to its own status with an {"error": ...} body."""

    def test_storage_failure_on_list(self, broken_client):
        """Test an unreachable database gives 500 without leaking driver details."""
        response = broken_client.get("/api/reviews")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Failed to list reviews"}

    def test_storage_failure_on_create(self, broken_client, review_payload):
        """Test a failed insert gives 500."""
        response = broken_client.post("/api/reviews", json=review_payload)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"error": "Failed to create review"}

    def test_storage_failure_on_delete(self, broken_client):
        """Test a failed lookup during delete gives 500, not 404."""
        response = broken_client.delete("/api/comments/1")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert "connection refused" not in response.text

    def test_unknown_route(self, client):
        """Test routing errors use the same error shape."""
        response = client.get("/api/nothing-here")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "error" in response.json()

    def test_method_not_allowed(self, client):
        """Test an unsupported method is a 405 with an error body."""
        response = client.put("/api/reviews", json={})

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert "error" in response.json()

    def test_malformed_json(self, client):
        """Test an unparseable body is a 400."""
        response = client.post(
            "/api/comments",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_describe_validation_errors(self):
        """Test Pydantic errors are summarized as location: message."""
        errors = [
            {"loc": ("body", "rating"), "msg": "Input should be less than or equal to 10"},
            {"loc": ("body", "title"), "msg": "Field required"},
        ]

        assert describe_validation_errors(errors) == (
            "body.rating: Input should be less than or equal to 10; "
            "body.title: Field required"
        )


class TestHealth:
    """Tests for /health and /."""

    def test_health_check(self, client):
        """Test the health endpoint reports status and configuration."""
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["cache"] == {"status": "disabled"}
        assert data["rate_limiting"]["enabled"] is False
        assert data["movie_metadata"]["configured"] is True

    def test_root(self, client):
        """Test the root endpoint points at the docs."""
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["docs"] == "/docs"


class TestMovieCache:
    """Tests for the read-through cache in app.services.cache."""

    adapter = TypeAdapter(list[MovieSummary])
    movies = [MovieSummary(id=1, title="One", overview="First.")]

    def _lookup(self, redis_client, loader):
        with patch("app.services.cache.get_redis_client", return_value=redis_client):
            return asyncio.run(
                cached_movie_lookup("tmdb:trending", self.adapter, loader)
            )

    def test_movie_cache_key(self):
        assert movie_cache_key("movie", movie_id=550) == "tmdb:movie:movie_id=550"
        assert (
            movie_cache_key("search", query="matrix", page=1)
            == "tmdb:search:page=1:query=matrix"
        )

    def test_movie_cache_key_skips_none(self):
        assert movie_cache_key("popular", page=None) == "tmdb:popular"

    def test_hit_skips_loader(self):
        """Test a cached entry is returned without calling TMDB."""
        redis_client = MagicMock()
        redis_client.get.return_value = self.adapter.dump_json(self.movies)
        loader = AsyncMock()

        assert self._lookup(redis_client, loader) == self.movies
        loader.assert_not_awaited()
        redis_client.setex.assert_not_called()

    def test_miss_loads_and_stores(self):
        """Test a miss awaits the loader and caches its result with the movie TTL."""
        redis_client = MagicMock()
        redis_client.get.return_value = None
        loader = AsyncMock(return_value=self.movies)

        assert self._lookup(redis_client, loader) == self.movies
        loader.assert_awaited_once()
        key, ttl, raw = redis_client.setex.call_args.args
        assert key == "tmdb:trending"
        assert ttl == get_settings().cache_ttl_movies
        assert self.adapter.validate_json(raw) == self.movies

    def test_redis_error_is_a_miss(self):
        """Test a Redis outage falls through to TMDB."""
        redis_client = MagicMock()
        redis_client.get.side_effect = RedisError("connection reset")
        redis_client.setex.side_effect = RedisError("connection reset")
        loader = AsyncMock(return_value=self.movies)

        assert self._lookup(redis_client, loader) == self.movies
        loader.assert_awaited_once()

    def test_mismatched_entry_is_a_miss(self):
        """Test an entry written by an older schema is reloaded."""
        redis_client = MagicMock()
        redis_client.get.return_value = b'{"unexpected": true}'
        loader = AsyncMock(return_value=self.movies)

        assert self._lookup(redis_client, loader) == self.movies
        loader.assert_awaited_once()

    def test_loader_error_not_cached(self):
        """Test upstream failures propagate and leave the cache untouched."""
        redis_client = MagicMock()
        redis_client.get.return_value = None
        loader = AsyncMock(side_effect=UpstreamError("Movie metadata API is unreachable"))

        with pytest.raises(UpstreamError):
            self._lookup(redis_client, loader)
        redis_client.setex.assert_not_called()

    def test_cache_disabled_passes_through(self):
        """Test the cache is a pass-through when disabled."""
        loader = AsyncMock(return_value=self.movies)

        result = asyncio.run(cached_movie_lookup("tmdb:trending", self.adapter, loader))

        assert result == self.movies
        loader.assert_awaited_once()
        assert get_cache_stats() == {"status": "disabled"}


class TestClientIp:
    """Tests for the rate limiter's client key."""

    def _request(self, headers: dict, host: str = "10.0.0.1") -> MagicMock:
        request = MagicMock()
        request.headers = headers
        request.client.host = host
        return request

    def test_forwarded_for_first_hop(self):
        request = self._request({"X-Forwarded-For": "203.0.113.7, 10.0.0.2"})
        assert get_client_ip(request) == "203.0.113.7"

    def test_real_ip(self):
        request = self._request({"X-Real-IP": " 198.51.100.4 "})
        assert get_client_ip(request) == "198.51.100.4"

    def test_direct_connection(self):
        request = self._request({})
        assert get_client_ip(request) == "10.0.0.1"
