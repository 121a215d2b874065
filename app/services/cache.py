"""
Movie Metadata Cache

Read-through Redis cache in front of the TMDB client. Every lookup the
movie service makes (details, search, trending, popular) goes through
cached_movie_lookup(), which stores the already-normalized Pydantic
result for cache_ttl_movies seconds.

Redis is optional:
- CACHE_ENABLED=false turns the cache into a pass-through
- An unreachable Redis, or an entry that no longer parses against the
  current schema, is treated as a miss
- Errors raised while loading from TMDB propagate and are never cached
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

import redis
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaMismatch
from redis.exceptions import RedisError

from app.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

KEY_PREFIX = "tmdb"

_redis_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis | None:
    """
    Return the shared Redis client, connecting on first use.

    Returns None when caching is disabled or Redis can't be reached; the
    next call tries to connect again.
    """
    global _redis_client

    settings = get_settings()
    if not settings.cache_enabled:
        return None

    if _redis_client is None:
        client = redis.from_url(
            settings.redis_url,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        try:
            client.ping()
        except RedisError as e:
            logger.warning(f"Redis unavailable at {settings.redis_url}: {e}")
            return None
        _redis_client = client
        logger.info("Connected to Redis for movie metadata caching")

    return _redis_client


def close_redis_connection() -> None:
    """Close the Redis connection on shutdown."""
    global _redis_client
    if _redis_client is not None:
        _redis_client.close()
        _redis_client = None
        logger.info("Redis connection closed")


def movie_cache_key(endpoint: str, **params) -> str:
    """
    Build the cache key for one TMDB request.

    Params are sorted and None values dropped, so equivalent requests
    share a key:

        movie_cache_key("search", query="matrix", page=1)
            -> "tmdb:search:page=1:query=matrix"
    """
    parts = [KEY_PREFIX, endpoint]
    parts.extend(
        f"{name}={value}"
        for name, value in sorted(params.items())
        if value is not None
    )
    return ":".join(parts)


async def cached_movie_lookup(
    key: str,
    adapter: TypeAdapter[T],
    loader: Callable[[], Awaitable[T]],
) -> T:
    """
    Return the cached value for `key`, or await `loader()` and cache it.

    Args:
        key: Cache key from movie_cache_key()
        adapter: TypeAdapter for the value, used to (de)serialize JSON
        loader: Coroutine factory that fetches and normalizes from TMDB

    Raises:
        Whatever loader() raises (NotFoundError, UpstreamError)
    """
    client = get_redis_client()

    if client is not None:
        try:
            raw = client.get(key)
        except RedisError as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            raw = None

        if raw is not None:
            try:
                value = adapter.validate_json(raw)
            except SchemaMismatch:
                logger.warning(f"Ignoring cache entry {key}: does not match schema")
            else:
                logger.debug(f"Cache HIT: {key}")
                return value

    value = await loader()

    if client is not None:
        ttl = get_settings().cache_ttl_movies
        try:
            client.setex(key, ttl, adapter.dump_json(value))
            logger.debug(f"Cache SET: {key} (TTL: {ttl}s)")
        except RedisError as e:
            logger.warning(f"Cache write failed for {key}: {e}")

    return value


def get_cache_stats() -> dict:
    """Cache status for the health endpoint."""
    if not get_settings().cache_enabled:
        return {"status": "disabled"}

    client = get_redis_client()
    if client is None:
        return {"status": "disconnected"}

    try:
        stats = client.info("stats")
        cached_lookups = sum(1 for _ in client.scan_iter(match=f"{KEY_PREFIX}:*", count=500))
    except RedisError:
        return {"status": "error"}

    return {
        "status": "connected",
        "hits": stats.get("keyspace_hits", 0),
        "misses": stats.get("keyspace_misses", 0),
        "cached_lookups": cached_lookups,
    }
