"""
Services Package

This package contains business logic services that are:
- Separate from HTTP handling (routers)
- Reusable across different parts of the application
- Easier to test in isolation

Current services:
- reviews.py: Review store (create, list, delete with cascade)
- comments.py: Comment store (create, list, delete)
- movies.py: Movie metadata API client (TMDB) with caching
- cache.py: Redis caching utilities
- rate_limiter.py: Rate limiting with slowapi and Redis backend
"""
