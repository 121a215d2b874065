"""
API Routers Package

This package contains FastAPI routers that handle API endpoints.

Router Structure:
- reviews.py: /api/reviews/* endpoints
- comments.py: /api/comments/* endpoints
- movies.py: /api/movies/* endpoints (movie metadata proxy)
- feed.py: /api/feed endpoint

Each router is imported and registered in main.py.
"""

from app.routers.comments import router as comments_router
from app.routers.feed import router as feed_router
from app.routers.movies import router as movies_router
from app.routers.reviews import router as reviews_router

__all__ = [
    "reviews_router",
    "comments_router",
    "movies_router",
    "feed_router",
]
