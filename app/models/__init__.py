"""
SQLAlchemy Models Package

This package contains all database models for the Movie Reviews API.

Model Relationships:
- Review <-> Comment: One-to-Many (a review has many comments,
                      comments are deleted with their review)

Import all models here to:
1. Make them available as: from app.models import Review, Comment
2. Ensure Alembic discovers them for migrations
"""

from app.models.review import Review
from app.models.comment import Comment

__all__ = [
    "Review",
    "Comment",
]
