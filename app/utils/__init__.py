"""
Utilities Package

This package contains helper functions used across the application.

- db.py: storage_errors() context manager mapping SQLAlchemy errors
  to StorageError
"""

from app.utils.db import storage_errors

__all__ = ["storage_errors"]
