"""
Application Exceptions

Typed errors raised by the stores and services. Each error carries the
HTTP status code it maps to, so the exception handlers in main.py can
render a consistent `{"error": message}` body without the services
knowing anything about HTTP.

Error Taxonomy:
- ValidationError (400): malformed or out-of-range input
- NotFoundError (404): an operation references a nonexistent id
- StorageError (500): the database failed (connection, constraint)
- UpstreamError (502): the movie metadata API failed

Usage:
    from app.exceptions import NotFoundError

    raise NotFoundError("Review", review_id)
"""

from typing import Any

from fastapi import status


class AppError(Exception):
    """Base class for errors that map to an HTTP status code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(AppError):
    """Input rejected before reaching the database."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """A referenced record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, resource_id: Any) -> None:
        super().__init__(f"{resource} with id {resource_id} not found")
        self.resource = resource
        self.resource_id = resource_id


class StorageError(AppError):
    """
    The database operation failed.

    The original SQLAlchemy exception is kept on `__cause__` for logging;
    only `message` is returned to clients.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamError(AppError):
    """The movie metadata API returned an error or could not be reached."""

    status_code = status.HTTP_502_BAD_GATEWAY
