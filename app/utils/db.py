"""
Database helpers shared by the stores.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(db: Session, action: str) -> Iterator[None]:
    """
    Translate SQLAlchemy failures inside the block into StorageError.

    The session is rolled back first, so nothing written inside the block
    stays visible. The driver message is logged, not exposed.

    Usage:
        with storage_errors(db, "create review"):
            db.add(review)
            db.commit()

    Raises:
        StorageError: If any SQLAlchemyError is raised inside the block
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(f"Database error during {action}: {exc}")
        raise StorageError(f"Failed to {action}") from exc
