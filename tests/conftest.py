"""
pytest Fixtures for Movie Reviews API Tests

This file contains shared fixtures used across all test files.

For database tests, we use:
- session scope for engine (expensive to create)
- function scope for sessions (isolation between tests)
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app.
# Settings are cached on first import.
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["CACHE_ENABLED"] = "false"
os.environ["TMDB_API_TOKEN"] = "test-tmdb-token"

from collections.abc import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db, install_sqlite_foreign_keys
from app.main import app
from app.models import Comment, Review

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# SQLite in-memory: fast, isolated, no external database needed.
# Foreign keys are switched on so ON DELETE CASCADE behaves like PostgreSQL.


@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the connection alive for the entire session.
    Without it, SQLite in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    install_sqlite_foreign_keys(engine)

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is wrapped in a transaction that's rolled back,
    ensuring test isolation without needing to recreate tables.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency to use our test session.
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def broken_db() -> MagicMock:
    """
    A session whose every query fails like a dropped database connection.

    Used to check that storage failures surface as StorageError / HTTP 500.
    """
    from sqlalchemy.exc import OperationalError

    session = MagicMock(spec=Session)
    failure = OperationalError("SELECT 1", {}, Exception("connection refused"))
    session.execute.side_effect = failure
    session.get.side_effect = failure
    session.commit.side_effect = failure
    return session


@pytest.fixture
def broken_client(broken_db: MagicMock) -> Generator[TestClient, None, None]:
    """Test client whose database is unreachable."""

    def override_get_db():
        yield broken_db

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def review_payload() -> dict:
    """A valid review submission as the web client sends it."""
    return {
        "movie_id": 42,
        "user_id": "u1",
        "rating": 8,
        "title": "Great",
        "content": "A thoughtful, well-paced film.",
        "displayname": "Test User",
        "photoUrl": "https://example.com/u1.png",
    }


@pytest.fixture
def sample_review(db_session: Session) -> Review:
    """Create a sample review for testing."""
    review = Review(
        movie_id=42,
        user_id="u1",
        rating=8,
        title="Great",
        content="A thoughtful, well-paced film.",
        displayname="Test User",
        photo_url="https://example.com/u1.png",
    )
    db_session.add(review)
    db_session.commit()
    db_session.refresh(review)
    return review


@pytest.fixture
def second_review(db_session: Session) -> Review:
    """A review by another user on another movie."""
    review = Review(
        movie_id=550,
        user_id="u2",
        rating=6.5,
        title="Decent",
        content="Good ideas, uneven execution.",
        displayname="Second User",
    )
    db_session.add(review)
    db_session.commit()
    db_session.refresh(review)
    return review


@pytest.fixture
def sample_comments(db_session: Session, sample_review: Review) -> list[Comment]:
    """Create two comments on the sample review, in posting order."""
    comments = []
    for user_id, text in [("u2", "Agreed!"), ("u3", "Not for me.")]:
        comment = Comment(
            review_id=sample_review.review_id,
            user_id=user_id,
            comment=text,
            displayname=user_id.upper(),
        )
        db_session.add(comment)
        db_session.commit()
        db_session.refresh(comment)
        comments.append(comment)
    return comments
