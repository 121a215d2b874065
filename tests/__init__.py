"""
Test Suite for Movie Reviews API

Test Organization:
- conftest.py: Shared fixtures (test database, client, sample data)
- test_reviews.py: Tests for /api/reviews endpoints
- test_comments.py: Tests for /api/comments endpoints
- test_stores.py: Tests for the review and comment stores
- test_movies.py: Tests for /api/movies and /api/feed (mocked TMDB)
- test_app.py: Error mapping, health check, cache helpers

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=app --cov-report=html

    # Run specific file
    pytest tests/test_reviews.py
"""
