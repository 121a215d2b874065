"""
Movie Reviews API Application Package

Backend for a movie-review site: reviews and comments stored in a
relational database, plus a proxy to the external movie metadata API.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy database connection and session management
- exceptions.py: Typed application errors and their HTTP status codes
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: Stores, movie metadata client, caching, rate limiting
- utils/: Helper functions
"""

__version__ = "1.0.0"
