#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample reviews and comments for development.

USAGE:
    # From the project root with the venv activated
    python scripts/seed_data.py

This script:
1. Connects to the database using app settings
2. Clears existing reviews and comments (comments go with their reviews)
3. Creates sample reviews for a few well-known TMDB movie ids
4. Adds a short comment thread to some of them

Rows are written through the review and comment stores, so the same
validation and error handling as the API applies.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.database import SessionLocal, create_tables
from app.models import Comment, Review
from app.schemas import CommentCreate, ReviewCreate
from app.services.comments import create_comment
from app.services.reviews import create_review

USERS = {
    "u-ana": {"displayname": "Ana Lima", "photoUrl": None},
    "u-ben": {"displayname": "Ben Carter", "photoUrl": None},
    "u-chloe": {"displayname": "Chloe Martin", "photoUrl": None},
}

# TMDB ids: 550 Fight Club, 603 The Matrix, 27205 Inception, 157336 Interstellar
REVIEWS = [
    {
        "movie_id": 550,
        "user_id": "u-ana",
        "rating": 9,
        "title": "Still sharp after all these years",
        "content": "The twist holds up and the cinematography is relentless.",
    },
    {
        "movie_id": 603,
        "user_id": "u-ben",
        "rating": 10,
        "title": "Changed action movies forever",
        "content": "Bullet time, a great cast and a story that rewards rewatching.",
    },
    {
        "movie_id": 27205,
        "user_id": "u-chloe",
        "rating": 8.5,
        "title": "Dreams within dreams",
        "content": "Ambitious and mostly successful. The score does a lot of work.",
    },
    {
        "movie_id": 157336,
        "user_id": "u-ana",
        "rating": 7,
        "title": "Beautiful but long",
        "content": "The docking scene alone is worth it, the third act drags.",
    },
    {
        "movie_id": 603,
        "user_id": "u-chloe",
        "rating": 6,
        "title": "Overrated?",
        "content": "Great visuals, but the philosophy is thinner than people claim.",
    },
]

THREADS = {
    1: [
        ("u-ben", "Agreed, the ending still gets me."),
        ("u-chloe", "Rewatched it last week, it aged well."),
    ],
    5: [
        ("u-ben", "Hard disagree, it's a classic."),
        ("u-ana", "I see your point about the sequels though."),
    ],
}


def clear_data(db: Session) -> None:
    """Clear all existing reviews and comments."""
    print("Clearing existing data...")
    db.execute(delete(Comment))
    db.execute(delete(Review))
    db.commit()
    print("Data cleared.")


def create_reviews(db: Session) -> list[Review]:
    """Create sample reviews."""
    print("Creating reviews...")
    reviews = []
    for data in REVIEWS:
        payload = ReviewCreate(**data, **USERS[data["user_id"]])
        reviews.append(create_review(db, payload))

    print(f"Created {len(reviews)} reviews.")
    return reviews


def create_comments(db: Session, reviews: list[Review]) -> list[Comment]:
    """Attach comment threads to some of the sample reviews (1-based positions)."""
    print("Creating comments...")
    comments = []
    for position, thread in THREADS.items():
        review = reviews[position - 1]
        for user_id, text in thread:
            payload = CommentCreate(
                user_id=user_id,
                review_id=review.review_id,
                comment=text,
                **USERS[user_id],
            )
            comments.append(create_comment(db, payload))

    print(f"Created {len(comments)} comments.")
    return comments


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        reviews = create_reviews(db)
        comments = create_comments(db, reviews)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Reviews: {len(reviews)}")
        print(f"  - Comments: {len(comments)}")
        print("\nAPI documentation at http://localhost:3000/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
