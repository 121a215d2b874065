"""
Review Model

Represents a user's review of a movie, including rating and text content.

Business Rules:
- Rating must be 0-10 (checked by the request schema and a DB constraint)
- movie_id refers to the external movie metadata API; not a local FK
- Author display name and photo are a snapshot taken at submission time
- Reviews are never updated; deleting one deletes its comments
"""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Review(Base):
    """
    Review model for movie reviews.

    Attributes:
        review_id: Primary key
        movie_id: External movie metadata id
        user_id: Identity provider subject id of the author
        rating: 0-10 rating
        title: Review headline
        content: Review text content
        displayname: Author display name at submission time
        photo_url: Author photo URL at submission time
        created_at: When the review was created
    """

    __tablename__ = "review"

    review_id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    movie_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Movie id in the external metadata API",
    )
    user_id: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        index=True,
        comment="Identity provider subject id",
    )

    # Review content
    rating: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="Rating from 0-10",
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Author snapshot
    displayname: Mapped[str | None] = mapped_column(String(200), nullable=True)
    photo_url: Mapped[str | None] = mapped_column("photoUrl", Text, nullable=True)

    # Set by the database's NOW() so rows inserted outside the ORM get one too
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    # Comments are deleted with their review, both by the ORM and the FK
    comments = relationship(
        "Comment",
        back_populates="review",
        cascade="all, delete-orphan",
        order_by="Comment.comment_id",
    )

    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 10", name="ck_review_rating_range"),
    )

    def __repr__(self) -> str:
        return f"<Review(review_id={self.review_id}, movie_id={self.movie_id}, user_id={self.user_id!r}, rating={self.rating})>"
