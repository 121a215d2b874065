"""
Comment Model

A user's text reply attached to a review.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Comment(Base):
    """
    Comment model.

    Attributes:
        comment_id: Primary key
        review_id: Foreign key to review table (cascade on delete)
        user_id: Identity provider subject id of the author
        comment: Comment text
        displayname: Author display name at submission time
        photo_url: Author photo URL at submission time
        created_at: When the comment was created
    """

    __tablename__ = "comment"

    comment_id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    review_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("review.review_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)

    comment: Mapped[str] = mapped_column(Text, nullable=False)

    displayname: Mapped[str | None] = mapped_column(String(200), nullable=True)
    photo_url: Mapped[str | None] = mapped_column("photoUrl", Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    review = relationship("Review", back_populates="comments")

    def __repr__(self) -> str:
        return f"<Comment(comment_id={self.comment_id}, review_id={self.review_id}, user_id={self.user_id!r})>"
