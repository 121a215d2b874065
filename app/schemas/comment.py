"""
Comment Pydantic Schemas

Schemas for comments posted on reviews.

Schemas:
- AuthorSnapshot: the author's display name and photo at write time
- CommentCreate: Create a new comment
- CommentResponse: Comment data for API responses
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

# Largest value an INTEGER id column can hold
MAX_ID = 2_147_483_647


class AuthorSnapshot(BaseModel):
    """
    Denormalized author profile copied from the identity provider.

    The wire name of the photo field is `photoUrl`; both `photoUrl` and
    `photo_url` are accepted on input (the latter is the ORM attribute).
    """

    displayname: str | None = Field(
        default=None,
        max_length=200,
        description="Author display name at submission time",
        examples=["Jane Doe"],
    )

    photo_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("photoUrl", "photo_url"),
        serialization_alias="photoUrl",
        description="Author photo URL at submission time",
    )

    model_config = ConfigDict(populate_by_name=True)


class CommentCreate(AuthorSnapshot):
    """
    Schema for creating a comment.

    Example request body:
    {
        "user_id": "u2",
        "review_id": 1,
        "comment": "Totally agree!",
        "displayname": "John",
        "photoUrl": null
    }
    """

    user_id: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Identity provider subject id of the author",
    )

    review_id: int = Field(
        ...,
        ge=1,
        le=MAX_ID,
        description="Review this comment replies to",
    )

    comment: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="Comment text",
        examples=["Totally agree!"],
    )

    @field_validator("comment")
    @classmethod
    def comment_must_not_be_blank(cls, v: str) -> str:
        """Reject whitespace-only comments."""
        if not v.strip():
            raise ValueError("Comment cannot be empty or whitespace")
        return v.strip()


class CommentResponse(AuthorSnapshot):
    """Schema for comment responses."""

    comment_id: int = Field(..., description="Unique comment identifier")
    review_id: int = Field(..., description="Review this comment replies to")
    user_id: str = Field(..., description="Author id")
    comment: str = Field(..., description="Comment text")
    created_at: datetime = Field(..., description="When the comment was posted")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
