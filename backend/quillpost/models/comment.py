"""
Quillpost Backend — Comment SQLAlchemy Model
==============================================

What:  ORM model representing the `comments` table.
Who:   Written by CommentService, listed by GET /api/posts/{id}/comments.

Referential integrity:
    `postId` is a plain indexed integer, not a FOREIGN KEY. Whether a comment
    may reference a missing post is decided by the service
    (`REQUIRE_EXISTING_POST`), not by the schema.

Index on postId:
    Serves the only read pattern, "comments of post N in insertion order":
    WHERE postId = :id ORDER BY commentId
"""

from datetime import datetime

from sqlalchemy import Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from quillpost.database import Base, UTCDateTime, utcnow


class Comment(Base):
    """A comment left under a post."""

    __tablename__ = "comments"

    comment_id: Mapped[int] = mapped_column(
        "commentId",
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    post_id: Mapped[int] = mapped_column("postId", Integer, nullable=False)
    comment_text: Mapped[str] = mapped_column("commentText", Text, nullable=False)
    date_posted: Mapped[datetime] = mapped_column(
        "datePosted",
        UTCDateTime,
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("idx_comments_post_id", "postId"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Comment(commentId={self.comment_id}, postId={self.post_id})>"
