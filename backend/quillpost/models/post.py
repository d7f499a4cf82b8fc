"""
Quillpost Backend — Post SQLAlchemy Model
===========================================

What:  ORM model representing the `posts` table.
Who:   Written by PostService, read by GET /api/posts/{id}.

Tags are accepted by the API but have no column: they are not persisted.
"""

from datetime import datetime

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from quillpost.database import Base, UTCDateTime, utcnow


class Post(Base):
    """
    A published blog post.

    Lifecycle:
        Created by POST /api/posts with `dateCreated` set by the server,
        then only ever read. There is no update or delete path.
    """

    __tablename__ = "posts"
    __table_args__ = {"sqlite_autoincrement": True}

    post_id: Mapped[int] = mapped_column(
        "postId",
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)

    # Assigned once at insert (UTC), never mutated
    date_created: Mapped[datetime] = mapped_column(
        "dateCreated",
        UTCDateTime,
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Post(postId={self.post_id}, title='{self.title}')>"
