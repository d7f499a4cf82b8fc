"""
Quillpost Backend — User SQLAlchemy Model
===========================================

What:  ORM model representing the `users` table.
Who:   Written by UserService on registration, read by GET /api/users/{id}.

Table Design:
    - userId: INTEGER PRIMARY KEY AUTOINCREMENT, so ids are never reused
    - username, email: required (NOT NULL), not unique
    - bio, profilePicture: optional free text / URL
    Column names match the JSON field names of the API.
"""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from quillpost.database import Base


class User(Base):
    """A registered author. Created once, never updated or deleted."""

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    user_id: Mapped[int] = mapped_column(
        "userId",
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    # URL string; never fetched or validated as a resource
    profile_picture: Mapped[Optional[str]] = mapped_column(
        "profilePicture",
        Text,
        nullable=True,
        default=None,
    )

    def __repr__(self) -> str:
        return f"<User(userId={self.user_id}, username='{self.username}')>"
