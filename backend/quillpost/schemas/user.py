"""
Quillpost Backend — User Schemas
==================================

What:  Registration request body and user response payload.

Validation:
    username: required, non-empty
    email: required, must look like an address (local@domain)
    bio, profilePicture: optional, stored as given
    Violations are answered with 422 before anything reaches storage.
"""

from typing import Optional

from pydantic import BaseModel, Field

from quillpost.schemas.common import CAMEL_CASE

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class UserCreate(BaseModel):
    """Body of POST /api/users."""
    username: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255, pattern=EMAIL_PATTERN)
    bio: Optional[str] = Field(default=None)
    profile_picture: Optional[str] = Field(
        default=None,
        description="URL of the user's avatar",
    )

    model_config = CAMEL_CASE


class UserResponse(BaseModel):
    """
    Full user record.

    Who:   Returned by POST /api/users (201) and GET /api/users/{userId} (200).
    """
    user_id: int = Field(description="Generated user identifier")
    username: str
    email: str
    bio: Optional[str] = None
    profile_picture: Optional[str] = None

    model_config = CAMEL_CASE
