"""
Quillpost Backend — User Service
==================================

What:  Registration and lookup of users.
How:   Wraps the request's session in a `Storage` and converts storage
       outcomes into responses or typed exceptions.
Who:   Called by the /api/users route handlers.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from quillpost.exceptions import NotFoundError
from quillpost.models import User
from quillpost.schemas.user import UserCreate, UserResponse
from quillpost.storage import Storage

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for users.

    Error Handling Strategy:
        ConstraintViolationError and DatabaseError come from Storage and
        propagate untouched. A missing row becomes NotFoundError here.
    """

    async def create_user(self, db: AsyncSession, payload: UserCreate) -> UserResponse:
        """
        Register a user with one INSERT.

        Returns:
            UserResponse with the generated id and the submitted fields
            (absent bio/profilePicture echoed as null)

        Raises:
            ConstraintViolationError: The store rejected the row (→ 422)
            DatabaseError: Storage failure (→ 500)
        """
        fields = {
            "username": payload.username,
            "email": payload.email,
            "bio": payload.bio,
            "profile_picture": payload.profile_picture,
        }
        user_id = await Storage(db).insert(User, **fields)
        logger.info("User %d registered", user_id)
        return UserResponse(user_id=user_id, **fields)

    async def get_user(self, db: AsyncSession, user_id: int) -> UserResponse:
        """
        Fetch one user by id.

        Raises:
            NotFoundError: No user has this id (→ 404)
            DatabaseError: The lookup failed (→ 500)
        """
        user = await Storage(db).get_by_id(User, user_id)
        if user is None:
            raise NotFoundError(resource="User", resource_id=user_id)
        return UserResponse.model_validate(user)


user_service = UserService()
