"""
Quillpost Backend — User Route Handlers
=========================================

What:  POST /api/users (register) and GET /api/users/{userId} (detail).
Who:   Called by the web client's profile pages.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from quillpost.database import get_db_session
from quillpost.schemas.common import ErrorResponse
from quillpost.schemas.user import UserCreate, UserResponse
from quillpost.services.user_service import user_service

router = APIRouter(prefix="/api", tags=["Users"])


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "User registered", "model": UserResponse},
        422: {"description": "Invalid input or constraint violation", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a user",
)
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """Store a user; the response echoes the fields with the generated userId."""
    return await user_service.create_user(db=db, payload=payload)


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={
        200: {"description": "Full user record", "model": UserResponse},
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a user by ID",
)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """
    Return one user.

    Args:
        user_id: Integer path parameter. Non-integers are rejected with 422
                 by FastAPI before reaching the handler.
    """
    return await user_service.get_user(db=db, user_id=user_id)
