"""
Quillpost Backend — Post Route Handlers
=========================================

What:  POST /api/posts (publish) and GET /api/posts/{postId} (detail).
Who:   Called by the web client's editor and post pages.

Caching:
    GET /api/posts/{postId} is cacheable for an hour: posts are never
    edited after creation.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from quillpost.database import get_db_session
from quillpost.schemas.common import ErrorResponse
from quillpost.schemas.post import PostCreate, PostResponse
from quillpost.services.post_service import post_service

router = APIRouter(prefix="/api", tags=["Posts"])


@router.post(
    "/posts",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Post created", "model": PostResponse},
        422: {"description": "Invalid input or constraint violation", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Publish a post",
    description="Tags are accepted but not stored.",
)
async def create_post(
    payload: PostCreate,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.create_post(db=db, payload=payload)


@router.get(
    "/posts/{post_id}",
    response_model=PostResponse,
    responses={
        200: {"description": "Full post record", "model": PostResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a post by ID",
)
async def get_post(
    post_id: int,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    result = await post_service.get_post(db=db, post_id=post_id)

    # Immutable after creation
    response.headers["Cache-Control"] = "private, max-age=3600"

    return result
