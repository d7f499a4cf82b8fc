"""
Quillpost Backend — Comment Route Handlers
============================================

What:  POST and GET /api/posts/{postId}/comments.
Who:   Called by the comment section under each post.

Listing never answers 404: a post with no comments (or no post at all)
gives `{"comments": []}`. Only a storage failure turns into an error (500).
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from quillpost.database import get_db_session
from quillpost.schemas.comment import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
)
from quillpost.schemas.common import ErrorResponse
from quillpost.services.comment_service import comment_service

router = APIRouter(prefix="/api", tags=["Comments"])


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Comment stored", "model": CommentResponse},
        404: {
            "description": "Post not found (only when REQUIRE_EXISTING_POST is on)",
            "model": ErrorResponse,
        },
        422: {"description": "Invalid input or constraint violation", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Comment on a post",
)
async def create_comment(
    post_id: int,
    payload: CommentCreate,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> CommentResponse:
    """
    Store a comment under `post_id`.

    Whether the post must exist comes from `settings.require_existing_post`
    of the running app.
    """
    return await comment_service.create_comment(
        db=db,
        post_id=post_id,
        payload=payload,
        require_existing_post=request.app.state.settings.require_existing_post,
    )


@router.get(
    "/posts/{post_id}/comments",
    response_model=CommentListResponse,
    responses={
        200: {"description": "Comments in insertion order", "model": CommentListResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List the comments of a post",
)
async def list_comments(
    post_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> CommentListResponse:
    return await comment_service.list_comments(db=db, post_id=post_id)
