"""
Quillpost Backend — Comment Service
=====================================

What:  Adding comments under a post and listing a post's comments.
Who:   Called by the /api/posts/{postId}/comments route handlers.

Post existence:
    The schema does not tie comments to posts. With
    `require_existing_post=False` (the default) a comment under an unknown
    postId is stored as-is. With True, the post is looked up first and a
    missing post raises NotFoundError; that adds one SELECT before the INSERT.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from quillpost.database import utcnow
from quillpost.exceptions import NotFoundError
from quillpost.models import Comment
from quillpost.schemas.comment import (
    CommentCreate,
    CommentListResponse,
    CommentResponse,
)
from quillpost.services.post_service import post_service
from quillpost.storage import Storage

logger = logging.getLogger(__name__)


class CommentService:
    """Business logic for comments."""

    async def create_comment(
        self,
        db: AsyncSession,
        post_id: int,
        payload: CommentCreate,
        require_existing_post: bool = False,
    ) -> CommentResponse:
        """
        Store one comment under `post_id`.

        Raises:
            NotFoundError: Post missing and require_existing_post is set (→ 404)
            ConstraintViolationError: The store rejected the row (→ 422)
            DatabaseError: Storage failure (→ 500)
        """
        if require_existing_post and not await post_service.post_exists(db, post_id):
            raise NotFoundError(resource="Post", resource_id=post_id)

        fields = {
            "post_id": post_id,
            "comment_text": payload.comment_text,
            "date_posted": utcnow(),
        }
        comment_id = await Storage(db).insert(Comment, **fields)
        logger.info("Comment %d added to post %d", comment_id, post_id)
        return CommentResponse(comment_id=comment_id, **fields)

    async def list_comments(self, db: AsyncSession, post_id: int) -> CommentListResponse:
        """
        All comments of a post in insertion order.

        An unknown post and a post without comments both give an empty list.

        Raises:
            DatabaseError: The query failed (→ 500)
        """
        rows = await Storage(db).list_by_foreign_key(Comment, "post_id", post_id)
        return CommentListResponse(
            comments=[CommentResponse.model_validate(row) for row in rows],
        )


comment_service = CommentService()
