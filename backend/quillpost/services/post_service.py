"""
Quillpost Backend — Post Service
==================================

What:  Creation and lookup of blog posts.
Who:   Called by the /api/posts route handlers; CommentService uses
       `post_exists` when comment existence checks are enabled.

Tags:
    PostCreate accepts `tags`, but posts have no tag column. They are logged
    at DEBUG and dropped; the response does not echo them.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from quillpost.database import utcnow
from quillpost.exceptions import NotFoundError
from quillpost.models import Post
from quillpost.schemas.post import PostCreate, PostResponse
from quillpost.storage import Storage

logger = logging.getLogger(__name__)


class PostService:
    """Business logic for posts."""

    async def create_post(self, db: AsyncSession, payload: PostCreate) -> PostResponse:
        """
        Publish a post with one INSERT.

        `dateCreated` is taken from the server clock (UTC) here, written to
        the row, and returned, so the response and later reads agree.

        Raises:
            ConstraintViolationError: The store rejected the row (→ 422)
            DatabaseError: Storage failure (→ 500)
        """
        if payload.tags:
            logger.debug("Discarding tags on new post: %r", payload.tags)

        fields = {
            "title": payload.title,
            "body": payload.body,
            "date_created": utcnow(),
        }
        post_id = await Storage(db).insert(Post, **fields)
        logger.info("Post %d created", post_id)
        return PostResponse(post_id=post_id, **fields)

    async def get_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        """
        Fetch one post by id.

        Raises:
            NotFoundError: No post has this id (→ 404)
            DatabaseError: The lookup failed (→ 500)
        """
        post = await Storage(db).get_by_id(Post, post_id)
        if post is None:
            raise NotFoundError(resource="Post", resource_id=post_id)
        return PostResponse.model_validate(post)

    async def post_exists(self, db: AsyncSession, post_id: int) -> bool:
        """True when a post with this id is stored."""
        return await Storage(db).get_by_id(Post, post_id) is not None


post_service = PostService()
