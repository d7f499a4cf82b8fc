"""
Quillpost Backend — Comment Schemas
=====================================

What:  Comment creation body, single comment payload and the list wrapper.

Length limit:
    1–500 characters, the same bounds the web client's comment form enforces.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from quillpost.schemas.common import CAMEL_CASE


class CommentCreate(BaseModel):
    """Body of POST /api/posts/{postId}/comments."""
    comment_text: str = Field(min_length=1, max_length=500)

    model_config = CAMEL_CASE


class CommentResponse(BaseModel):
    """One comment. Returned by the create endpoint (201) and inside lists."""
    comment_id: int = Field(description="Generated comment identifier")
    post_id: int
    comment_text: str
    date_posted: datetime = Field(description="When the comment was stored (UTC)")

    model_config = CAMEL_CASE


class CommentListResponse(BaseModel):
    """
    Body of GET /api/posts/{postId}/comments.

    Comments are in insertion order. A post without comments yields an empty
    list, not an error.
    """
    comments: List[CommentResponse] = Field(default_factory=list)
