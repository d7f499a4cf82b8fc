"""
Quillpost Backend — Post Schemas
==================================

What:  Post creation body and post response payload.

Tags:
    The client sends tags as a comma-separated string; a list of strings is
    accepted too. They are validated for type only and then discarded:
    posts have no tag storage.
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from quillpost.schemas.common import CAMEL_CASE


class PostCreate(BaseModel):
    """Body of POST /api/posts."""
    title: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1)
    tags: Optional[Union[str, List[str]]] = Field(
        default=None,
        description="Accepted for compatibility; not persisted",
    )

    model_config = CAMEL_CASE


class PostResponse(BaseModel):
    """
    Full post record.

    Who:   Returned by POST /api/posts (201) and GET /api/posts/{postId} (200).
    dateCreated is set by the server at insert time, in UTC.
    """
    post_id: int = Field(description="Generated post identifier")
    title: str
    body: str
    date_created: datetime = Field(description="Creation time (UTC ISO 8601)")

    model_config = CAMEL_CASE
