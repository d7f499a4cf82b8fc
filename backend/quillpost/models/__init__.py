"""
Quillpost Backend — ORM Models
================================

Importing this package registers the users, posts and comments tables on
`Base.metadata`; `Database.init_schema()` relies on that.
"""

from quillpost.models.comment import Comment
from quillpost.models.post import Post
from quillpost.models.user import User

__all__ = ["Comment", "Post", "User"]
