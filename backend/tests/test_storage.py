"""
Quillpost Backend — Storage Unit Tests
========================================

What:  Tests for Storage (insert / get_by_id / list_by_foreign_key) and for
       Database schema bootstrap.
How:   Happy paths run against a real temporary SQLite file; driver failures
       are simulated with a mock session.

What we test:
    ✅ Generated ids are unique and increasing
    ✅ Missing rows come back as None, not as an exception
    ✅ Listing is ordered by primary key and empty when nothing matches
    ✅ NOT NULL violations become ConstraintViolationError
    ✅ Driver failures become DatabaseError
    ✅ init_schema is idempotent and reports failure without raising
"""

import logging
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from quillpost.config import Settings
from quillpost.database import Database
from quillpost.exceptions import ConstraintViolationError, DatabaseError
from quillpost.models import Comment, Post, User
from quillpost.storage import Storage


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestStorageInsert:
    """Tests for Storage.insert against SQLite."""

    @pytest.mark.asyncio
    async def test_insert_returns_increasing_ids(self, db_session):
        storage = Storage(db_session)

        first = await storage.insert(User, username="alice", email="a@x.com")
        second = await storage.insert(User, username="bob", email="b@x.com")

        assert first == 1
        assert second == 2

    @pytest.mark.asyncio
    async def test_insert_persists_fields(self, db_session):
        storage = Storage(db_session)
        post_id = await storage.insert(
            Post, title="Hello", body="World", date_created=utc(2024, 1, 15, 12, 0)
        )

        db_session.expunge_all()
        post = await storage.get_by_id(Post, post_id)

        assert post.title == "Hello"
        assert post.body == "World"
        assert post.date_created == utc(2024, 1, 15, 12, 0)
        assert post.date_created.tzinfo is not None

    @pytest.mark.asyncio
    async def test_insert_null_required_field_is_constraint_violation(self, db_session):
        storage = Storage(db_session)

        with pytest.raises(ConstraintViolationError, match="NOT NULL"):
            await storage.insert(User, username=None, email="a@x.com")

    @pytest.mark.asyncio
    async def test_session_usable_after_constraint_violation(self, db_session):
        storage = Storage(db_session)
        with pytest.raises(ConstraintViolationError):
            await storage.insert(Post, title=None, body="x")

        post_id = await storage.insert(Post, title="ok", body="x")
        assert post_id == 1

    @pytest.mark.asyncio
    async def test_insert_driver_failure_is_database_error(self, mock_db_session):
        mock_db_session.flush.side_effect = OperationalError(
            "INSERT", {}, Exception("database is locked")
        )

        with pytest.raises(DatabaseError) as exc_info:
            await Storage(mock_db_session).insert(User, username="a", email="a@x.com")

        assert exc_info.value.context["table"] == "users"
        mock_db_session.rollback.assert_awaited_once()
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_insert_integer_beyond_64_bits_is_constraint_violation(self, db_session):
        storage = Storage(db_session)

        with pytest.raises(ConstraintViolationError, match="comments.post_id"):
            await storage.insert(
                Comment, post_id=2**63, comment_text="hi", date_posted=utc(2024, 1, 15)
            )

        assert await storage.list_by_foreign_key(Comment, "post_id", 1) == []


class TestStorageGetById:
    """Tests for Storage.get_by_id."""

    @pytest.mark.asyncio
    async def test_missing_row_is_none(self, db_session):
        assert await Storage(db_session).get_by_id(User, 42) is None

    @pytest.mark.asyncio
    async def test_id_beyond_64_bits_is_none(self, db_session):
        assert await Storage(db_session).get_by_id(User, 2**63) is None
        assert await Storage(db_session).get_by_id(User, -(2**63) - 1) is None

    @pytest.mark.asyncio
    async def test_existing_row(self, db_session):
        storage = Storage(db_session)
        user_id = await storage.insert(
            User, username="alice", email="a@x.com", bio="hi", profile_picture="http://x/a.png"
        )

        user = await storage.get_by_id(User, user_id)

        assert user.username == "alice"
        assert user.bio == "hi"
        assert user.profile_picture == "http://x/a.png"

    @pytest.mark.asyncio
    async def test_driver_failure_is_database_error_not_none(self, mock_db_session):
        mock_db_session.get.side_effect = OperationalError(
            "SELECT", {}, Exception("disk I/O error")
        )

        with pytest.raises(DatabaseError):
            await Storage(mock_db_session).get_by_id(Post, 1)


class TestStorageListByForeignKey:
    """Tests for Storage.list_by_foreign_key."""

    @pytest.mark.asyncio
    async def test_empty_when_nothing_matches(self, db_session):
        assert await Storage(db_session).list_by_foreign_key(Comment, "post_id", 7) == []

    @pytest.mark.asyncio
    async def test_value_beyond_64_bits_matches_nothing(self, db_session):
        assert await Storage(db_session).list_by_foreign_key(Comment, "post_id", 2**63) == []

    @pytest.mark.asyncio
    async def test_insertion_order_and_filtering(self, db_session):
        storage = Storage(db_session)
        now = utc(2024, 1, 15)
        for text, post_id in [("a", 1), ("b", 2), ("c", 1), ("d", 1)]:
            await storage.insert(Comment, post_id=post_id, comment_text=text, date_posted=now)

        rows = await storage.list_by_foreign_key(Comment, "post_id", 1)

        assert [row.comment_text for row in rows] == ["a", "c", "d"]
        assert [row.comment_id for row in rows] == [1, 3, 4]

    @pytest.mark.asyncio
    async def test_driver_failure_is_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("no such table: comments")
        )

        with pytest.raises(DatabaseError):
            await Storage(mock_db_session).list_by_foreign_key(Comment, "post_id", 1)


class TestSchemaInitialization:
    """Tests for Database.init_schema."""

    @pytest.mark.asyncio
    async def test_init_schema_is_idempotent(self, database, db_session):
        await Storage(db_session).insert(Post, title="t", body="b")

        assert await database.init_schema() is True
        assert database.schema_ready is True
        assert await Storage(db_session).get_by_id(Post, 1) is not None

    @pytest.mark.asyncio
    async def test_init_schema_failure_is_logged_not_raised(self, tmp_path, caplog):
        bad = Settings(db_path=str(tmp_path / "no-such-dir" / "blog.sqlite"))
        db = Database(bad)

        with caplog.at_level(logging.ERROR, logger="quillpost.database"):
            result = await db.init_schema()
        await db.dispose()

        assert result is False
        assert db.schema_ready is False
        assert "Schema initialization failed" in caplog.text

    @pytest.mark.asyncio
    async def test_ids_not_reused(self, database, db_session):
        storage = Storage(db_session)
        await storage.insert(User, username="a", email="a@x.com")
        await storage.insert(User, username="b", email="b@x.com")

        from sqlalchemy import text
        async with database.engine.begin() as conn:
            await conn.execute(text('DELETE FROM users WHERE "userId" = 2'))

        assert await storage.insert(User, username="c", email="c@x.com") == 3
