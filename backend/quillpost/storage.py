"""
Quillpost Backend — Storage Operations
========================================

What:  The three single-statement operations every service is built on:
       insert, get by primary key, list by foreign key.
How:   Thin wrapper over an AsyncSession. Values are always bound as
       parameters by SQLAlchemy; no SQL text is assembled from input.
Who:   Used by UserService, PostService and CommentService.

Outcome contract:
    insert               → generated primary key
                           | ConstraintViolationError (integrity failure)
                           | DatabaseError (anything else)
    get_by_id            → row | None (no row) | DatabaseError
    list_by_foreign_key  → [rows ordered by primary key] | DatabaseError

"No row" is a value, not an exception. Callers decide what it means.
"""

import logging
from typing import Any, List, Optional, Type, TypeVar

from sqlalchemy import inspect, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from quillpost.database import Base
from quillpost.exceptions import ConstraintViolationError, DatabaseError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# SQLite INTEGER is a signed 64-bit value; larger Python ints cannot be bound
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1


def fits_sqlite_integer(value: Any) -> bool:
    """False for ints the driver would refuse with OverflowError."""
    if isinstance(value, bool) or not isinstance(value, int):
        return True
    return SQLITE_INT_MIN <= value <= SQLITE_INT_MAX


class Storage:
    """Single-row CRUD over one session. Create one per request."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def insert(self, model: Type[ModelT], **fields: Any) -> int:
        """
        Insert one row and commit it.

        Args:
            model:  ORM class naming the table (User, Post, Comment)
            fields: Attribute values for the new row

        Returns:
            The primary key assigned by the store.

        Raises:
            ConstraintViolationError: The store rejected the row, or an
                integer field is outside SQLite's INTEGER range
            DatabaseError: Any other storage failure
        """
        table = model.__tablename__
        for name, value in fields.items():
            if not fits_sqlite_integer(value):
                raise ConstraintViolationError(
                    message=f"integer out of range: {table}.{name}",
                    context={"table": table, "field": name},
                )

        row = model(**fields)
        self.session.add(row)
        try:
            await self.session.flush()
            primary_key = inspect(row).identity[0]
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning("Insert into %s rejected: %s", table, e.orig)
            raise ConstraintViolationError(
                message=str(e.orig),
                context={"table": table},
            )
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Insert into %s failed: %s", table, str(e), exc_info=True)
            raise DatabaseError(
                context={"table": table, "error_type": type(e).__name__},
            )

        logger.debug("Inserted %s row %s", table, primary_key)
        return primary_key

    async def get_by_id(self, model: Type[ModelT], primary_key: int) -> Optional[ModelT]:
        """
        Fetch one row by primary key.

        Query plan:
            SELECT * FROM <table> WHERE <pk> = :id  → primary key lookup

        Returns:
            The row, or None when no row has this key.
            An id outside the INTEGER range cannot exist and also gives None.

        Raises:
            DatabaseError: The lookup itself failed
        """
        if not fits_sqlite_integer(primary_key):
            return None
        try:
            return await self.session.get(model, primary_key)
        except SQLAlchemyError as e:
            logger.error(
                "Lookup of %s %s failed: %s",
                model.__tablename__,
                primary_key,
                str(e),
            )
            raise DatabaseError(
                context={"table": model.__tablename__, "id": primary_key},
            )

    async def list_by_foreign_key(
        self,
        model: Type[ModelT],
        column: str,
        value: Any,
    ) -> List[ModelT]:
        """
        All rows whose `column` attribute equals `value`, oldest first.

        Args:
            model:  ORM class naming the table
            column: Mapped attribute name (e.g. "post_id")
            value:  Value to match

        Returns:
            Rows ordered by primary key ascending (insertion order);
            an empty list when nothing matches.
            A value outside the INTEGER range matches nothing.

        Raises:
            DatabaseError: The query failed
        """
        if not fits_sqlite_integer(value):
            return []

        order = inspect(model).primary_key
        query = select(model).where(getattr(model, column) == value).order_by(*order)
        try:
            result = await self.session.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(
                "Listing %s by %s=%s failed: %s",
                model.__tablename__,
                column,
                value,
                str(e),
                exc_info=True,
            )
            raise DatabaseError(
                context={"table": model.__tablename__, column: value},
            )
