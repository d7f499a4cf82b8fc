"""
Quillpost Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the failure causes of the API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the storage layer and services; caught by global handlers.

Exception Hierarchy:
    QuillpostError (base)
    ├── NotFoundError             → 404 Not Found
    ├── ConstraintViolationError  → 422 Unprocessable Entity
    └── DatabaseError             → 500 Internal Server Error

A missing row and a failing database are different exceptions: the first is
the client's problem (404), the second is ours (500, logged with context).
"""

from typing import Any, Dict, Optional


class QuillpostError(Exception):
    """
    Base exception for all Quillpost application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(QuillpostError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/users/{id} or /api/posts/{id} with an unknown id, or a
             comment on a missing post while existence checks are enabled.
    HTTP:    404 Not Found

    The storage layer returns None for missing rows; services convert that
    None into this exception.
    """

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConstraintViolationError(QuillpostError):
    """
    Raised when the store rejects a write (NOT NULL, UNIQUE, CHECK, ...).

    HTTP:    422 Unprocessable Entity

    The driver's message (e.g. "NOT NULL constraint failed: users.email") is
    returned to the client as-is; the offending table goes in the context.
    """

    def __init__(
        self,
        message: str = "The record violates a storage constraint",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(QuillpostError):
    """
    Raised when database operations fail unexpectedly.

    When:    File unreadable, database locked past the busy timeout, missing
             table, driver failure.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. Detailed error info
    (statement, driver message) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
