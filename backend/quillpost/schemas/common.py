"""
Quillpost Backend — Shared Schema Pieces
==========================================

What:  Model config shared by every camelCase schema, the error body and the
       health response.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


# What: Serialize/accept `user_id` as `userId`, `profile_picture` as
# `profilePicture`, ... while still accepting snake_case names in Python code.
# from_attributes: build responses straight from ORM rows
CAMEL_CASE = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Fields:
        error: Human-readable description (the contract's `{error}` field)
        code: Machine-readable cause: validation_error, constraint_violation,
              not_found, server_error, internal_server_error
        details: Optional extra context (e.g. which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "User not found",
            "code": "not_found",
            "request_id": "1f0c2a9b"
        }
    """
    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error code")
    details: Optional[Any] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and container health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    schema_status: str = Field(
        alias="schema",
        description="Schema state: ready, missing",
    )
    uptime_seconds: float = Field(description="Seconds since service started")

    model_config = {"populate_by_name": True}
