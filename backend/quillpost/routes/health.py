"""
Quillpost Backend — Health Check Route
=========================================

What:  Health check endpoint for monitoring and container liveness checks.
How:   Pings the database and reports whether startup schema creation
       succeeded.

Status levels:
    - healthy:   database reachable and schema applied (HTTP 200)
    - unhealthy: either check failed (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request, Response, status

from quillpost import __version__
from quillpost.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable or schema missing"}},
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """
    Check the database and the schema.

    Check details:
        Database: SELECT 1 on a pooled connection
        Schema: the flag `Database.init_schema()` left at startup
    """
    database = request.app.state.database

    db_ok = await database.ping()
    schema_ok = database.schema_ready
    overall = "healthy" if db_ok and schema_ok else "unhealthy"

    if overall != "healthy":
        logger.warning("Health check: database=%s schema=%s", db_ok, schema_ok)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status=overall,
        version=__version__,
        database="connected" if db_ok else "disconnected",
        schema_status="ready" if schema_ok else "missing",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
