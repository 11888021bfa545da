"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

import time
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.infrastructure.database import get_database

logger = structlog.get_logger()

router = APIRouter()

SERVICE_NAME = "fashion-catalog-api"


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    timestamp: datetime
    uptime: float
    service: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response schema."""

    status: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Check service health.

    Returns:
        Health status with current time, process uptime in seconds,
        service name and version.
    """
    started_at = getattr(request.app.state, "started_at", time.monotonic())

    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - started_at, 3),
        service=SERVICE_NAME,
        version=request.app.version,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Check if service is ready to accept requests.

    Returns:
        Readiness status; 503 when the database is unreachable.
    """
    try:
        await get_database(request).ping()
    except Exception as e:
        logger.warning("Database not reachable", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not ready", "database": "unavailable"},
        )

    return ReadinessResponse(status="ready", database="ok")
