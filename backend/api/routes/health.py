"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from shared.config import get_settings
from shared.database import supabase_configured

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    rate_limiter: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(response: Response) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether Supabase is configured and whether rate limiting is
    backed by Redis. Returns 503 when the database is not configured.
    """
    settings = get_settings()

    database = "configured" if supabase_configured(settings) else "not_configured"

    rate_limiter = "redis" if settings.redis_url else "disabled"

    if database != "configured":
        logger.warning("Readiness check failed: Supabase not configured")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessResponse(status="not_ready", database=database, rate_limiter=rate_limiter)

    return ReadinessResponse(status="ready", database=database, rate_limiter=rate_limiter)
