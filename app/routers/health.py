# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
#
# /health/ready probes every table the API reads or writes, so a missing
# migration shows up as a degraded table rather than as 500s on first use.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"

PROBED_TABLES = (
    "users",
    "form_categories",
    "form_subcategories",
    "forms",
    "customers",
    "message_templates",
)


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response: overall database status plus one entry per table."""
    status: str
    database: str
    tables: dict[str, str]
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _probe(table: str) -> str:
    try:
        SupabaseClient.get_client().table(table).select("id").limit(1).execute()
        return "healthy"
    except Exception as e:
        logger.warning(f"Readiness probe failed for {table}: {e}")
        return f"unhealthy: {str(e)[:50]}"


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness_check():
    """
    Readiness check endpoint.

    Reads one row from each table; any failure marks the service degraded.
    """
    tables = {table: _probe(table) for table in PROBED_TABLES}
    healthy = all(state == "healthy" for state in tables.values())

    return ReadinessResponse(
        status="ready" if healthy else "degraded",
        database="healthy" if healthy else "unhealthy",
        tables=tables,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """Returns whether the service process is alive."""
    return LivenessResponse(status="alive", timestamp=_now())
