"""Health check endpoints."""

import logging

from fastapi import APIRouter, Request
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Check application health status.

    Returns:
        Health status including database connectivity.
    """
    settings = request.app.state.settings

    db_status = "healthy"
    try:
        await request.app.state.database.ping()
    except Exception as e:
        logger.warning(f"Database health probe failed: {e}")
        db_status = "error"

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        version=settings.app_version,
        database=db_status,
    )
