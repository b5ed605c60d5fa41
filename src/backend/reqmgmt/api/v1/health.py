"""
Health Check API Endpoint
GET /api/v1/health - Redis and PostgreSQL status
"""

import logging
from typing import Dict

from fastapi import APIRouter
from pydantic import BaseModel

from ...database.database import postgresql_manager, redis_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/health", tags=["Health"])


class HealthResponse(BaseModel):
    """Response model for service health"""
    status: str
    services: Dict[str, bool]


@router.get("", response_model=HealthResponse)
async def get_health():
    """
    Report backing store health.

    PostgreSQL is required; Redis only backs the search cache, so a
    missing Redis degrades the service rather than failing it.

    Example:
        GET /api/v1/health

        Response:
        {
            "status": "healthy",
            "services": {"postgresql": true, "redis": true}
        }
    """
    services = {
        "postgresql": await postgresql_manager.is_healthy(),
        "redis": await redis_manager.is_healthy(),
    }

    if not services["postgresql"]:
        status = "unhealthy"
    elif not services["redis"]:
        status = "degraded"
    else:
        status = "healthy"

    if status != "healthy":
        logger.warning(f"Health check {status}: {services}")

    return HealthResponse(status=status, services=services)
