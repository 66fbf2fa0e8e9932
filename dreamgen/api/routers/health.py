"""
Health check API endpoints.

Routes: GET /health, GET /health/db

Dependencies: dreamgen.boundary
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dreamgen.boundary.db import get_async_db
from dreamgen.configs import get_settings
from dreamgen.models.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", detail=f"Server Healthy ({get_settings().environment})")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(db: AsyncSession = Depends(get_async_db)) -> HealthResponse:
    """Database health check."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"{__name__}:health_check_db - Database unreachable: {e}")
        raise HTTPException(status_code=503, detail="Database unavailable")
    return HealthResponse(status="healthy", detail="Database connection OK")
