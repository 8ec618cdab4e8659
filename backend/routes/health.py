"""Health and readiness check routes."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from config import Settings
from dependencies import get_session, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "city-explorer-api"


@router.get("/ready")
async def ready(settings: Settings = Depends(get_settings)) -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": SERVICE_NAME, "commit": settings.git_sha}


@router.get("/health")
async def health(
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> dict:
    """Deep health check that verifies store connectivity and API credentials."""
    result = {
        "status": "ok",
        "service": SERVICE_NAME,
        "commit": settings.git_sha,
        "database": "not_tested",
        "missing_credentials": settings.validate(),
    }

    try:
        await session.execute(text("SELECT 1"))
        result["database"] = "connected"
    except Exception as e:
        logger.exception("Database health check failed")
        result["database"] = "error"
        result["database_error"] = str(e)

    return result
