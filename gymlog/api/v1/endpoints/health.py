"""Health check endpoints."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gymlog.core.config import get_settings
from gymlog.db.session import get_db
from gymlog.services.sessions import get_active_session

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("")
async def health():
    """Liveness check."""
    settings = get_settings()
    return {"status": "ok", "app": settings.app_name, "environment": settings.environment}


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: store connectivity, plus whether a workout is in progress."""
    try:
        await db.execute(text("SELECT 1"))
        active = await get_active_session(db)
    except SQLAlchemyError as e:
        logger.exception("Readiness check failed: %s", e)
        return JSONResponse(
            status_code=500,
            content={"status": "error", "database": str(e)},
        )
    return {
        "status": "ok",
        "database": "connected",
        "active_session_id": str(active.id) if active else None,
    }
