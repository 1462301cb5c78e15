"""
Health Check Endpoints

- /health/liveness  - process is up
- /health/readiness - database reachable (cache status is informational)
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import datetime

from app.core.database import get_db, ping_db
from app.core.logging_config import logger
from app.services.cache_service import cache_service


router = APIRouter()


def _timestamp() -> str:
    return datetime.utcnow().isoformat() + "Z"


@router.get("/liveness")
async def liveness():
    return {"status": "ok", "timestamp": _timestamp()}


@router.get("/readiness")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Ready when SELECT 1 succeeds; 503 otherwise"""
    cache_status = await cache_service.ping()
    try:
        await ping_db(db)
    except Exception as e:
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "error",
                "database": "disconnected",
                "cache": cache_status,
                "error": str(e),
                "timestamp": _timestamp(),
            },
        )

    return {
        "status": "ok",
        "database": "connected",
        "cache": cache_status,
        "timestamp": _timestamp(),
    }
