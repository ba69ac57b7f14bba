"""Health check endpoint for load balancers and monitoring."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.core.config import Settings, get_settings
from liftlog.db.session import get_db
from liftlog.models.exercise import Exercise

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health(settings: Settings = Depends(get_settings)):
    """Simple liveness check."""
    return {"status": "ok", "environment": settings.environment}


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: app + DB connectivity, with the catalog size."""
    try:
        count = (await db.execute(select(func.count(Exercise.id)))).scalar_one()
    except SQLAlchemyError as e:
        logger.exception("Readiness check failed")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "database": str(e)},
        )
    return {"status": "ok", "database": "connected", "exercises": count}
