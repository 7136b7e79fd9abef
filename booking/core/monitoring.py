# booking/core/monitoring.py
"""Liveness and readiness endpoints"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from booking.config.database import get_db
from booking.config.settings import get_settings

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get("/")
async def health_check():
    """Liveness: the process is up"""
    return {"status": "healthy", "service": get_settings().APP_NAME}


@health_router.get("/detailed")
async def detailed_health_check(db: Session = Depends(get_db)):
    """Readiness: the scheduling store answers queries. 503 when it does not."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check failed to reach the database: {e}")
        return JSONResponse(
            status_code=503,
            content={"api": "healthy", "database": "unhealthy", "overall": "degraded"},
        )

    return {"api": "healthy", "database": "healthy", "overall": "healthy"}
