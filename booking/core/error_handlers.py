# booking/core/error_handlers.py
"""Translate scheduling errors into HTTP responses"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from booking.core.exceptions import BookingError, ConflictError

logger = logging.getLogger(__name__)


async def booking_error_handler(request: Request, exc: BookingError):
    if isinstance(exc, ConflictError):
        logger.warning(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    """A write broke a database constraint: the request clashes with stored data"""
    logger.warning(f"Integrity violation on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=409,
        content={
            "detail": "The request conflicts with existing data",
            "error": "integrity_violation",
        },
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(
        f"Database error on {request.method} {request.url.path}: {exc}",
        exc_info=True,
    )
    return JSONResponse(
        status_code=503,
        content={
            "detail": "The service is temporarily unavailable. Please try again later.",
            "error": "infrastructure",
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookingError, booking_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
