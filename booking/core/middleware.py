# booking/core/middleware.py
"""Request tracing middleware"""
import logging
import time
import uuid

from starlette.requests import Request

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


async def correlation_id_middleware(request: Request, call_next):
    """Reuse the caller's correlation id or mint one, and echo it back"""
    correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
    request.state.correlation_id = correlation_id

    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """Log each request with its status and duration"""
    started = time.perf_counter()
    correlation_id = getattr(request.state, "correlation_id", "-")
    client = request.client.host if request.client else "unknown"

    logger.info(f"[{correlation_id}] {request.method} {request.url.path} from {client}")

    response = await call_next(request)

    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    logger.info(
        f"[{correlation_id}] {request.method} {request.url.path} "
        f"-> {response.status_code} in {duration_ms}ms"
    )
    return response
