"""
FastAPI middleware for request tracing.

Each request gets a short request id (or keeps the caller's X-Request-ID),
which is bound into the structlog context so every log line written while
handling the request carries it. Timing is reported in the completion log
and in the X-Response-Time header.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from core.logging import bind_context, clear_context, get_logger


logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """
    Request-scoped logging context plus timing.

    Usage:
        from core.middleware import RequestTracingMiddleware

        app = FastAPI()
        app.add_middleware(RequestTracingMiddleware)
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        bind_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        start_time = time.perf_counter()
        logger.debug("Request started")

        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
            return response
        except Exception as e:
            logger.error(
                "Request failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise
        finally:
            clear_context()
