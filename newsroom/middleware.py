"""
Custom middleware for request processing.
"""
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .logging_config import api_logger


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log requests for debugging and monitoring."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        level = "info" if response.status_code < 400 else "warning"
        getattr(api_logger, level)(
            f"{request.method} {request.url.path} -> {response.status_code}",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(process_time * 1000, 2),
            user_id=request.headers.get("x-user-id"),
        )

        response.headers["X-Process-Time"] = str(process_time)
        return response
