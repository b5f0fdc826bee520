"""
Newsroom API Response Utilities
Standardized response format and error handling
"""
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from typing import Any, Dict, List
from datetime import datetime, timezone

from .errors import WorkflowError
from .logging_config import api_logger


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


# ============================================================
# SUCCESS RESPONSES
# ============================================================

def success(data: Any = None, message: str = None, meta: Dict = None) -> Dict:
    """Create success response"""
    response = {
        "ok": True,
        "timestamp": _timestamp(),
    }

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    if meta:
        response["meta"] = meta

    return response


def paginated(items: List, total: int, page: int = 1, per_page: int = 10) -> Dict:
    """Paginated list response"""
    return {
        "ok": True,
        "data": items,
        "pagination": {
            "total": total,
            "page": page,
            "per_page": per_page,
            "total_pages": (total + per_page - 1) // per_page,
            "has_next": page * per_page < total,
            "has_prev": page > 1,
        },
        "timestamp": _timestamp(),
    }


# ============================================================
# EXCEPTION HANDLERS
# ============================================================

async def workflow_exception_handler(request: Request, exc: WorkflowError) -> JSONResponse:
    """Render lifecycle/schedule errors with their classification."""
    api_logger.warning(
        f"Workflow error: {exc.message}",
        status_code=exc.status_code,
        error_code=exc.error_code,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "ok": False,
            "error": exc.message,
            "error_code": exc.error_code,
            "details": exc.details,
            "timestamp": _timestamp(),
        },
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    api_logger.warning(
        f"HTTP Error: {exc.detail}",
        status_code=exc.status_code,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "ok": False,
            "error": exc.detail,
            "error_code": f"HTTP_{exc.status_code}",
            "timestamp": _timestamp(),
        },
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    api_logger.error(
        f"Unexpected error: {exc}",
        error=exc,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content={
            "ok": False,
            "error": "An unexpected error occurred",
            "error_code": "INTERNAL_ERROR",
            "timestamp": _timestamp(),
        },
    )
