"""
Health check route.
"""
from fastapi import APIRouter, Request
from sqlalchemy import text

from ..config import get_settings
from ..database import engine
from ..logging_config import api_logger

router = APIRouter(prefix="/api/health", tags=["health"])

settings = get_settings()


def check_database() -> dict:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "healthy"}
    except Exception as e:
        api_logger.error("Database health check failed", error=e)
        return {"status": "unhealthy", "error": str(e)}


@router.get("")
def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    scheduler = getattr(request.app.state, "sweep_scheduler", None)
    database = check_database()
    return {
        "status": "healthy" if database["status"] == "healthy" else "degraded",
        "environment": settings.environment,
        "version": "1.0.0",
        "database": database,
        "scheduler": {
            "running": bool(scheduler and scheduler.running),
            "jobs": scheduler.job_ids() if scheduler else [],
        },
    }
