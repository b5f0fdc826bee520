"""
Newsroom API - FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database import init_db
from .deps import get_store, get_timezone
from .errors import WorkflowError
from .logging_config import api_logger
from .middleware import RequestLoggingMiddleware
from .responses import http_exception_handler, unhandled_exception_handler, workflow_exception_handler
from .routes import articles_router, dashboard_router, health_router, schedule_router
from .worker import ScheduleSweep, SweepScheduler

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown"""
    # Startup
    init_db()
    app.state.sweep_scheduler = None

    if settings.scheduler_enabled:
        tz = get_timezone()
        sweep = ScheduleSweep(get_store(), tz=tz, retention_days=settings.retention_days)
        scheduler = SweepScheduler(
            sweep,
            interval_seconds=settings.sweep_interval_seconds,
            purge_hour=settings.purge_hour,
            tz=tz,
        )
        scheduler.start()
        app.state.sweep_scheduler = scheduler
    else:
        api_logger.info("Sweep scheduler disabled")

    yield  # App is running

    # Shutdown
    if app.state.sweep_scheduler is not None:
        app.state.sweep_scheduler.stop()


app = FastAPI(
    title=settings.app_name,
    description="Editorial workflow API for reporters and editors",
    version="1.0.0",
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.add_exception_handler(WorkflowError, workflow_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Request logging middleware (only in debug mode)
if settings.debug:
    app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Origin", "X-User-Id", "X-User-Role"],
    max_age=3600,
)

# Schedule routes first: their static paths must win over /api/articles/{article_id}
app.include_router(schedule_router)
app.include_router(articles_router)
app.include_router(dashboard_router)
app.include_router(health_router)


@app.get("/")
def root():
    return {
        "message": settings.app_name,
        "docs": "/api/docs" if settings.debug else "Disabled in production",
    }
