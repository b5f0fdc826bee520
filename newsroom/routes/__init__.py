from .articles import router as articles_router
from .schedule import router as schedule_router
from .dashboard import router as dashboard_router
from .health import router as health_router

__all__ = [
    "articles_router",
    "schedule_router",
    "dashboard_router",
    "health_router",
]
