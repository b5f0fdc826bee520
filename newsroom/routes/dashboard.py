"""
Dashboard routes: status counters for reporters and the editor desk.
"""
from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends

from ..deps import get_actor, get_store, get_timezone, require_editor
from ..schemas.dashboard import EditorOverview, ReporterStats
from ..store import ArticleStore
from ..workflow.states import Actor
from ..workflow.stats import editor_overview, reporter_status_counts

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/reporter", response_model=ReporterStats, response_model_by_alias=True)
def get_reporter_stats(
    actor: Actor = Depends(get_actor),
    store: ArticleStore = Depends(get_store),
):
    """Count of the caller's articles per status."""
    return ReporterStats(**reporter_status_counts(store, actor.user_id))


@router.get("/editor", response_model=EditorOverview)
def get_editor_overview(
    actor: Actor = Depends(require_editor),
    store: ArticleStore = Depends(get_store),
    tz: ZoneInfo = Depends(get_timezone),
):
    # "today" is the calendar day in the schedule time zone
    day_start = datetime.now(tz).replace(hour=0, minute=0, second=0, microsecond=0)
    return EditorOverview(**editor_overview(store, day_start))
