"""
Schedule routes: per-platform publish slots and the calendar view.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..config import get_settings
from ..deps import get_schedule_manager, require_editor
from ..responses import paginated, success
from ..schemas.schedule import (
    CalendarEventResponse,
    CancelScheduleRequest,
    ScheduledArticleResponse,
    ScheduledPostsQuery,
    SchedulePostRequest,
)
from ..workflow.scheduling import ScheduleManager
from ..workflow.states import Actor

router = APIRouter(prefix="/api/articles", tags=["schedule"])

settings = get_settings()


@router.api_route("/schedule-post", methods=["POST", "PUT"])
def schedule_post(
    body: SchedulePostRequest,
    actor: Actor = Depends(require_editor),
    manager: ScheduleManager = Depends(get_schedule_manager),
):
    """Attach platform slots to an article, replacing slots for the same platform."""
    result = manager.schedule_post(body.id, actor, body.scheduled_posts, post_now=body.post_now)
    return success({"scheduled_posts": result.scheduled_posts}, message=result.message)


@router.post("/schedule-post/cancel")
def cancel_scheduled_post(
    body: CancelScheduleRequest,
    actor: Actor = Depends(require_editor),
    manager: ScheduleManager = Depends(get_schedule_manager),
):
    result = manager.cancel_scheduled_post(body.id, actor, body.platforms)
    if not result.ok:
        return JSONResponse(
            status_code=result.status,
            content={"ok": False, "error": result.message, "error_code": "NOT_FOUND"},
        )
    return success({"scheduled_posts": result.scheduled_posts}, message=result.message)


@router.post("/scheduled-posts")
def list_scheduled_posts(
    query: ScheduledPostsQuery,
    actor: Actor = Depends(require_editor),
    manager: ScheduleManager = Depends(get_schedule_manager),
):
    """Paginated article listing with schedule slots, oldest first."""
    size = min(query.page_size or settings.default_page_size, settings.max_page_size)
    rows, total = manager.fetch_scheduled_posts(
        page=query.page,
        page_size=size,
        status=query.status,
        category=query.category,
        search=query.search,
    )
    items = [
        ScheduledArticleResponse.model_validate(row).model_dump(mode="json", by_alias=True)
        for row in rows
    ]
    return paginated(items, total, query.page, size)


@router.get("/calendar-events")
def calendar_events(
    actor: Actor = Depends(require_editor),
    manager: ScheduleManager = Depends(get_schedule_manager),
):
    """One event per platform slot of every SCHEDULED or POSTED article."""
    events = manager.fetch_calendar_data()
    return success([CalendarEventResponse.model_validate(e).model_dump(mode="json") for e in events])
