from .article import (
    ArticleFields, DraftUpdate, SubmitRequest, ReviewRequest, PublishRequest,
    EditorUpdate, ArticleResponse,
)
from .schedule import (
    ScheduleEntryIn, SchedulePostRequest, CancelScheduleRequest, ScheduledPostsQuery,
    ScheduledArticleResponse, CalendarEventResponse,
)
from .dashboard import ReporterStats, EditorOverview

__all__ = [
    "ArticleFields", "DraftUpdate", "SubmitRequest", "ReviewRequest", "PublishRequest",
    "EditorUpdate", "ArticleResponse",
    "ScheduleEntryIn", "SchedulePostRequest", "CancelScheduleRequest", "ScheduledPostsQuery",
    "ScheduledArticleResponse", "CalendarEventResponse",
    "ReporterStats", "EditorOverview",
]
