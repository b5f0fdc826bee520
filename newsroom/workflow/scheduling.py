"""
Schedule Set Manager

Editors attach per-platform publish slots to reviewed articles. Slots are
merged by platform, cancelled by platform, and the article status is derived
from the remaining slots (see ``ScheduleSet.derive_status``). The sweep in
``worker/sweep.py`` uses the same derivation when it promotes due slots.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from ..errors import NotFound, ValidationFailed
from ..logging_config import workflow_logger
from ..models.enums import ArticleStatus
from ..store import ArticleFilter, ArticleStore
from .lifecycle import status_values
from .schedule_set import DATE_FORMAT, TIME_FORMAT, ScheduleEntry, ScheduleSet
from .states import Action, Actor, TransitionPolicy

Clock = Callable[[], datetime]

CALENDAR_STATUSES = (ArticleStatus.SCHEDULED, ArticleStatus.POSTED)


@dataclass
class ScheduleResult:
    """Outcome of a schedule or cancel request."""
    message: str
    status: int = 200
    scheduled_posts: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status < 400


@dataclass
class ScheduledArticleRow:
    id: int
    title: str
    created_at: datetime
    article_type: str
    status: str
    category: Optional[str]
    audio_url: Optional[str]
    video_url: Optional[str]
    thumbnail_url: Optional[str]
    scheduled_posts: List[Dict[str, Any]]
    author: Optional[str]


@dataclass
class CalendarEvent:
    """One platform slot of one article, flattened for calendar views."""
    id: str
    title: str
    article_id: int
    platform: str
    is_posted: bool
    type: str
    audio_url: Optional[str]
    video_url: Optional[str]
    thumbnail_url: Optional[str]
    status: str
    content: str
    scheduled_date: str
    scheduled_time: str


class ScheduleManager:
    def __init__(
        self,
        store: ArticleStore,
        policy: TransitionPolicy = None,
        tz: ZoneInfo = ZoneInfo("Asia/Kolkata"),
        clock: Optional[Clock] = None,
    ):
        self.store = store
        self.policy = policy or TransitionPolicy()
        self.tz = tz
        self._clock = clock

    def now(self) -> datetime:
        now = self._clock() if self._clock else datetime.now(self.tz)
        return now.astimezone(self.tz)

    def schedule_post(
        self,
        article_id: int,
        actor: Actor,
        entries: Iterable[ScheduleEntry],
        post_now: bool = False,
    ) -> ScheduleResult:
        """
        Merge ``entries`` into the article's schedule and mark it SCHEDULED.

        Incoming entries start unposted and replace existing entries for the
        same platform. With ``post_now`` each entry is stamped with the current
        time so the next sweep promotes it. The result echoes the requested
        entries, not the merged set.
        """
        self.policy.check_role(Action.SCHEDULE, actor)
        requested = [ScheduleEntry.create(e.platform, e.date, e.time) for e in entries]
        if not requested:
            raise ValidationFailed("At least one schedule entry is required")
        if post_now:
            now = self.now()
            stamp = {"date": now.strftime(DATE_FORMAT), "time": now.strftime(TIME_FORMAT)}
            requested = [ScheduleEntry(platform=e.platform, **stamp) for e in requested]

        article = self.store.find_by_id(article_id)
        if article is None:
            raise NotFound("Article", article_id)
        self.policy.check_source(Action.SCHEDULE, ArticleStatus(article.status))

        merged = ScheduleSet.from_json(article.scheduled_posts).merge(requested)
        self.store.update_partial(
            article_id,
            {
                "scheduled_posts": merged.to_json(),
                "editor_id": actor.user_id,
                **status_values(ArticleStatus.SCHEDULED),
            },
            expected_version=article.version,
        )
        workflow_logger.info(
            f"Article {article_id} scheduled",
            article_id=article_id,
            platforms=[e.platform for e in requested],
            post_now=post_now,
            total_entries=len(merged),
        )
        return ScheduleResult(
            message="Post is scheduled successfully",
            scheduled_posts=[e.to_dict() for e in requested],
        )

    def cancel_scheduled_post(self, article_id: int, actor: Actor, platforms: Iterable[str]) -> ScheduleResult:
        """Remove the listed platforms; a missing article is reported, not raised."""
        self.policy.check_role(Action.CANCEL_SCHEDULE, actor)
        platforms = list(platforms)
        article = self.store.find_by_id(article_id)
        if article is None:
            return ScheduleResult(message="Article not found", status=404)
        self.policy.check_source(Action.CANCEL_SCHEDULE, ArticleStatus(article.status))

        remaining = ScheduleSet.from_json(article.scheduled_posts).without(platforms)
        status = remaining.derive_status()
        self.store.update_partial(
            article_id,
            {"scheduled_posts": remaining.to_json(), **status_values(status)},
            expected_version=article.version,
        )
        workflow_logger.info(
            f"Article {article_id} schedule cancelled",
            article_id=article_id,
            platforms=platforms,
            status=status.value,
            remaining=remaining.platforms,
        )
        return ScheduleResult(
            message="Post cancelled successfully",
            scheduled_posts=remaining.to_json(),
        )

    def fetch_scheduled_posts(
        self,
        page: int = 1,
        page_size: int = 10,
        status: Optional[ArticleStatus] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[ScheduledArticleRow], int]:
        filter = ArticleFilter(
            status=status,
            category=category or None,
            title_contains=search or None,
        )
        skip = (page - 1) * page_size
        articles = self.store.find_many(filter, skip=skip, take=page_size, order_by="created_at")
        rows = [
            ScheduledArticleRow(
                id=a.id,
                title=a.title,
                created_at=a.created_at,
                article_type=a.type,
                status=a.status,
                category=a.category,
                audio_url=a.audio_url,
                video_url=a.video_url,
                thumbnail_url=a.thumbnail_url,
                scheduled_posts=ScheduleSet.from_json(a.scheduled_posts).to_json(),
                author=a.reporter_username,
            )
            for a in articles
        ]
        return rows, self.store.count(filter)

    def fetch_calendar_data(self) -> List[CalendarEvent]:
        articles = self.store.find_many(
            ArticleFilter(statuses=CALENDAR_STATUSES), order_by="created_at"
        )
        return [
            CalendarEvent(
                id=str(article.id),
                title=f"{article.title} - ({entry.platform})",
                article_id=article.id,
                platform=entry.platform,
                is_posted=entry.is_posted,
                type=article.type,
                audio_url=article.audio_url,
                video_url=article.video_url,
                thumbnail_url=article.thumbnail_url,
                status=article.status,
                content=article.content,
                scheduled_date=entry.date,
                scheduled_time=entry.time,
            )
            for article in articles
            for entry in ScheduleSet.from_json(article.scheduled_posts)
        ]
