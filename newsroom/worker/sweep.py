"""
Schedule Sweep

Periodic pass that promotes due schedule entries:
- Scans every SCHEDULED article
- Flags entries whose date/time (in the schedule time zone) has passed
- Writes the entries and derived status back in one guarded update
- Purges articles past the retention window (daily)

Each article is handled on its own; a failure is logged and the sweep moves on.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional
from zoneinfo import ZoneInfo

from ..errors import ConcurrentUpdate
from ..logging_config import sweep_logger, timed
from ..models.article import Article
from ..models.enums import ArticleStatus
from ..store import ArticleFilter, ArticleStore
from ..workflow.lifecycle import status_values
from ..workflow.schedule_set import ScheduleSet


@dataclass
class SweepReport:
    """Summary of one sweep tick"""
    started_at: datetime
    examined: int = 0
    updated: int = 0
    entries_posted: int = 0
    conflicts: List[int] = field(default_factory=list)
    failed: List[int] = field(default_factory=list)


class ScheduleSweep:
    """
    Promote due schedule entries to posted.

    ``clock`` returns the current instant; tests pass a fixed one.
    """

    def __init__(
        self,
        store: ArticleStore,
        tz: ZoneInfo = ZoneInfo("Asia/Kolkata"),
        clock: Optional[Callable[[], datetime]] = None,
        retention_days: int = 30,
    ):
        self.store = store
        self.tz = tz
        self._clock = clock
        self.retention_days = retention_days

    def now(self) -> datetime:
        now = self._clock() if self._clock else datetime.now(self.tz)
        return now.astimezone(self.tz)

    @timed(sweep_logger)
    def run_tick(self) -> SweepReport:
        now = self.now()
        report = SweepReport(started_at=now)

        try:
            articles = self.store.find_many(
                ArticleFilter(status=ArticleStatus.SCHEDULED), order_by="id"
            )
        except Exception as e:
            sweep_logger.error("Sweep could not load scheduled articles", error=e)
            return report

        for article in articles:
            report.examined += 1
            try:
                posted = self._sweep_article(article, now)
            except ConcurrentUpdate:
                # Someone else wrote the row; the next tick sees the new version.
                report.conflicts.append(article.id)
                continue
            except Exception as e:
                report.failed.append(article.id)
                sweep_logger.error(
                    f"Sweep failed for article {article.id}",
                    error=e,
                    article_id=article.id,
                )
                continue
            if posted:
                report.updated += 1
                report.entries_posted += posted

        sweep_logger.info(
            "Sweep tick finished",
            now=now.isoformat(),
            examined=report.examined,
            updated=report.updated,
            entries_posted=report.entries_posted,
            conflicts=report.conflicts,
            failed=report.failed,
        )
        return report

    def _sweep_article(self, article: Article, now: datetime) -> int:
        """Promote due entries of one article; returns how many were promoted."""
        schedule = ScheduleSet.from_json(article.scheduled_posts)
        if not schedule:
            return 0

        updated, promoted = schedule.mark_due(now, self.tz)
        if not promoted:
            return 0

        status = updated.derive_status()
        self.store.update_partial(
            article.id,
            {"scheduled_posts": updated.to_json(), **status_values(status)},
            expected_version=article.version,
        )
        for entry in promoted:
            sweep_logger.info(
                f"Posting article {article.id} on {entry.platform}",
                article_id=article.id,
                platform=entry.platform,
                target=entry.target_instant(self.tz).isoformat(),
            )
        if status != ArticleStatus.SCHEDULED:
            sweep_logger.info(
                f"Article {article.id} is now {status.value}",
                article_id=article.id,
                status=status.value,
            )
        return len(promoted)

    @timed(sweep_logger)
    def purge_expired(self) -> int:
        """Delete articles created before the retention window, whatever their status."""
        cutoff = self.now().astimezone(timezone.utc) - timedelta(days=self.retention_days)
        deleted = self.store.delete_many(ArticleFilter(created_before=cutoff))
        sweep_logger.info(
            "Expired articles purged",
            deleted=deleted,
            retention_days=self.retention_days,
            cutoff=cutoff.isoformat(),
        )
        return deleted
