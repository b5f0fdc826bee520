"""
Status-count aggregates for dashboards.
"""
from datetime import datetime
from typing import Dict

from ..models.enums import ArticleStatus
from ..store import ArticleFilter, ArticleStore


def reporter_status_counts(store: ArticleStore, reporter_id: int) -> Dict[str, int]:
    """
    Count of the reporter's articles per status, every status present, plus TOTAL.

    SCHEDULED and POSTED carry their real counts. The legacy dashboard reported
    them as 0 while still including them in TOTAL, so its columns did not add up.
    """
    grouped = store.group_by_status(ArticleFilter(reporter_id=reporter_id))
    counts = {status.value: grouped.get(status, 0) for status in ArticleStatus}
    counts["TOTAL"] = sum(grouped.values())
    return counts


def editor_overview(store: ArticleStore, day_start: datetime) -> Dict[str, int]:
    """
    Desk-wide counters; ``day_start`` bounds today's submissions.

    ``scheduled_posts`` counts SCHEDULED articles. The legacy overview filled
    it with the PUBLISHED count; published articles are reported under
    ``published``.
    """
    grouped = store.group_by_status(ArticleFilter())
    return {
        "today_submissions": store.count(ArticleFilter(created_after=day_start)),
        "pending_reviews": grouped.get(ArticleStatus.SUBMITTED, 0),
        "reverted_submissions": grouped.get(ArticleStatus.REVERTED, 0),
        "approved_to_publish": grouped.get(ArticleStatus.REVIEWED, 0),
        "scheduled_posts": grouped.get(ArticleStatus.SCHEDULED, 0),
        "posted": grouped.get(ArticleStatus.POSTED, 0),
        "published": grouped.get(ArticleStatus.PUBLISHED, 0),
    }
