"""
Tests for the schedule sweep and the background scheduler wrapper.
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest

from newsroom.models import ArticleStatus
from newsroom.store import SqlArticleStore
from newsroom.worker import ScheduleSweep, SweepScheduler
from newsroom.worker.scheduler import PURGE_JOB_ID, SWEEP_JOB_ID

IST = ZoneInfo("Asia/Kolkata")


class RacingStore(SqlArticleStore):
    """Another writer touches every article right after the sweep reads it."""

    def find_many(self, filter, **kwargs):
        articles = super().find_many(filter, **kwargs)
        for article in articles:
            super().update_partial(article.id, {"title": article.title + " (updated)"})
        return articles


class FlakyStore(SqlArticleStore):
    def __init__(self, session_factory, failing_id):
        super().__init__(session_factory)
        self.failing_id = failing_id

    def update_partial(self, article_id, values, expected_version=None):
        if article_id == self.failing_id:
            raise RuntimeError("disk full")
        return super().update_partial(article_id, values, expected_version)


class TestScheduleSweep:

    def test_due_entry_is_posted(self, store, clock, make_article, entry):
        article = make_article(status=ArticleStatus.SCHEDULED.value, scheduled_posts=[entry("twitter")])
        report = ScheduleSweep(store, IST, clock=clock).run_tick()

        assert report.examined == 1
        assert report.updated == 1
        assert report.entries_posted == 1
        stored = store.find_by_id(article.id)
        assert stored.status == ArticleStatus.POSTED.value
        assert stored.scheduled_posts == [entry("twitter", posted=True)]

    def test_future_entry_untouched(self, store, clock, make_article, entry):
        article = make_article(
            status=ArticleStatus.SCHEDULED.value,
            scheduled_posts=[entry("twitter", time="09:30")],
        )
        report = ScheduleSweep(store, IST, clock=clock).run_tick()

        assert report.updated == 0
        stored = store.find_by_id(article.id)
        assert stored.version == article.version
        assert stored.status == ArticleStatus.SCHEDULED.value

    def test_partial_promotion_stays_scheduled(self, store, clock, make_article, entry):
        article = make_article(
            status=ArticleStatus.SCHEDULED.value,
            scheduled_posts=[entry("twitter"), entry("linkedin", date="2025-01-02")],
        )
        sweep = ScheduleSweep(store, IST, clock=clock)
        sweep.run_tick()
        after_first = store.find_by_id(article.id)
        second = sweep.run_tick()
        after_second = store.find_by_id(article.id)

        assert after_first.status == ArticleStatus.SCHEDULED.value
        assert after_first.scheduled_posts == [entry("twitter", posted=True), entry("linkedin", date="2025-01-02")]
        assert second.updated == 0
        assert after_second.version == after_first.version
        assert after_second.scheduled_posts == after_first.scheduled_posts

    def test_only_scheduled_articles_examined(self, store, clock, make_article, entry):
        make_article(status=ArticleStatus.REVIEWED.value, scheduled_posts=[entry("twitter")])
        report = ScheduleSweep(store, IST, clock=clock).run_tick()
        assert report.examined == 0

    def test_zone_is_respected(self, store, make_article, entry):
        # 09:00 IST is 03:30 UTC
        article = make_article(status=ArticleStatus.SCHEDULED.value, scheduled_posts=[entry("twitter")])
        early = ScheduleSweep(store, IST, clock=lambda: datetime(2025, 1, 1, 3, 29, tzinfo=timezone.utc))
        assert early.run_tick().updated == 0
        on_time = ScheduleSweep(store, IST, clock=lambda: datetime(2025, 1, 1, 3, 30, tzinfo=timezone.utc))
        assert on_time.run_tick().updated == 1
        assert store.find_by_id(article.id).status == ArticleStatus.POSTED.value

    def test_concurrent_write_skips_article(self, session_factory, clock, make_article, entry):
        article = make_article(status=ArticleStatus.SCHEDULED.value, scheduled_posts=[entry("twitter")])
        racing = RacingStore(session_factory)

        report = ScheduleSweep(racing, IST, clock=clock).run_tick()

        assert report.conflicts == [article.id]
        assert report.updated == 0
        stored = racing.find_by_id(article.id)
        assert stored.status == ArticleStatus.SCHEDULED.value
        assert stored.title.endswith("(updated)")

    def test_failure_is_isolated(self, session_factory, clock, make_article, entry):
        broken = make_article(status=ArticleStatus.SCHEDULED.value, scheduled_posts=[entry("twitter")])
        healthy = make_article(status=ArticleStatus.SCHEDULED.value, scheduled_posts=[entry("facebook")])
        flaky = FlakyStore(session_factory, failing_id=broken.id)

        report = ScheduleSweep(flaky, IST, clock=clock).run_tick()

        assert report.failed == [broken.id]
        assert report.updated == 1
        assert flaky.find_by_id(healthy.id).status == ArticleStatus.POSTED.value
        assert flaky.find_by_id(broken.id).status == ArticleStatus.SCHEDULED.value


class TestRetentionPurge:

    def test_purges_old_articles(self, store, now, clock, make_article):
        old = make_article(created_at=now.astimezone(timezone.utc) - timedelta(days=31))
        fresh = make_article(created_at=now.astimezone(timezone.utc) - timedelta(days=29))

        deleted = ScheduleSweep(store, IST, clock=clock, retention_days=30).purge_expired()

        assert deleted == 1
        assert store.find_by_id(old.id) is None
        assert store.find_by_id(fresh.id) is not None


class TestSweepScheduler:

    def test_start_registers_jobs(self):
        scheduler = SweepScheduler(MagicMock(), interval_seconds=3600, purge_hour=1, tz=IST)
        scheduler.start()
        try:
            assert scheduler.running
            assert sorted(scheduler.job_ids()) == sorted([SWEEP_JOB_ID, PURGE_JOB_ID])
        finally:
            scheduler.stop()
        assert not scheduler.running
        assert scheduler.job_ids() == []

    def test_start_twice_is_noop(self):
        scheduler = SweepScheduler(MagicMock(), interval_seconds=3600, tz=IST)
        scheduler.start()
        try:
            scheduler.start()
            assert len(scheduler.job_ids()) == 2
        finally:
            scheduler.stop()

    def test_job_errors_are_logged_not_raised(self):
        sweep = MagicMock()
        sweep.run_tick.side_effect = RuntimeError("db down")
        sweep.purge_expired.side_effect = RuntimeError("db down")
        scheduler = SweepScheduler(sweep)

        scheduler._run_sweep()
        scheduler._run_purge()

        sweep.run_tick.assert_called_once()
        sweep.purge_expired.assert_called_once()
