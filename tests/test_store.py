"""
Tests for the SQL article store.
"""
from datetime import datetime, timedelta, timezone

import pytest

from newsroom.errors import ConcurrentUpdate, NotFound
from newsroom.models import ArticleStatus
from newsroom.store import ArticleFilter


class TestCreateAndUpdate:

    def test_create_sets_defaults(self, make_article, reporter):
        article = make_article()
        assert article.id is not None
        assert article.version == 1
        assert article.remarks == ""
        assert article.type == "TEXT"
        assert article.created_at is not None
        assert article.reporter_username == reporter.username

    def test_update_bumps_version(self, store, make_article):
        article = make_article()
        updated = store.update_partial(article.id, {"title": "Changed"})
        assert updated.title == "Changed"
        assert updated.version == 2

    def test_compare_and_swap(self, store, make_article):
        article = make_article()
        store.update_partial(article.id, {"title": "First"}, expected_version=1)

        with pytest.raises(ConcurrentUpdate):
            store.update_partial(article.id, {"title": "Stale"}, expected_version=1)
        assert store.find_by_id(article.id).title == "First"

    def test_update_missing(self, store):
        with pytest.raises(NotFound):
            store.update_partial(999, {"title": "x"})

    def test_delete_returns_snapshot(self, store, make_article):
        article = make_article(title="Gone soon")
        deleted = store.delete(article.id)
        assert deleted.title == "Gone soon"
        assert store.delete(article.id) is None


class TestQueries:

    def test_filters_and_count(self, store, make_article, other_reporter):
        make_article(title="Flood warning", category="weather", status=ArticleStatus.SUBMITTED.value)
        make_article(title="Heat wave", category="weather")
        make_article(title="Flood relief", reporter_id=other_reporter.id, status=ArticleStatus.SUBMITTED.value)

        assert store.count(ArticleFilter(status=ArticleStatus.SUBMITTED)) == 2
        assert store.count(ArticleFilter(category="weather", title_contains="FLOOD")) == 1
        assert store.count(ArticleFilter(reporter_id=other_reporter.id)) == 1
        assert store.count(ArticleFilter(statuses=[ArticleStatus.DRAFT, ArticleStatus.SUBMITTED])) == 3

    def test_title_search_is_literal(self, store, make_article):
        make_article(title="100% turnout")
        make_article(title="1000 runs")
        make_article(title="a_b")
        make_article(title="axb")
        make_article(title="C:\\path")

        assert [a.title for a in store.find_many(ArticleFilter(title_contains="100%"))] == ["100% turnout"]
        assert [a.title for a in store.find_many(ArticleFilter(title_contains="A_B"))] == ["a_b"]
        assert store.count(ArticleFilter(title_contains="c:\\p")) == 1

    def test_ordering_and_paging(self, store, make_article):
        base = datetime(2025, 1, 1, tzinfo=timezone.utc)
        for i in range(4):
            make_article(title=f"Story {i}", created_at=base + timedelta(hours=i))

        newest = store.find_many(ArticleFilter(), take=2)
        assert [a.title for a in newest] == ["Story 3", "Story 2"]
        oldest = store.find_many(ArticleFilter(), skip=1, take=2, order_by="created_at")
        assert [a.title for a in oldest] == ["Story 1", "Story 2"]

    def test_unknown_order_field(self, store):
        with pytest.raises(ValueError):
            store.find_many(ArticleFilter(), order_by="remarks")

    def test_group_by_status(self, store, make_article):
        make_article()
        make_article()
        make_article(status=ArticleStatus.POSTED.value)
        assert store.group_by_status(ArticleFilter()) == {
            ArticleStatus.DRAFT: 2,
            ArticleStatus.POSTED: 1,
        }

    def test_delete_many_by_age(self, store, make_article):
        cutoff = datetime(2025, 1, 1, tzinfo=timezone.utc)
        make_article(created_at=cutoff - timedelta(days=1))
        keep = make_article(created_at=cutoff + timedelta(days=1))

        assert store.delete_many(ArticleFilter(created_before=cutoff)) == 1
        assert [a.id for a in store.find_many(ArticleFilter())] == [keep.id]

    def test_find_user(self, store, editor):
        assert store.find_user(editor.id).username == "editor"
        assert store.find_user(999) is None
