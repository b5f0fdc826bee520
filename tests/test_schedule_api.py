"""
Tests for schedule, calendar, dashboard and health endpoints.
"""
from newsroom.models import ArticleStatus


class TestSchedulePost:

    def test_schedule_and_reschedule(self, client, editor_headers, make_article):
        article = make_article(status=ArticleStatus.REVIEWED.value)

        response = client.post(
            "/api/articles/schedule-post",
            headers=editor_headers,
            json={
                "id": article.id,
                "scheduledPosts": [
                    {"platform": "facebook", "date": "2030-01-01T00:00:00.000Z", "time": "09:00"},
                    {"platform": "twitter", "date": "2030-01-01", "time": "10:00"},
                ],
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Post is scheduled successfully"
        assert body["data"]["scheduled_posts"][0] == {
            "platform": "facebook", "date": "2030-01-01", "time": "09:00", "isPosted": False,
        }

        response = client.put(
            "/api/articles/schedule-post",
            headers=editor_headers,
            json={"id": article.id, "scheduled_posts": [{"platform": "facebook", "date": "2030-02-01", "time": "12:00"}]},
        )
        assert response.status_code == 200

        article_data = client.get(f"/api/articles/{article.id}", headers=editor_headers).json()
        assert article_data["status"] == "SCHEDULED"
        assert [p["platform"] for p in article_data["scheduled_posts"]] == ["facebook", "twitter"]
        assert article_data["scheduled_posts"][0]["date"] == "2030-02-01"

    def test_reporter_cannot_schedule(self, client, reporter_headers, make_article):
        article = make_article(status=ArticleStatus.REVIEWED.value)
        response = client.post(
            "/api/articles/schedule-post",
            headers=reporter_headers,
            json={"id": article.id, "scheduledPosts": [{"platform": "x", "date": "2030-01-01", "time": "09:00"}]},
        )
        assert response.status_code == 403

    def test_empty_schedule_rejected(self, client, editor_headers, make_article):
        article = make_article(status=ArticleStatus.REVIEWED.value)
        response = client.post(
            "/api/articles/schedule-post",
            headers=editor_headers,
            json={"id": article.id, "scheduledPosts": []},
        )
        assert response.status_code == 422

    def test_bad_time_rejected(self, client, editor_headers, make_article):
        article = make_article(status=ArticleStatus.REVIEWED.value)
        response = client.post(
            "/api/articles/schedule-post",
            headers=editor_headers,
            json={"id": article.id, "scheduledPosts": [{"platform": "x", "date": "2030-01-01", "time": "noon"}]},
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_FAILED"

    def test_schedule_missing_article(self, client, editor_headers):
        response = client.post(
            "/api/articles/schedule-post",
            headers=editor_headers,
            json={"id": 999, "scheduledPosts": [{"platform": "x", "date": "2030-01-01", "time": "09:00"}]},
        )
        assert response.status_code == 404


class TestCancel:

    def test_cancel_all(self, client, editor_headers, make_article, entry):
        article = make_article(status=ArticleStatus.SCHEDULED.value, scheduled_posts=[entry("x"), entry("y")])
        response = client.post(
            "/api/articles/schedule-post/cancel",
            headers=editor_headers,
            json={"id": article.id, "platform": ["x", "y"]},
        )
        assert response.status_code == 200
        assert response.json()["data"]["scheduled_posts"] == []

        article_data = client.get(f"/api/articles/{article.id}", headers=editor_headers).json()
        assert article_data["status"] == "REVIEWED"

    def test_cancel_missing_article(self, client, editor_headers):
        response = client.post(
            "/api/articles/schedule-post/cancel",
            headers=editor_headers,
            json={"id": 999, "platforms": ["x"]},
        )
        assert response.status_code == 404
        assert response.json() == {"ok": False, "error": "Article not found", "error_code": "NOT_FOUND"}


class TestListings:

    def test_scheduled_posts(self, client, editor_headers, reporter, make_article, entry):
        make_article(title="Budget", status=ArticleStatus.SCHEDULED.value, scheduled_posts=[entry("x")])
        make_article(title="Budget draft")

        response = client.post(
            "/api/articles/scheduled-posts",
            headers=editor_headers,
            json={"page": 1, "pageSize": 10, "articleType": "SCHEDULED", "searchquery": "budget"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["pagination"]["total"] == 1
        row = body["data"][0]
        assert row["title"] == "Budget"
        assert row["author"] == reporter.username
        assert row["scheduled_posts"][0]["isPosted"] is False

    def test_calendar_events(self, client, editor_headers, make_article, entry):
        article = make_article(
            title="Budget",
            status=ArticleStatus.POSTED.value,
            scheduled_posts=[entry("x", posted=True)],
        )
        response = client.get("/api/articles/calendar-events", headers=editor_headers)
        assert response.status_code == 200
        events = response.json()["data"]
        assert events == [
            {
                "id": str(article.id),
                "title": "Budget - (x)",
                "article_id": article.id,
                "platform": "x",
                "is_posted": True,
                "type": "TEXT",
                "audio_url": None,
                "video_url": None,
                "thumbnail_url": None,
                "status": "POSTED",
                "content": "Body",
                "scheduled_date": "2025-01-01",
                "scheduled_time": "09:00",
            }
        ]


class TestDashboard:

    def test_reporter_counts(self, client, reporter_headers, make_article, other_reporter):
        make_article()
        make_article(status=ArticleStatus.SUBMITTED.value)
        make_article(status=ArticleStatus.POSTED.value)
        make_article(reporter_id=other_reporter.id)

        response = client.get("/api/dashboard/reporter", headers=reporter_headers)
        assert response.status_code == 200
        assert response.json() == {
            "DRAFT": 1,
            "SUBMITTED": 1,
            "REVIEWED": 0,
            "REVERTED": 0,
            "SCHEDULED": 0,
            "POSTED": 1,
            "PUBLISHED": 0,
            "TOTAL": 3,
        }

    def test_editor_overview(self, client, editor_headers, make_article):
        make_article(status=ArticleStatus.SUBMITTED.value)
        make_article(status=ArticleStatus.REVIEWED.value)
        make_article(status=ArticleStatus.SCHEDULED.value)
        make_article(status=ArticleStatus.PUBLISHED.value)
        make_article(status=ArticleStatus.PUBLISHED.value)

        response = client.get("/api/dashboard/editor", headers=editor_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["today_submissions"] == 5
        assert data["pending_reviews"] == 1
        assert data["approved_to_publish"] == 1
        assert data["scheduled_posts"] == 1
        assert data["published"] == 2

    def test_editor_overview_requires_editor(self, client, reporter_headers):
        response = client.get("/api/dashboard/editor", headers=reporter_headers)
        assert response.status_code == 403


class TestHealth:

    def test_health_check(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["database"]["status"] == "healthy"
        assert data["scheduler"] == {"running": False, "jobs": []}
