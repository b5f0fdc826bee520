"""
Article routes for the reporter/editor lifecycle.
"""
from fastapi import APIRouter, Depends, Query
from typing import Optional

from ..config import get_settings
from ..deps import get_actor, get_lifecycle, get_queries, require_editor
from ..responses import paginated, success
from ..schemas.article import (
    ArticleFields,
    ArticleResponse,
    DraftUpdate,
    EditorUpdate,
    PublishRequest,
    ReviewRequest,
    SubmitRequest,
)
from ..workflow.lifecycle import LifecycleEngine
from ..workflow.queries import ArticleQueries
from ..workflow.states import Actor

router = APIRouter(prefix="/api/articles", tags=["articles"])

settings = get_settings()


def article_to_dict(article) -> dict:
    """Serialize an Article model for JSON responses."""
    return ArticleResponse.model_validate(article).model_dump(mode="json")


def page_size_param(page_size: Optional[int]) -> int:
    return min(page_size or settings.default_page_size, settings.max_page_size)


@router.post("/draft", status_code=201)
def create_draft(
    fields: ArticleFields,
    actor: Actor = Depends(get_actor),
    lifecycle: LifecycleEngine = Depends(get_lifecycle),
):
    """Reporter creates a new draft."""
    return article_to_dict(lifecycle.create_draft(actor, fields))


@router.get("/draft")
def list_drafts(
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, alias="pageSize"),
    actor: Actor = Depends(get_actor),
    queries: ArticleQueries = Depends(get_queries),
):
    """The caller's drafts, newest first."""
    size = page_size_param(page_size)
    items, total = queries.drafts(actor.user_id, page, size)
    return paginated([article_to_dict(a) for a in items], total, page, size)


@router.patch("/draft/{article_id}")
def update_draft(
    article_id: int,
    body: DraftUpdate,
    actor: Actor = Depends(get_actor),
    lifecycle: LifecycleEngine = Depends(get_lifecycle),
):
    """Reporter saves changes to their own draft or reverted article."""
    return article_to_dict(lifecycle.update_draft(article_id, actor, body, status=body.status))


@router.post("/submit")
def submit_article(
    body: SubmitRequest,
    actor: Actor = Depends(get_actor),
    lifecycle: LifecycleEngine = Depends(get_lifecycle),
):
    """Reporter submits an article; without an id a new one is created."""
    return article_to_dict(lifecycle.submit(actor, body, article_id=body.id))


@router.get("/reverted")
def list_reverted(
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, alias="pageSize"),
    actor: Actor = Depends(get_actor),
    queries: ArticleQueries = Depends(get_queries),
):
    size = page_size_param(page_size)
    items, total = queries.reverted(actor.user_id, page, size)
    return paginated([article_to_dict(a) for a in items], total, page, size)


@router.get("/review-queue")
def review_queue(
    page: int = Query(1, ge=1),
    page_size: Optional[int] = Query(None, ge=1, alias="pageSize"),
    category: Optional[str] = None,
    actor: Actor = Depends(require_editor),
    queries: ArticleQueries = Depends(get_queries),
):
    """Submitted articles waiting for review."""
    size = page_size_param(page_size)
    items, total = queries.review_queue(page, size, category)
    return paginated([article_to_dict(a) for a in items], total, page, size)


@router.post("/review")
def review_article(
    body: ReviewRequest,
    actor: Actor = Depends(get_actor),
    lifecycle: LifecycleEngine = Depends(get_lifecycle),
):
    """Editor marks an article reviewed or reverts it with remarks."""
    return article_to_dict(lifecycle.review(body.id, actor, body.status, body.remarks))


@router.post("/publish")
def publish_article(
    body: PublishRequest,
    actor: Actor = Depends(get_actor),
    lifecycle: LifecycleEngine = Depends(get_lifecycle),
):
    return article_to_dict(lifecycle.publish(body.id, actor))


@router.patch("/{article_id}/edit")
def editor_edit_article(
    article_id: int,
    body: EditorUpdate,
    actor: Actor = Depends(get_actor),
    lifecycle: LifecycleEngine = Depends(get_lifecycle),
):
    """Editor changes any field of an article, including status and remarks."""
    return article_to_dict(lifecycle.editor_edit(article_id, actor, body))


@router.get("/{article_id}")
def get_article(
    article_id: int,
    actor: Actor = Depends(get_actor),
    queries: ArticleQueries = Depends(get_queries),
):
    return article_to_dict(queries.get_article(article_id, actor))


@router.delete("/{article_id}")
def delete_article(
    article_id: int,
    actor: Actor = Depends(get_actor),
    lifecycle: LifecycleEngine = Depends(get_lifecycle),
):
    """Owner reporter or any editor deletes an article."""
    deleted = lifecycle.delete_article(article_id, actor)
    return success({"id": deleted.id}, message="Article deleted successfully")
