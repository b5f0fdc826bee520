"""
Lifecycle Engine

Applies reporter and editor actions to articles:
- create / update / submit drafts (reporter, owner only)
- review, publish and edit (editor)
- delete (owner reporter or any editor)

Role and ownership are always enforced. Source-state rules from
``states.TRANSITIONS`` are enforced only when the policy is strict.
"""
from typing import Any, Dict, Optional

from ..errors import InvalidState, NotAllowed, NotFound, ValidationFailed
from ..logging_config import workflow_logger
from ..models.article import Article
from ..models.enums import ArticleStatus, ArticleType
from ..schemas.article import ArticleFields
from ..store import ArticleStore
from .states import EDITABLE_STATUSES, Action, Actor, TransitionPolicy


def status_values(status: ArticleStatus, remarks: Optional[str] = None) -> Dict[str, Any]:
    """Column values for a status change; remarks survive only on REVERTED."""
    return {
        "status": status.value,
        "remarks": (remarks or "") if status == ArticleStatus.REVERTED else "",
    }


class LifecycleEngine:
    """State transitions for articles, bound to one store and policy."""

    def __init__(self, store: ArticleStore, policy: TransitionPolicy = None):
        self.store = store
        self.policy = policy or TransitionPolicy()

    def _get(self, article_id: int) -> Article:
        article = self.store.find_by_id(article_id)
        if article is None:
            raise NotFound("Article", article_id)
        return article

    def _log(self, action: Action, article: Article, actor: Actor):
        workflow_logger.info(
            f"Article {article.id} {action.value}",
            article_id=article.id,
            action=action.value,
            status=article.status,
            user_id=actor.user_id,
            role=actor.role.value,
        )

    def _new_article(self, actor: Actor, fields: ArticleFields, status: ArticleStatus) -> Article:
        values = fields.changes()
        if not values.get("title"):
            raise ValidationFailed("Title is required", {"field": "title"})
        values.setdefault("content", "")
        values.setdefault("tags", [])
        values.setdefault("type", ArticleType.TEXT.value)
        values.update(
            reporter_id=actor.user_id,
            scheduled_posts=[],
            **status_values(status),
        )
        return self.store.create(values)

    # ============================================================
    # REPORTER ACTIONS
    # ============================================================

    def create_draft(self, actor: Actor, fields: ArticleFields) -> Article:
        self.policy.check_role(Action.CREATE_DRAFT, actor)
        article = self._new_article(actor, fields, ArticleStatus.DRAFT)
        self._log(Action.CREATE_DRAFT, article, actor)
        return article

    def update_draft(
        self,
        article_id: int,
        actor: Actor,
        fields: ArticleFields,
        status: Optional[ArticleStatus] = None,
    ) -> Article:
        """
        Save changes to a draft the actor owns.

        Missing articles, foreign articles and articles past the editable
        statuses all fail with ``NotAllowed``.
        """
        self.policy.check_role(Action.UPDATE_DRAFT, actor)
        article = self.store.find_by_id(article_id)
        if article is None:
            raise NotAllowed("Article not found")
        self.policy.check_owner(Action.UPDATE_DRAFT, actor, article.reporter_id, "Not allowed to edit this draft")
        if ArticleStatus(article.status) not in EDITABLE_STATUSES:
            raise NotAllowed("Only drafts can be edited")

        values = fields.changes()
        if status is not None:
            self.policy.check_target(Action.UPDATE_DRAFT, status)
            values.update(status_values(status))

        article = self.store.update_partial(article_id, values)
        self._log(Action.UPDATE_DRAFT, article, actor)
        return article

    def submit(self, actor: Actor, fields: ArticleFields, article_id: Optional[int] = None) -> Article:
        """Submit for review; without an id the article is created already SUBMITTED."""
        self.policy.check_role(Action.SUBMIT, actor)
        if not article_id:
            article = self._new_article(actor, fields, ArticleStatus.SUBMITTED)
            self._log(Action.SUBMIT, article, actor)
            return article

        article = self.store.find_by_id(article_id)
        if article is None:
            raise NotAllowed("Not allowed")
        self.policy.check_owner(Action.SUBMIT, actor, article.reporter_id, "Not allowed")
        self.policy.check_source(Action.SUBMIT, ArticleStatus(article.status))

        values = fields.changes()
        values.update(status_values(ArticleStatus.SUBMITTED))
        article = self.store.update_partial(article_id, values)
        self._log(Action.SUBMIT, article, actor)
        return article

    # ============================================================
    # EDITOR ACTIONS
    # ============================================================

    def review(
        self,
        article_id: int,
        actor: Actor,
        status: ArticleStatus,
        remarks: Optional[str] = None,
    ) -> Article:
        self.policy.check_role(Action.REVIEW, actor)
        article = self._get(article_id)
        self.policy.check_source(Action.REVIEW, ArticleStatus(article.status))
        self.policy.check_target(Action.REVIEW, status)
        self.policy.check_remarks(status, remarks)

        article = self.store.update_partial(
            article_id, {**status_values(status, remarks), "editor_id": actor.user_id}
        )
        self._log(Action.REVIEW, article, actor)
        return article

    def publish(self, article_id: int, actor: Actor) -> Article:
        self.policy.check_role(Action.PUBLISH, actor)
        article = self._get(article_id)
        self.policy.check_source(Action.PUBLISH, ArticleStatus(article.status))

        article = self.store.update_partial(
            article_id, {**status_values(ArticleStatus.PUBLISHED), "editor_id": actor.user_id}
        )
        self._log(Action.PUBLISH, article, actor)
        return article

    def editor_edit(self, article_id: int, actor: Actor, fields: ArticleFields) -> Article:
        """Apply any subset of fields, including status and remarks, as an editor."""
        self.policy.check_role(Action.EDITOR_EDIT, actor)
        article = self._get(article_id)
        if not article.reporter_id:
            raise InvalidState("Invalid article, no reporter assigned")

        values = fields.changes()
        current = ArticleStatus(article.status)
        status = ArticleStatus(values.get("status", current))
        if "status" in values:
            self.policy.check_status_change(Action.EDITOR_EDIT, current, status)
        if "status" in values or "remarks" in values:
            remarks = values.get("remarks", article.remarks)
            self.policy.check_remarks(status, remarks)
            values.update(status_values(status, remarks))
        values["editor_id"] = actor.user_id

        article = self.store.update_partial(article_id, values)
        self._log(Action.EDITOR_EDIT, article, actor)
        return article

    # ============================================================
    # SHARED
    # ============================================================

    def delete_article(self, article_id: int, actor: Actor) -> Article:
        self.policy.check_role(Action.DELETE, actor)
        article = self._get(article_id)
        self.policy.check_owner(Action.DELETE, actor, article.reporter_id, "Not allowed to delete this article")

        deleted = self.store.delete(article_id)
        if deleted is None:
            raise NotFound("Article", article_id)
        self._log(Action.DELETE, deleted, actor)
        return deleted
