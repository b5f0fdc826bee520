"""
Read-side article queries used by the listing endpoints.
"""
from typing import List, Optional, Tuple

from ..errors import NotAllowed, NotFound
from ..models.article import Article
from ..models.enums import ArticleStatus
from ..store import ArticleFilter, ArticleStore
from .states import Actor


class ArticleQueries:
    def __init__(self, store: ArticleStore):
        self.store = store

    def _page(self, filter: ArticleFilter, page: int, page_size: int, order_by: str) -> Tuple[List[Article], int]:
        skip = (page - 1) * page_size
        items = self.store.find_many(filter, skip=skip, take=page_size, order_by=order_by)
        return items, self.store.count(filter)

    def get_article(self, article_id: int, actor: Actor) -> Article:
        """Editors see every article; reporters only their own."""
        article = self.store.find_by_id(article_id)
        if article is None:
            raise NotFound("Article", article_id)
        if not actor.is_editor and article.reporter_id != actor.user_id:
            raise NotAllowed("Access denied to this article")
        return article

    def drafts(self, reporter_id: int, page: int = 1, page_size: int = 10):
        return self._page(
            ArticleFilter(reporter_id=reporter_id, status=ArticleStatus.DRAFT),
            page, page_size, "-created_at",
        )

    def reverted(self, reporter_id: int, page: int = 1, page_size: int = 10):
        return self._page(
            ArticleFilter(reporter_id=reporter_id, status=ArticleStatus.REVERTED),
            page, page_size, "-updated_at",
        )

    def review_queue(self, page: int = 1, page_size: int = 10, category: Optional[str] = None):
        """Submitted articles awaiting an editor, newest first."""
        return self._page(
            ArticleFilter(status=ArticleStatus.SUBMITTED, category=(category or "").strip() or None),
            page, page_size, "-created_at",
        )
