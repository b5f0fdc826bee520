"""
Article Store: persistence boundary for the workflow core.

The lifecycle engine, schedule manager and sweep depend only on the
``ArticleStore`` protocol. ``SqlArticleStore`` implements it on SQLAlchemy and
is built once per process; each call runs in its own short session.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Protocol

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session, sessionmaker

from .errors import ConcurrentUpdate, NotFound
from .logging_config import store_logger
from .models.article import Article
from .models.enums import ArticleStatus
from .models.user import User


@dataclass
class ArticleFilter:
    """Conjunction of optional criteria; unset fields match everything."""
    status: Optional[ArticleStatus] = None
    statuses: Optional[Iterable[ArticleStatus]] = None
    category: Optional[str] = None
    reporter_id: Optional[int] = None
    title_contains: Optional[str] = None
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None


class ArticleStore(Protocol):
    def find_by_id(self, article_id: int) -> Optional[Article]: ...

    def create(self, values: Dict[str, Any]) -> Article: ...

    def update_partial(
        self, article_id: int, values: Dict[str, Any], expected_version: Optional[int] = None
    ) -> Article: ...

    def delete(self, article_id: int) -> Optional[Article]: ...

    def delete_many(self, filter: ArticleFilter) -> int: ...

    def find_many(
        self,
        filter: ArticleFilter,
        skip: int = 0,
        take: Optional[int] = None,
        order_by: str = "-created_at",
    ) -> List[Article]: ...

    def count(self, filter: ArticleFilter) -> int: ...

    def group_by_status(self, filter: ArticleFilter) -> Dict[ArticleStatus, int]: ...

    def find_user(self, user_id: int) -> Optional[User]: ...


ORDERABLE_FIELDS = {"id", "title", "created_at", "updated_at"}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _naive_utc(value: datetime) -> datetime:
    """Timestamp columns hold naive UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _escape_like(value: str) -> str:
    """Match ``value`` literally inside a LIKE pattern."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _status_value(status) -> str:
    return status.value if isinstance(status, ArticleStatus) else str(status)


class SqlArticleStore:
    """``ArticleStore`` backed by a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _where(self, stmt, filter: ArticleFilter):
        if filter.status is not None:
            stmt = stmt.where(Article.status == _status_value(filter.status))
        if filter.statuses is not None:
            stmt = stmt.where(Article.status.in_([_status_value(s) for s in filter.statuses]))
        if filter.category:
            stmt = stmt.where(Article.category == filter.category)
        if filter.reporter_id is not None:
            stmt = stmt.where(Article.reporter_id == filter.reporter_id)
        if filter.title_contains:
            pattern = f"%{_escape_like(filter.title_contains)}%"
            stmt = stmt.where(Article.title.ilike(pattern, escape="\\"))
        if filter.created_after is not None:
            stmt = stmt.where(Article.created_at >= _naive_utc(filter.created_after))
        if filter.created_before is not None:
            stmt = stmt.where(Article.created_at < _naive_utc(filter.created_before))
        return stmt

    def _order(self, stmt, order_by: str):
        descending = order_by.startswith("-")
        name = order_by.lstrip("-")
        if name not in ORDERABLE_FIELDS:
            raise ValueError(f"Cannot order articles by {name!r}")
        column = getattr(Article, name)
        return stmt.order_by(column.desc() if descending else column.asc(), Article.id.asc())

    def _load(self, session: Session, article_id: int) -> Optional[Article]:
        return session.execute(
            select(Article).where(Article.id == article_id).execution_options(populate_existing=True)
        ).scalars().first()

    # ------------------------------------------------------------------
    # ArticleStore
    # ------------------------------------------------------------------

    def find_by_id(self, article_id: int) -> Optional[Article]:
        with self._session_factory() as session:
            return self._load(session, article_id)

    def create(self, values: Dict[str, Any]) -> Article:
        with self._session_factory() as session:
            now = _utcnow()
            article = Article(**{"created_at": now, "updated_at": now, "version": 1, **values})
            session.add(article)
            session.commit()
            article = self._load(session, article.id)
            store_logger.debug("Article created", article_id=article.id, status=article.status)
            return article

    def update_partial(
        self, article_id: int, values: Dict[str, Any], expected_version: Optional[int] = None
    ) -> Article:
        """
        Apply ``values`` to one article and bump its version.

        With ``expected_version`` the write only lands if the row still has that
        version (compare-and-swap); otherwise it is last-writer-wins.
        """
        with self._session_factory() as session:
            stmt = update(Article).where(Article.id == article_id)
            if expected_version is not None:
                stmt = stmt.where(Article.version == expected_version)
            stmt = stmt.values(
                **values,
                version=Article.version + 1,
                updated_at=_utcnow(),
            ).execution_options(synchronize_session=False)

            result = session.execute(stmt)
            if result.rowcount == 0:
                session.rollback()
                if self._load(session, article_id) is None:
                    raise NotFound("Article", article_id)
                store_logger.warning(
                    "Stale article write rejected",
                    article_id=article_id,
                    expected_version=expected_version,
                )
                raise ConcurrentUpdate(
                    "Article was modified concurrently, reload and retry",
                    {"id": article_id, "expected_version": expected_version},
                )
            session.commit()
            return self._load(session, article_id)

    def delete(self, article_id: int) -> Optional[Article]:
        with self._session_factory() as session:
            article = self._load(session, article_id)
            if article is None:
                return None
            session.delete(article)
            session.commit()
            return article

    def delete_many(self, filter: ArticleFilter) -> int:
        with self._session_factory() as session:
            result = session.execute(
                self._where(delete(Article), filter).execution_options(synchronize_session=False)
            )
            session.commit()
            return result.rowcount

    def find_many(
        self,
        filter: ArticleFilter,
        skip: int = 0,
        take: Optional[int] = None,
        order_by: str = "-created_at",
    ) -> List[Article]:
        with self._session_factory() as session:
            stmt = self._order(self._where(select(Article), filter), order_by).offset(skip)
            if take is not None:
                stmt = stmt.limit(take)
            return list(session.execute(stmt).scalars().all())

    def count(self, filter: ArticleFilter) -> int:
        with self._session_factory() as session:
            stmt = self._where(select(func.count(Article.id)), filter)
            return session.execute(stmt).scalar_one()

    def group_by_status(self, filter: ArticleFilter) -> Dict[ArticleStatus, int]:
        with self._session_factory() as session:
            stmt = self._where(
                select(Article.status, func.count(Article.id)), filter
            ).group_by(Article.status)
            return {ArticleStatus(status): count for status, count in session.execute(stmt).all()}

    # ------------------------------------------------------------------
    # users
    # ------------------------------------------------------------------

    def find_user(self, user_id: int) -> Optional[User]:
        with self._session_factory() as session:
            return session.get(User, user_id)
