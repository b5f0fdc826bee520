"""
FastAPI dependencies: caller context and the process-wide workflow services.
"""
from functools import lru_cache
from zoneinfo import ZoneInfo

from fastapi import Depends, Header, HTTPException, status

from .config import get_settings
from .database import SessionLocal
from .models.enums import Role
from .store import ArticleStore, SqlArticleStore
from .workflow.lifecycle import LifecycleEngine
from .workflow.queries import ArticleQueries
from .workflow.scheduling import ScheduleManager
from .workflow.states import Actor, TransitionPolicy


@lru_cache()
def get_store() -> ArticleStore:
    """Single store per process, shared by requests and the sweep."""
    return SqlArticleStore(SessionLocal)


def get_policy() -> TransitionPolicy:
    return TransitionPolicy(strict=get_settings().strict_transitions)


def get_timezone() -> ZoneInfo:
    return ZoneInfo(get_settings().schedule_timezone)


def get_actor(
    x_user_id: int = Header(None, alias="X-User-Id"),
    x_user_role: Role = Header(None, alias="X-User-Role"),
    store: ArticleStore = Depends(get_store),
) -> Actor:
    """
    Caller identity forwarded by the authentication layer.

    The user must exist and hold the role it claims.
    """
    if x_user_id is None or x_user_role is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    user = store.find_user(x_user_id)
    if user is None or user.role != x_user_role.value:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user or role",
        )
    return Actor(user_id=user.id, role=x_user_role)


def require_editor(actor: Actor = Depends(get_actor)) -> Actor:
    if not actor.is_editor:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only editors can do this")
    return actor


def get_lifecycle(
    store: ArticleStore = Depends(get_store),
    policy: TransitionPolicy = Depends(get_policy),
) -> LifecycleEngine:
    return LifecycleEngine(store, policy)


def get_schedule_manager(
    store: ArticleStore = Depends(get_store),
    policy: TransitionPolicy = Depends(get_policy),
    tz: ZoneInfo = Depends(get_timezone),
) -> ScheduleManager:
    return ScheduleManager(store, policy, tz=tz)


def get_queries(store: ArticleStore = Depends(get_store)) -> ArticleQueries:
    return ArticleQueries(store)
