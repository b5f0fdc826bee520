from .enums import ArticleStatus, ArticleType, Role
from .user import User
from .article import Article

__all__ = [
    "ArticleStatus",
    "ArticleType",
    "Role",
    "User",
    "Article",
]
