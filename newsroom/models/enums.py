"""
Enumerations shared by models, schemas and the workflow core.
"""
from enum import Enum


class ArticleStatus(str, Enum):
    """Lifecycle states of an article."""
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    REVIEWED = "REVIEWED"
    REVERTED = "REVERTED"
    SCHEDULED = "SCHEDULED"
    POSTED = "POSTED"
    PUBLISHED = "PUBLISHED"


class ArticleType(str, Enum):
    TEXT = "TEXT"
    AUDIO = "AUDIO"
    VIDEO = "VIDEO"


class Role(str, Enum):
    REPORTER = "REPORTER"
    EDITOR = "EDITOR"
