from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from ..models.enums import ArticleStatus, ArticleType


class ArticleFields(BaseModel):
    """Editable article content. Unset or null fields are left untouched."""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    category: Optional[str] = None
    tags: Optional[List[str]] = None
    content: Optional[str] = None
    type: Optional[ArticleType] = None
    audio_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("audio_url", "audio"))
    video_url: Optional[str] = Field(default=None, validation_alias=AliasChoices("video_url", "video"))
    thumbnail_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("thumbnail_url", "thumbnail")
    )

    #: fields copied onto the article by ``changes()``
    content_fields: ClassVar[Tuple[str, ...]] = (
        "title", "category", "tags", "content", "type", "audio_url", "video_url", "thumbnail_url",
    )

    def changes(self) -> Dict[str, Any]:
        """Column values for the fields the caller actually supplied."""
        values = {}
        for key, value in self.model_dump(exclude_unset=True, include=set(self.content_fields)).items():
            if value is None:
                continue
            values[key] = value.value if isinstance(value, Enum) else value
        return values


class DraftUpdate(ArticleFields):
    status: Optional[ArticleStatus] = None


class SubmitRequest(ArticleFields):
    id: Optional[int] = None


class ReviewRequest(BaseModel):
    id: int
    status: ArticleStatus
    remarks: Optional[str] = Field(default=None, max_length=500)


class PublishRequest(BaseModel):
    id: int


class EditorUpdate(ArticleFields):
    status: Optional[ArticleStatus] = None
    remarks: Optional[str] = Field(default=None, max_length=500)

    content_fields: ClassVar[Tuple[str, ...]] = ArticleFields.content_fields + ("status", "remarks")


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str


class ArticleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    category: Optional[str] = None
    tags: List[str] = []
    type: ArticleType
    status: ArticleStatus
    remarks: str = ""
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    scheduled_posts: List[Dict[str, Any]] = []
    reporter_id: int
    editor_id: Optional[int] = None
    reporter: Optional[UserSummary] = None
    editor: Optional[UserSummary] = None
    version: int
    created_at: datetime
    updated_at: datetime
