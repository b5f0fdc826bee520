from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from datetime import datetime
from typing import List, Optional

from ..models.enums import ArticleStatus


class ScheduleEntryIn(BaseModel):
    platform: str = Field(min_length=1)
    date: str  # YYYY-MM-DD, full ISO timestamps are cut to the day
    time: str  # HH:mm


class ScheduleEntryOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    platform: str
    date: str
    time: str
    is_posted: bool = Field(alias="isPosted")


class SchedulePostRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    scheduled_posts: List[ScheduleEntryIn] = Field(
        min_length=1, validation_alias=AliasChoices("scheduled_posts", "scheduledPosts")
    )
    post_now: bool = Field(default=False, validation_alias=AliasChoices("post_now", "isScheduledNow"))


class CancelScheduleRequest(BaseModel):
    id: int
    platforms: List[str] = Field(min_length=1, validation_alias=AliasChoices("platforms", "platform"))


class ScheduledPostsQuery(BaseModel):
    page: int = Field(default=1, ge=1)
    page_size: Optional[int] = Field(default=None, ge=1, validation_alias=AliasChoices("page_size", "pageSize"))
    status: Optional[ArticleStatus] = Field(default=None, validation_alias=AliasChoices("status", "articleType"))
    category: Optional[str] = None
    search: Optional[str] = Field(default=None, validation_alias=AliasChoices("search", "searchquery"))


class ScheduledArticleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    created_at: datetime
    article_type: str
    status: str
    category: Optional[str] = None
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    scheduled_posts: List[ScheduleEntryOut] = []
    author: Optional[str] = None


class CalendarEventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    article_id: int
    platform: str
    is_posted: bool
    type: str
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    status: str
    content: str
    scheduled_date: str
    scheduled_time: str
