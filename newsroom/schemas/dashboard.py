from pydantic import BaseModel, ConfigDict, Field


class ReporterStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    draft: int = Field(alias="DRAFT")
    submitted: int = Field(alias="SUBMITTED")
    reviewed: int = Field(alias="REVIEWED")
    reverted: int = Field(alias="REVERTED")
    scheduled: int = Field(alias="SCHEDULED")
    posted: int = Field(alias="POSTED")
    published: int = Field(alias="PUBLISHED")
    total: int = Field(alias="TOTAL")


class EditorOverview(BaseModel):
    today_submissions: int
    pending_reviews: int
    reverted_submissions: int
    approved_to_publish: int
    scheduled_posts: int
    posted: int
    published: int
