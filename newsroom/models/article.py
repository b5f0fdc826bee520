"""
Article model: the unit moved through the editorial workflow.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from ..database import Base
from .enums import ArticleStatus, ArticleType


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(300), nullable=False)
    content = Column(Text, nullable=False, default="")
    category = Column(String(100), index=True)
    tags = Column(JSON, default=list)
    type = Column(String(10), nullable=False, default=ArticleType.TEXT.value)  # TEXT, AUDIO, VIDEO
    audio_url = Column(String(1024), nullable=True)
    video_url = Column(String(1024), nullable=True)
    thumbnail_url = Column(String(1024), nullable=True)
    status = Column(String(20), nullable=False, default=ArticleStatus.DRAFT.value, index=True)
    remarks = Column(Text, nullable=False, default="")
    # [{"platform", "date", "time", "isPosted"}, ...]
    scheduled_posts = Column(JSON, nullable=False, default=list)
    reporter_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    editor_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Relationships
    reporter = relationship("User", foreign_keys=[reporter_id], lazy="joined")
    editor = relationship("User", foreign_keys=[editor_id], lazy="joined")

    @property
    def reporter_username(self):
        return self.reporter.username if self.reporter else None
