"""
User model for article ownership and editorial attribution.
"""
from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime, timezone
from ..database import Base
from .enums import Role


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    role = Column(String(20), nullable=False, default=Role.REPORTER.value)  # REPORTER, EDITOR
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
