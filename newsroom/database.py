"""
Database engine and session factory.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from .config import get_settings

settings = get_settings()

DATABASE_URL = settings.database_url  # default: sqlite:///./newsroom.db

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
)

# Objects handed out by the store outlive their session.
SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)

Base = declarative_base()


def init_db() -> None:
    """Create tables (use migrations in production)."""
    from . import models  # noqa: F401  register mappers

    Base.metadata.create_all(bind=engine)
