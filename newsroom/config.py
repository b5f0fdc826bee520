"""
Application configuration using environment variables.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Newsroom API"
    debug: bool = False
    environment: str = "development"

    # Database
    database_url: str = "sqlite:///./newsroom.db"

    # Scheduling
    schedule_timezone: str = "Asia/Kolkata"
    sweep_interval_seconds: int = 60
    purge_hour: int = 1  # local hour in schedule_timezone
    retention_days: int = 30
    scheduler_enabled: bool = True

    # Workflow
    strict_transitions: bool = False

    # Listing
    default_page_size: int = 10
    max_page_size: int = 100

    class Config:
        env_prefix = "NEWSROOM_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
