"""Application configuration from environment."""
from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Rewards API"
    environment: str = "development"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # console | json

    # Database
    database_url: str = "sqlite+aiosqlite:///./rewards.db"
    db_pool_size: int = 5
    db_pool_timeout: int = 10  # seconds
    auto_create_tables: bool = True

    # User session cookie
    session_cookie_name: str = "sessionId"
    session_ttl_days: int = 7

    # Admin session cookie
    admin_cookie_name: str = "adminSessionId"
    admin_session_ttl_hours: int = 24

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
