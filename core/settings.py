"""
Application settings.

All values are read from environment variables (or a local .env file) so the
same build runs against Postgres in production and SQLite locally.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings for the pickup game API."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Service
    service_name: str = Field(default="pickup-stats-api", alias="SERVICE_NAME")
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")

    # Database
    db_engine: str = Field(default="postgres", alias="DB_ENGINE")
    db_host: str = Field(default="localhost", alias="DB_HOST")
    db_port: int = Field(default=5432, alias="DB_PORT")
    db_name: str = Field(default="pickup", alias="DB_NAME")
    db_user: str = Field(default="postgres", alias="DB_USER")
    db_password: Optional[str] = Field(default=None, alias="DB_PASSWORD")
    db_max_connections: int = Field(default=20, alias="DB_MAX_CONNECTIONS")
    sqlite_path: str = Field(default="pickup.db", alias="SQLITE_PATH")

    # Authentication
    jwt_secret_key: str = Field(default="change-me", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_days: int = Field(default=90, alias="ACCESS_TOKEN_EXPIRE_DAYS")

    # Query limits
    player_search_limit: int = Field(default=20, alias="PLAYER_SEARCH_LIMIT")
    recent_games_limit: int = Field(default=10, alias="RECENT_GAMES_LIMIT")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
