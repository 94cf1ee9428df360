"""Application configuration management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared import constants


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = "storefront-search"
    app_env: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # -------------------------------------------------------------------------
    # API Settings
    # -------------------------------------------------------------------------
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_workers: int = 4
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    # -------------------------------------------------------------------------
    # Catalog Database (PostgreSQL, read-only)
    # -------------------------------------------------------------------------
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "storefront"
    postgres_password: str = ""
    postgres_db: str = "storefront"
    catalog_schema: str = "public"
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_recycle: int = 1800

    @property
    def database_url(self) -> str:
        """Construct PostgreSQL connection URL."""
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # -------------------------------------------------------------------------
    # Redis
    # -------------------------------------------------------------------------
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: str = ""
    redis_db: int = 0
    cache_enabled: bool = True
    autocomplete_cache_ttl_seconds: int = 60
    trending_products_cache_ttl_seconds: int = 120

    @property
    def redis_url(self) -> str:
        """Construct Redis connection URL."""
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # -------------------------------------------------------------------------
    # Search Settings
    # -------------------------------------------------------------------------
    search_history_limit: int = constants.SEARCH_HISTORY_LIMIT
    max_tracked_users: int = constants.MAX_TRACKED_USERS
    max_interaction_records: int = constants.MAX_INTERACTION_RECORDS
    trending_searches_limit: int = constants.TRENDING_SEARCHES_LIMIT
    query_dictionary_path: str | None = None

    # -------------------------------------------------------------------------
    # Autocomplete Settings
    # -------------------------------------------------------------------------
    autocomplete_min_length: int = constants.AUTOCOMPLETE_MIN_LENGTH
    popular_suggestion_pool: int = constants.POPULAR_SUGGESTION_POOL
    popular_suggestion_limit: int = constants.POPULAR_SUGGESTION_LIMIT

    # -------------------------------------------------------------------------
    # Recommendation Settings
    # -------------------------------------------------------------------------
    recommendation_limit: int = constants.RECOMMENDATION_LIMIT
    recommendation_source_limit: int = constants.RECOMMENDATION_SOURCE_LIMIT
    recent_history_window: int = constants.RECENT_HISTORY_WINDOW


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
