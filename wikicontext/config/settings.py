"""Application settings using Pydantic Settings for environment-based configuration."""

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for the wiki-context engine.

    All settings can be overridden via environment variables with the
    WIKI_ prefix (e.g., WIKI_CACHE_TIMEOUT_MINUTES=5). List and dict
    fields are read as JSON (e.g., WIKI_WIKI_URLS='["https://..."]').
    """

    model_config = SettingsConfigDict(
        env_prefix="WIKI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Sources
    wiki_urls: list[str] = Field(default_factory=list)
    auth: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Ordered auth rules: {urlPattern, type, ...type-specific fields}",
    )

    # Content cache
    cache_timeout_minutes: float = Field(default=30.0, gt=0.0)

    # HTTP
    http_timeout: float = Field(default=30.0, ge=1.0, le=300.0)
    max_http_retries: int = Field(default=2, ge=0, le=10)
    http_backoff_base: float = Field(default=0.5, ge=0.0, le=30.0)
    max_backoff_seconds: float = Field(default=10.0, ge=0.0, le=300.0)
    user_agent: str = "wiki-context/0.1.0"

    # Observability
    metrics_port: int = 8000

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def cache_ttl_seconds(self) -> float:
        """Cache TTL in seconds."""
        return self.cache_timeout_minutes * 60.0


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.
    Clear cache with get_settings.cache_clear() if needed.
    """
    return Settings()
