"""Configuration for AI-assisted relevance ranking.

Mirrors the ``ai`` block of the JSON config. All settings can be
overridden via AI_* environment variables.
"""

from typing import Any

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class RankingConfig(BaseSettings):
    """Configuration for the relevance ranker and its AI capability.

    Example:
        AI_ENABLED=true
        AI_PRIMARY_PROVIDER=openai
        AI_OPENAI_API_KEY=sk-...
        AI_USE_MOCK=true
    """

    model_config = SettingsConfigDict(
        env_prefix="AI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = Field(default=False, description="Enable the AI rerank pass")
    use_mock: bool = Field(
        default=False,
        description="Force the deterministic keyword-overlap provider",
    )
    primary_provider: str = Field(default="mock", description="Provider key to use first")
    providers: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Provider configs keyed by name: {type, enabled, ...}",
    )
    minimum_relevance_score: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Candidates scoring below this are filtered out",
    )
    summary_length: int = Field(default=200, ge=20, description="Max summary length")

    # OpenAI provider
    openai_api_key: SecretStr | None = Field(default=None)
    openai_embedding_model: str = Field(default="text-embedding-3-small")
    openai_summary_model: str = Field(default="gpt-4o-mini")
    llm_timeout: float = Field(default=30.0, ge=5.0, le=120.0)

    # Circuit breaker settings
    circuit_failure_threshold: int = Field(default=5, ge=1)
    circuit_recovery_timeout: float = Field(default=60.0, ge=0.0)
