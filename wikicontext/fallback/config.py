"""Configuration for fallback content synthesis."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FallbackConfig(BaseSettings):
    """
    Settings for the fallback synthesizer.

    Settings can be overridden via environment variables prefixed with FALLBACK_.

    Example:
        FALLBACK_PROBABILITY=1.0
        FALLBACK_SEED=42
    """

    model_config = SettingsConfigDict(
        env_prefix="FALLBACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = Field(
        default=True,
        description="Synthesize placeholder content when fetch and cache both fail",
    )
    probability: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Eligibility probability for sources without a keyword allowlist",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the eligibility RNG (set for reproducible runs)",
    )
