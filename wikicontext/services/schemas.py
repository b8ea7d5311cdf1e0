"""Request and response models for the query service."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class QueryText(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str


class ContextRequest(BaseModel):
    """Structured query as received from the protocol front end: ``{"query": {"text": ...}}``."""

    model_config = ConfigDict(extra="ignore")

    query: QueryText

    @property
    def text(self) -> str:
        return self.query.text


class SourceDetail(BaseModel):
    """One configured source as reported by ``source_details()``."""

    url: str
    name: str
    type: str
    auth_type: str | None = Field(default=None, serialization_alias="authType")
    cached: bool = False
    cache_age_seconds: float | None = Field(default=None, serialization_alias="cacheAgeSeconds")
    stale: bool = False

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class SourceStats(BaseModel):
    """Aggregate view of the configured sources."""

    total_sources: int = Field(serialization_alias="totalSources")
    by_type: dict[str, int] = Field(default_factory=dict, serialization_alias="byType")
    authenticated_sources: int = Field(default=0, serialization_alias="authenticatedSources")
    cached_sources: int = Field(default=0, serialization_alias="cachedSources")
    invalid_urls: list[str] = Field(default_factory=list, serialization_alias="invalidUrls")
    cache_hits: int = Field(default=0, serialization_alias="cacheHits")
    cache_misses: int = Field(default=0, serialization_alias="cacheMisses")
    stale_reads: int = Field(default=0, serialization_alias="staleReads")
    top_words: dict[str, list[tuple[str, int]]] = Field(
        default_factory=dict,
        serialization_alias="topWords",
    )

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
