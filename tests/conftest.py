"""Pytest fixtures for wiki-context tests."""

import pytest

from wikicontext.cache.store import ContentCache
from wikicontext.config.settings import Settings
from wikicontext.fallback.policies import AlwaysEligible, NeverEligible
from wikicontext.fallback.service import FallbackSynthesizer
from wikicontext.ingestion.http_client import HTTPClient, RetryConfig
from wikicontext.sources.auth import AuthResolver
from wikicontext.sources.registry import SourceRegistry, build_entry
from wikicontext.sources.schemas import SourceEntry


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def test_settings() -> Settings:
    """Settings configured for testing."""
    return Settings(
        environment="development",
        log_level="DEBUG",
        wiki_urls=[],
        max_http_retries=0,
        http_backoff_base=0.0,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ContentCache:
    """Cache with a 60 second TTL on a fake clock."""
    return ContentCache(ttl_seconds=60.0, clock=clock)


@pytest.fixture
def http_client() -> HTTPClient:
    """HTTP client that never retries."""
    return HTTPClient(RetryConfig(max_retries=0, base_delay=0.0), timeout=5.0)


@pytest.fixture
def always_synthesizer() -> FallbackSynthesizer:
    return FallbackSynthesizer(AlwaysEligible())


@pytest.fixture
def never_synthesizer() -> FallbackSynthesizer:
    return FallbackSynthesizer(NeverEligible())


@pytest.fixture
def markdown_entry() -> SourceEntry:
    return build_entry("https://example.com/docs/deployment-guide.md")


@pytest.fixture
def mediawiki_entry() -> SourceEntry:
    return build_entry("https://wiki.example.org/wiki/Kubernetes_Setup")


@pytest.fixture
def make_registry():
    """Build a registry from URLs and raw auth rules."""

    def _make(urls: list[str], auth_rules: list[dict] | None = None) -> SourceRegistry:
        return SourceRegistry(urls, AuthResolver.from_config(auth_rules or []))

    return _make
