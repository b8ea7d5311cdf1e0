"""
Content fetching with cache and failure recovery.

For a source, content is resolved in this order:

1. fresh cache entry (no network call)
2. network fetch through the source type's fetcher, which refreshes the cache
3. stale cache entry, if the fetch failed
4. synthesized fallback document
5. literal error message

The caller always gets text back; errors never propagate out of fetch().
"""

import time

import structlog

from wikicontext.cache.store import ContentCache
from wikicontext.config.settings import Settings, get_settings
from wikicontext.fallback.service import FallbackSynthesizer
from wikicontext.ingestion.base_fetcher import BaseFetcher
from wikicontext.ingestion.fetchers import FETCHERS, get_fetcher
from wikicontext.ingestion.http_client import HTTPClient, RetryConfig
from wikicontext.ingestion.schemas import FetchOrigin, FetchOutcome
from wikicontext.observability.metrics import get_metrics
from wikicontext.sources.schemas import SourceEntry, SourceType

logger = structlog.get_logger(__name__)

# Query and keywords handed to the synthesizer when a fetch fails outside a query
FETCH_ERROR_QUERY = "error"
FETCH_ERROR_KEYWORDS = ["error"]


def fetch_error_message(url: str, error: Exception | str) -> str:
    return f"Unable to fetch content from {url}: {error}"


def create_http_client(settings: Settings | None = None) -> HTTPClient:
    """Build an HTTPClient from the HTTP settings."""
    settings = settings or get_settings()
    return HTTPClient(
        retry_config=RetryConfig(
            max_retries=settings.max_http_retries,
            base_delay=settings.http_backoff_base,
            max_backoff_seconds=settings.max_backoff_seconds,
        ),
        timeout=settings.http_timeout,
        user_agent=settings.user_agent,
    )


class ContentFetcher:
    """
    Resolves the content of a source through the cache and failure chain.

    The HTTP client is opened lazily on the first network fetch and
    closed by close() or on leaving the async context.

    Usage:
        async with ContentFetcher(ContentCache()) as fetcher:
            outcome = await fetcher.fetch(entry)
            print(outcome.origin, outcome.content[:80])
    """

    def __init__(
        self,
        cache: ContentCache,
        http: HTTPClient | None = None,
        synthesizer: FallbackSynthesizer | None = None,
        fetchers: dict[SourceType, BaseFetcher] | None = None,
    ):
        """
        Initialize the fetcher.

        Args:
            cache: Content cache shared with the caller
            http: HTTP client (created from settings if None)
            synthesizer: Fallback synthesizer (from FallbackConfig if None)
            fetchers: Source type -> fetcher table (defaults to FETCHERS)
        """
        self._cache = cache
        self._http = http or create_http_client()
        self._synthesizer = synthesizer or FallbackSynthesizer.from_config()
        self._fetchers = fetchers or FETCHERS
        self._metrics = get_metrics()

    async def __aenter__(self) -> "ContentFetcher":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    @property
    def cache(self) -> ContentCache:
        return self._cache

    async def close(self) -> None:
        await self._http.close()

    async def fetch(self, entry: SourceEntry) -> FetchOutcome:
        """
        Get the content for a source.

        Never raises; the returned outcome records which step of the
        failure chain produced the content.
        """
        source_type = entry.source_type.value

        cached = self._cache.get_fresh(entry.url)
        if cached is not None:
            self._metrics.record_fetch(source_type, FetchOrigin.CACHE_FRESH.value)
            return FetchOutcome(entry.url, cached.content, FetchOrigin.CACHE_FRESH)

        start = time.perf_counter()
        try:
            await self._http.open()
            fetcher = get_fetcher(entry.source_type, self._fetchers)
            content = await fetcher.fetch(entry, self._http)
        except Exception as e:
            logger.warning(
                "Fetch failed",
                url=entry.url,
                source_type=source_type,
                error=str(e),
                error_type=type(e).__name__,
            )
            return self._recover(entry, e)

        self._cache.put(entry.url, content)
        self._metrics.set_cache_entries(len(self._cache))
        self._metrics.record_fetch(
            source_type,
            FetchOrigin.NETWORK.value,
            latency=time.perf_counter() - start,
        )
        logger.debug("Fetched content", url=entry.url, chars=len(content))
        return FetchOutcome(entry.url, content, FetchOrigin.NETWORK)

    def _recover(self, entry: SourceEntry, error: Exception) -> FetchOutcome:
        source_type = entry.source_type.value
        message = str(error)

        stale = self._cache.get_stale(entry.url)
        if stale is not None:
            logger.info("Serving stale cache", url=entry.url)
            self._metrics.record_fetch(source_type, FetchOrigin.CACHE_STALE.value)
            return FetchOutcome(entry.url, stale.content, FetchOrigin.CACHE_STALE, error=message)

        synthesized = self._synthesizer.synthesize(entry, FETCH_ERROR_QUERY, FETCH_ERROR_KEYWORDS)
        if synthesized is not None:
            self._metrics.record_fetch(source_type, FetchOrigin.FALLBACK.value)
            return FetchOutcome(entry.url, synthesized, FetchOrigin.FALLBACK, error=message)

        self._metrics.record_fetch(source_type, FetchOrigin.ERROR.value)
        return FetchOutcome(
            entry.url,
            fetch_error_message(entry.url, error),
            FetchOrigin.ERROR,
            error=message,
        )

    async def fetch_content(self, entry: SourceEntry) -> str:
        """Get the content for a source as text."""
        outcome = await self.fetch(entry)
        return outcome.content
