"""
Query service - the entry point of the retrieval engine.

Fans a query out to every configured source concurrently, keeps the
excerpts that match, and passes the merged list through the optional
AI ranker. The result list is never empty and get_context() never
raises for a well-formed request.

Features:
- Concurrent per-source fetch and extraction
- Per-source error isolation
- Placeholder result when nothing matches
- Cache prefetch and source statistics
"""

import asyncio
import time
from typing import Any

import structlog
from pydantic import ValidationError

from wikicontext.cache.store import ContentCache
from wikicontext.config.loader import WikiContextConfig
from wikicontext.fallback.service import FallbackSynthesizer
from wikicontext.ingestion.http_client import HTTPClient
from wikicontext.ingestion.schemas import FetchOutcome
from wikicontext.ingestion.service import ContentFetcher, create_http_client, fetch_error_message
from wikicontext.observability.metrics import get_metrics
from wikicontext.ranking.service import RelevanceRanker
from wikicontext.relevance.keywords import extract_keywords
from wikicontext.relevance.matcher import extract_section, is_relevant
from wikicontext.relevance.schemas import QueryResult
from wikicontext.services.schemas import ContextRequest, SourceDetail, SourceStats
from wikicontext.sources.registry import SourceRegistry, title_from_url
from wikicontext.sources.schemas import SourceEntry

logger = structlog.get_logger(__name__)

PLACEHOLDER_TITLE = "No matching documentation found"
PLACEHOLDER_SOURCE = "wiki-context"
PLACEHOLDER_CONTENT = (
    "No configured documentation source returned content relevant to this query. "
    "Add documentation URLs to the wikiUrls list in mcp.config.json "
    "(or set WIKI_WIKI_URLS), and add auth rules for private wikis, "
    "then try again."
)


def placeholder_result() -> QueryResult:
    return QueryResult(
        title=PLACEHOLDER_TITLE,
        content=PLACEHOLDER_CONTENT,
        source_name=PLACEHOLDER_SOURCE,
    )


class WikiContextService:
    """
    Retrieves relevant documentation excerpts for a query.

    Usage:
        async with WikiContextService.from_config(load_config_file()) as service:
            results = await service.get_context({"query": {"text": "deploy to kubernetes"}})
    """

    def __init__(
        self,
        registry: SourceRegistry,
        cache: ContentCache | None = None,
        fetcher: ContentFetcher | None = None,
        ranker: RelevanceRanker | None = None,
        synthesizer: FallbackSynthesizer | None = None,
    ):
        """
        Initialize the service.

        Args:
            registry: Configured sources
            cache: Content cache (shared with the fetcher if one is given)
            fetcher: Content fetcher (built around the cache if None)
            ranker: Relevance ranker (pass-through if None)
            synthesizer: Fallback synthesizer for per-source failures
        """
        self._registry = registry
        self._synthesizer = synthesizer or FallbackSynthesizer.from_config()
        if fetcher is not None:
            self._cache = fetcher.cache
            self._fetcher = fetcher
        else:
            self._cache = cache or ContentCache()
            self._fetcher = ContentFetcher(self._cache, synthesizer=self._synthesizer)
        self._ranker = ranker or RelevanceRanker()
        self._metrics = get_metrics()

        logger.info(
            "Wiki context service initialized",
            sources=len(registry),
            by_type=registry.counts_by_type(),
            ranking=self._ranker.enabled,
        )

    @classmethod
    def from_config(
        cls,
        config: WikiContextConfig | None = None,
        http: HTTPClient | None = None,
    ) -> "WikiContextService":
        """Build the full engine from a configuration bundle."""
        config = config or WikiContextConfig()
        settings = config.settings

        registry = SourceRegistry.from_config(settings.wiki_urls, settings.auth)
        cache = ContentCache(ttl_seconds=settings.cache_ttl_seconds)
        synthesizer = FallbackSynthesizer.from_config(config.fallback)
        fetcher = ContentFetcher(
            cache,
            http=http or create_http_client(settings),
            synthesizer=synthesizer,
        )
        return cls(
            registry,
            fetcher=fetcher,
            ranker=RelevanceRanker.from_config(config.ranking),
            synthesizer=synthesizer,
        )

    async def __aenter__(self) -> "WikiContextService":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def close(self) -> None:
        await self._fetcher.close()

    @property
    def registry(self) -> SourceRegistry:
        return self._registry

    @property
    def cache(self) -> ContentCache:
        return self._cache

    async def get_context(self, request: Any) -> list[dict[str, Any]]:
        """
        Get relevant excerpts for a structured request.

        Args:
            request: ``{"query": {"text": ...}}``

        Returns:
            Result items in wire format; empty only if the request is malformed
        """
        try:
            parsed = ContextRequest.model_validate(request)
        except ValidationError as e:
            logger.warning("Invalid context request", errors=e.error_count())
            return []

        results = await self.query(parsed.text)
        return [r.to_response() for r in results]

    async def query(self, text: str) -> list[QueryResult]:
        """
        Get relevant excerpts for query text.

        Returns:
            Ranked results, never empty
        """
        start = time.perf_counter()
        keywords = extract_keywords(text)

        per_source = await asyncio.gather(
            *(self._process_entry(entry, text, keywords) for entry in self._registry)
        )
        results = [r for r in per_source if r is not None]

        if not results:
            logger.info("No relevant content found", query=text, sources=len(self._registry))
            results = [placeholder_result()]

        ranked = await self._ranker.rank(text, results)

        latency = time.perf_counter() - start
        self._metrics.record_query(len(ranked), latency)
        logger.info(
            "Query completed",
            query=text,
            keywords=keywords,
            results=len(ranked),
            latency_ms=round(latency * 1000, 1),
        )
        return ranked

    async def _process_entry(
        self,
        entry: SourceEntry,
        query: str,
        keywords: list[str],
    ) -> QueryResult | None:
        try:
            outcome = await self._fetcher.fetch(entry)
            return self._extract(entry, outcome, query, keywords)
        except Exception as e:
            logger.error(
                "Error processing source",
                url=entry.url,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            content = self._synthesizer.synthesize(entry, query, keywords)
            return self._result(entry, content or fetch_error_message(entry.url, e))

    def _extract(
        self,
        entry: SourceEntry,
        outcome: FetchOutcome,
        query: str,
        keywords: list[str],
    ) -> QueryResult | None:
        if not is_relevant(outcome.content, query, keywords):
            return None
        return self._result(entry, extract_section(outcome.content, query, keywords))

    def _result(self, entry: SourceEntry, content: str) -> QueryResult:
        return QueryResult(
            title=title_from_url(entry.url),
            content=content,
            url=entry.url,
            source_name=entry.display_name,
            source_type=entry.source_type.value,
        )

    async def search(
        self,
        text: str,
        max_results: int | None = None,
        min_relevance_score: float | None = None,
    ) -> list[QueryResult]:
        """
        Query with result limits applied.

        Results without a relevance score always pass the score filter.

        Raises:
            ValueError: If the query text is blank
        """
        if not text or not text.strip():
            raise ValueError("Query string is required")

        results = await self.query(text)
        if min_relevance_score is not None:
            results = [
                r
                for r in results
                if r.relevance_score is None or r.relevance_score >= min_relevance_score
            ]
        if max_results is not None:
            results = results[:max_results]
        return results

    async def prefetch(self) -> dict[str, str]:
        """
        Warm the cache for every source concurrently.

        Returns:
            URL -> origin of the content (network, cache_fresh, ...)
        """
        outcomes = await asyncio.gather(*(self._fetcher.fetch(entry) for entry in self._registry))
        summary = {o.url: o.origin.value for o in outcomes}
        logger.info("Prefetch complete", sources=len(summary), cached=len(self._cache))
        return summary

    def source_details(self) -> list[SourceDetail]:
        """Per-source description including cache state."""
        details = []
        for entry in self._registry:
            age = self._cache.age_seconds(entry.url)
            details.append(
                SourceDetail(
                    url=entry.url,
                    name=entry.display_name,
                    type=entry.source_type.value,
                    auth_type=entry.auth_type,
                    cached=age is not None,
                    cache_age_seconds=age,
                    stale=self._cache.is_stale(entry.url),
                )
            )
        return details

    def source_stats(self, top_words: int = 0) -> SourceStats:
        """
        Aggregate source and cache statistics.

        Args:
            top_words: Include this many most frequent words per cached source
        """
        stats = self._cache.stats
        words: dict[str, list[tuple[str, int]]] = {}
        if top_words > 0:
            for url in self._cache.urls():
                entry = self._cache.get(url)
                if entry is not None:
                    words[url] = entry.top_words(top_words)

        return SourceStats(
            total_sources=len(self._registry),
            by_type=self._registry.counts_by_type(),
            authenticated_sources=sum(1 for e in self._registry if e.auth is not None),
            cached_sources=sum(1 for e in self._registry if e.url in self._cache),
            invalid_urls=self._registry.invalid_urls,
            cache_hits=stats.hits,
            cache_misses=stats.misses,
            stale_reads=stats.stale_reads,
            top_words=words,
        )

    def clear_cache(self) -> None:
        self._cache.clear()
        self._metrics.set_cache_entries(0)
        logger.info("Content cache cleared")
