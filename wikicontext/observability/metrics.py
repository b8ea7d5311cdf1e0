"""
Prometheus metrics for the retrieval engine.

Defines and exposes metrics for:
- Fetch outcomes per source type (fresh cache, network, stale cache, fallback, error)
- Fetch and query latency
- Results returned per query
- Ranker scoring errors
- Content cache size

Metrics are exposed via HTTP endpoint for Prometheus scraping.
"""

import logging

from prometheus_client import (
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    start_http_server,
)

from wikicontext.config.settings import get_settings

logger = logging.getLogger(__name__)

# Buckets for latency histograms (in seconds)
LATENCY_BUCKETS = (0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)


class MetricsCollector:
    """
    Prometheus metrics collector for the wiki-context engine.

    Usage:
        metrics = get_metrics()
        metrics.record_fetch("markdown", "network", latency=0.12)
        metrics.record_query(result_count=3, latency=0.4)
    """

    def __init__(self):
        """Initialize Prometheus metrics."""
        self.fetch_outcomes = Counter(
            "wiki_context_fetch_outcomes_total",
            "Content fetches by source type and where the content came from",
            ["source_type", "origin"],
        )

        self.fetch_latency = Histogram(
            "wiki_context_fetch_latency_seconds",
            "Time to fetch and extract content from a source over the network",
            ["source_type"],
            buckets=LATENCY_BUCKETS,
        )

        self.query_latency = Histogram(
            "wiki_context_query_latency_seconds",
            "End-to-end get_context latency",
            buckets=LATENCY_BUCKETS,
        )

        self.results_returned = Histogram(
            "wiki_context_results_returned",
            "Number of results returned per query",
            buckets=(1, 2, 3, 5, 10, 20, 50),
        )

        self.ranker_errors = Counter(
            "wiki_context_ranker_errors_total",
            "Per-item AI scoring failures defaulted by the ranker",
            ["error_type"],
        )

        self.cache_entries = Gauge(
            "wiki_context_cache_entries",
            "Number of sources with cached content",
        )

        logger.info("Prometheus metrics initialized")

    def start_server(self, port: int | None = None) -> None:
        """
        Start Prometheus metrics HTTP server.

        Args:
            port: Port to expose metrics on (default from settings)
        """
        port = port or get_settings().metrics_port
        start_http_server(port, registry=REGISTRY)
        logger.info(f"Prometheus metrics server started on port {port}")

    def record_fetch(
        self,
        source_type: str,
        origin: str,
        latency: float | None = None,
    ) -> None:
        """
        Record where a fetch got its content from.

        Args:
            source_type: Source type value (markdown, mediawiki, ...)
            origin: Fetch origin (cache_fresh, network, cache_stale, fallback, error)
            latency: Optional network latency in seconds
        """
        self.fetch_outcomes.labels(source_type=source_type, origin=origin).inc()
        if latency is not None:
            self.fetch_latency.labels(source_type=source_type).observe(latency)

    def record_query(self, result_count: int, latency: float) -> None:
        """Record a completed get_context call."""
        self.results_returned.observe(result_count)
        self.query_latency.observe(latency)

    def record_ranker_error(self, error_type: str) -> None:
        """Record a defaulted per-item scoring failure."""
        self.ranker_errors.labels(error_type=error_type).inc()

    def set_cache_entries(self, count: int) -> None:
        """Set the number of cached sources."""
        self.cache_entries.set(count)


# Global metrics instance
_metrics: MetricsCollector | None = None


def get_metrics() -> MetricsCollector:
    """Get global metrics collector instance."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics
