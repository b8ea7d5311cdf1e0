"""Observability layer - logging and metrics."""

from wikicontext.observability.logging import setup_logging
from wikicontext.observability.metrics import MetricsCollector, get_metrics

__all__ = ["setup_logging", "MetricsCollector", "get_metrics"]
