"""AI-assisted relevance ranking."""

from wikicontext.ranking.capability import (
    KeywordOverlapCapability,
    RelevanceCapability,
    create_capability,
)
from wikicontext.ranking.circuit_breaker import (
    CircuitOpenError,
    CircuitState,
    GenericCircuitBreaker,
)
from wikicontext.ranking.config import RankingConfig
from wikicontext.ranking.service import DEFAULT_SCORE_ON_ERROR, RelevanceRanker, clamp_score

__all__ = [
    "DEFAULT_SCORE_ON_ERROR",
    "CircuitOpenError",
    "CircuitState",
    "GenericCircuitBreaker",
    "KeywordOverlapCapability",
    "RankingConfig",
    "RelevanceCapability",
    "RelevanceRanker",
    "clamp_score",
    "create_capability",
]
