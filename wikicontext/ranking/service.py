"""
Optional AI rerank pass over merged query results.

Every candidate is scored concurrently. A failure on one candidate
never aborts the batch: that candidate gets a neutral score and an
empty summary.
"""

import asyncio

import structlog

from wikicontext.observability.metrics import get_metrics
from wikicontext.ranking.capability import RelevanceCapability, create_capability
from wikicontext.ranking.config import RankingConfig
from wikicontext.relevance.schemas import QueryResult

logger = structlog.get_logger(__name__)

DEFAULT_SCORE_ON_ERROR = 0.5
SUMMARY_THRESHOLD_CHARS = 200


def clamp_score(score: float) -> float:
    return max(0.0, min(1.0, float(score)))


class RelevanceRanker:
    """
    Scores, sorts and threshold-filters candidates with an AI capability.

    Without a capability the candidates pass through unchanged.

    Usage:
        ranker = RelevanceRanker.from_config(RankingConfig(enabled=True, use_mock=True))
        ranked = await ranker.rank("deploy to kubernetes", results)
    """

    def __init__(
        self,
        capability: RelevanceCapability | None = None,
        minimum_score: float = 0.5,
        summary_length: int = SUMMARY_THRESHOLD_CHARS,
    ):
        self._capability = capability
        self._minimum_score = minimum_score
        self._summary_length = summary_length
        self._metrics = get_metrics()

    @classmethod
    def from_config(cls, config: RankingConfig | None = None) -> "RelevanceRanker":
        config = config or RankingConfig()
        return cls(
            capability=create_capability(config),
            minimum_score=config.minimum_relevance_score,
            summary_length=config.summary_length,
        )

    @property
    def enabled(self) -> bool:
        return self._capability is not None

    @property
    def minimum_score(self) -> float:
        return self._minimum_score

    async def _score(self, query: str, candidate: QueryResult) -> QueryResult:
        try:
            score = clamp_score(await self._capability.calculate_relevance(query, candidate.content))
            summary = None
            if len(candidate.content) > SUMMARY_THRESHOLD_CHARS:
                summary = await self._capability.summarize_content(
                    candidate.content, self._summary_length
                )
        except Exception as e:
            logger.warning(
                "Relevance scoring failed, using default score",
                title=candidate.title,
                error=str(e),
                error_type=type(e).__name__,
            )
            self._metrics.record_ranker_error(type(e).__name__)
            score, summary = DEFAULT_SCORE_ON_ERROR, ""

        update: dict = {"relevance_score": score}
        if summary is not None:
            update["summary"] = summary
        return candidate.model_copy(update=update)

    async def rank(self, query: str, candidates: list[QueryResult]) -> list[QueryResult]:
        """
        Score and order candidates by relevance.

        Returns:
            Candidates scoring at least the minimum, best first. If none
            pass the threshold, the original candidates unchanged.
        """
        if self._capability is None or not candidates:
            return candidates

        scored = await asyncio.gather(*(self._score(query, c) for c in candidates))
        ranked = sorted(scored, key=lambda r: r.relevance_score, reverse=True)
        kept = [r for r in ranked if r.relevance_score >= self._minimum_score]

        if not kept:
            logger.info(
                "No candidate met the relevance threshold, returning unranked results",
                minimum_score=self._minimum_score,
                candidates=len(candidates),
            )
            return candidates

        logger.debug("Ranked candidates", kept=len(kept), candidates=len(candidates))
        return kept
