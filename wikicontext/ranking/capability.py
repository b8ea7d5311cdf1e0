"""AI relevance capability contract and provider selection.

The ranker only needs two operations from a provider: a relevance
score for a (query, content) pair and a short summary of the content.
"""

import logging
import re
from typing import Protocol, runtime_checkable

from wikicontext.ranking.config import RankingConfig

logger = logging.getLogger(__name__)


@runtime_checkable
class RelevanceCapability(Protocol):
    """Scores and summarizes content for a query."""

    async def calculate_relevance(self, query: str, content: str) -> float: ...

    async def summarize_content(self, content: str, max_length: int = 200) -> str: ...


_TERM_SPLIT = re.compile(r"\W+")
_SENTENCE = re.compile(r"[^.!?]+[.!?]+")


class KeywordOverlapCapability:
    """Deterministic provider based on query term overlap.

    Needs no network access; used when ``use_mock`` is set or the
    ``mock`` provider is configured.
    """

    NEUTRAL_SCORE = 0.5

    async def calculate_relevance(self, query: str, content: str) -> float:
        """Fraction of query terms (longer than 2 chars) present in the content."""
        terms = [t for t in _TERM_SPLIT.split(query.lower()) if len(t) > 2]
        if not terms:
            return self.NEUTRAL_SCORE
        lowered = content.lower()
        matching = sum(1 for term in terms if term in lowered)
        return matching / len(terms)

    async def summarize_content(self, content: str, max_length: int = 200) -> str:
        """Leading whole sentences that fit in ``max_length``, else a truncation."""
        if len(content) <= max_length:
            return content

        summary = ""
        for sentence in _SENTENCE.findall(content):
            if len(summary) + len(sentence) > max_length:
                break
            summary += sentence

        if not summary:
            return content[: max_length - 3] + "..."
        return summary.strip()


PROVIDER_MOCK = "mock"
PROVIDER_OPENAI = "openai"


def _build_provider(name: str, provider_type: str, config: RankingConfig) -> RelevanceCapability | None:
    if provider_type == PROVIDER_MOCK:
        return KeywordOverlapCapability()
    if provider_type == PROVIDER_OPENAI:
        from wikicontext.ranking.openai_capability import OpenAICapability

        return OpenAICapability(config)
    logger.warning("Unsupported AI provider type %r for %s, skipping", provider_type, name)
    return None


def create_capability(config: RankingConfig | None = None) -> RelevanceCapability | None:
    """Create the capability the ranker should use.

    Returns None when AI ranking is disabled or no provider is usable.
    The primary provider is preferred; otherwise the first enabled
    provider in configuration order is used.
    """
    config = config or RankingConfig()
    if not config.enabled:
        return None
    if config.use_mock:
        logger.info("Using keyword overlap relevance provider")
        return KeywordOverlapCapability()

    providers: dict[str, RelevanceCapability] = {}
    for name, provider_config in config.providers.items():
        if not provider_config.get("enabled", True):
            continue
        provider = _build_provider(name, provider_config.get("type", name), config)
        if provider is not None:
            providers[name] = provider

    if not providers and config.primary_provider in (PROVIDER_MOCK, PROVIDER_OPENAI):
        provider = _build_provider(config.primary_provider, config.primary_provider, config)
        if provider is not None:
            providers[config.primary_provider] = provider

    if not providers:
        logger.warning("AI ranking enabled but no provider is available")
        return None

    if config.primary_provider in providers:
        return providers[config.primary_provider]

    name, provider = next(iter(providers.items()))
    logger.warning(
        "Primary provider %r not available, using %r instead",
        config.primary_provider,
        name,
    )
    return provider
