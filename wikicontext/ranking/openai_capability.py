"""OpenAI-backed relevance capability.

Relevance is the cosine similarity of query and content embeddings;
summaries come from a chat completion. The SDK is imported on first
use so the package works without ``openai`` configured.
"""

import logging
from typing import Any

import numpy as np

from wikicontext.ranking.circuit_breaker import GenericCircuitBreaker
from wikicontext.ranking.config import RankingConfig

logger = logging.getLogger(__name__)

SUMMARY_PROMPT = (
    "Summarize the following text in no more than {max_length} characters. "
    "Focus on key information only."
)

# Embedding inputs are truncated to stay within model limits
MAX_EMBEDDING_CHARS = 8000
MAX_CACHED_EMBEDDINGS = 1000


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity of two vectors, 0.0 if either is all zeros."""
    if a.shape != b.shape:
        raise ValueError(f"Vector shapes differ: {a.shape} vs {b.shape}")
    norm = float(np.linalg.norm(a) * np.linalg.norm(b))
    if norm == 0.0:
        return 0.0
    return float(np.dot(a, b) / norm)


class OpenAICapability:
    """Relevance scoring and summaries through the OpenAI API.

    Args:
        config: Ranking configuration with API key and model names.
    """

    def __init__(self, config: RankingConfig) -> None:
        self._config = config
        self._client: Any = None
        self._embeddings: dict[str, np.ndarray] = {}
        self._breaker = GenericCircuitBreaker(
            failure_threshold=config.circuit_failure_threshold,
            recovery_timeout=config.circuit_recovery_timeout,
            name="openai",
        )

    @property
    def breaker(self) -> GenericCircuitBreaker:
        return self._breaker

    def _get_client(self) -> Any:
        """Lazy-initialize OpenAI async client."""
        if self._client is None:
            import openai

            api_key = self._config.openai_api_key
            self._client = openai.AsyncOpenAI(
                api_key=api_key.get_secret_value() if api_key else None,
                timeout=self._config.llm_timeout,
            )
        return self._client

    async def embed(self, text: str) -> np.ndarray:
        """Embedding vector for a text, memoized per input."""
        text = text[:MAX_EMBEDDING_CHARS]
        cached = self._embeddings.get(text)
        if cached is not None:
            return cached

        async def _call() -> np.ndarray:
            response = await self._get_client().embeddings.create(
                model=self._config.openai_embedding_model,
                input=text,
            )
            return np.asarray(response.data[0].embedding, dtype=np.float64)

        vector = await self._breaker.call(_call)
        if len(self._embeddings) >= MAX_CACHED_EMBEDDINGS:
            self._embeddings.pop(next(iter(self._embeddings)))
        self._embeddings[text] = vector
        return vector

    async def calculate_relevance(self, query: str, content: str) -> float:
        query_vector = await self.embed(query)
        content_vector = await self.embed(content)
        return cosine_similarity(query_vector, content_vector)

    async def summarize_content(self, content: str, max_length: int = 200) -> str:
        async def _call() -> str:
            response = await self._get_client().chat.completions.create(
                model=self._config.openai_summary_model,
                messages=[
                    {"role": "system", "content": SUMMARY_PROMPT.format(max_length=max_length)},
                    {"role": "user", "content": content},
                ],
                max_tokens=max(16, max_length // 2),
                temperature=0.3,
            )
            return (response.choices[0].message.content or "").strip()

        summary = await self._breaker.call(_call)
        return summary[:max_length]
