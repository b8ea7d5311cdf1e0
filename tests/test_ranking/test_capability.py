"""Tests for relevance capabilities and provider selection."""

from unittest.mock import AsyncMock, MagicMock

import numpy as np
import pytest

from wikicontext.ranking.capability import (
    KeywordOverlapCapability,
    RelevanceCapability,
    create_capability,
)
from wikicontext.ranking.circuit_breaker import CircuitOpenError
from wikicontext.ranking.config import RankingConfig
from wikicontext.ranking.openai_capability import OpenAICapability, cosine_similarity


class TestKeywordOverlapCapability:
    async def test_full_overlap(self):
        capability = KeywordOverlapCapability()
        assert await capability.calculate_relevance("deploy kubernetes", "Kubernetes deploy guide") == 1.0

    async def test_partial_overlap(self):
        capability = KeywordOverlapCapability()
        assert await capability.calculate_relevance("deploy kubernetes", "deploy with docker") == 0.5

    async def test_neutral_without_terms(self):
        capability = KeywordOverlapCapability()
        assert await capability.calculate_relevance("a b", "anything") == 0.5

    async def test_short_content_not_summarized(self):
        capability = KeywordOverlapCapability()
        assert await capability.summarize_content("Short text.", 200) == "Short text."

    async def test_summary_keeps_whole_sentences(self):
        capability = KeywordOverlapCapability()
        content = "First sentence here. Second one follows. " + "Third is long. " * 20

        summary = await capability.summarize_content(content, 45)

        assert summary == "First sentence here. Second one follows."

    async def test_summary_truncates_without_sentences(self):
        capability = KeywordOverlapCapability()
        summary = await capability.summarize_content("x" * 300, 50)

        assert summary == "x" * 47 + "..."

    def test_satisfies_protocol(self):
        assert isinstance(KeywordOverlapCapability(), RelevanceCapability)


class TestCreateCapability:
    def test_disabled(self):
        assert create_capability(RankingConfig(enabled=False)) is None

    def test_use_mock(self):
        config = RankingConfig(enabled=True, use_mock=True, primary_provider="openai")
        assert isinstance(create_capability(config), KeywordOverlapCapability)

    def test_primary_provider(self):
        config = RankingConfig(
            enabled=True,
            primary_provider="openai",
            providers={
                "mock": {"type": "mock", "enabled": True},
                "openai": {"type": "openai", "enabled": True},
            },
        )
        assert isinstance(create_capability(config), OpenAICapability)

    def test_falls_back_to_first_enabled(self):
        config = RankingConfig(
            enabled=True,
            primary_provider="gemini",
            providers={
                "gemini": {"type": "gemini", "enabled": True},
                "openai": {"type": "openai", "enabled": False},
                "mock": {"type": "mock", "enabled": True},
            },
        )
        assert isinstance(create_capability(config), KeywordOverlapCapability)

    def test_no_usable_provider(self):
        config = RankingConfig(
            enabled=True,
            primary_provider="local",
            providers={"local": {"type": "local", "enabled": True}},
        )
        assert create_capability(config) is None

    def test_primary_without_providers_block(self):
        config = RankingConfig(enabled=True, primary_provider="mock")
        assert isinstance(create_capability(config), KeywordOverlapCapability)


class TestCosineSimilarity:
    def test_identical(self):
        v = np.array([1.0, 2.0, 3.0])
        assert cosine_similarity(v, v) == pytest.approx(1.0)

    def test_orthogonal(self):
        assert cosine_similarity(np.array([1.0, 0.0]), np.array([0.0, 1.0])) == 0.0

    def test_zero_vector(self):
        assert cosine_similarity(np.zeros(3), np.ones(3)) == 0.0

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            cosine_similarity(np.ones(2), np.ones(3))


def _embedding_response(vector):
    response = MagicMock()
    response.data = [MagicMock(embedding=vector)]
    return response


class TestOpenAICapability:
    @pytest.fixture
    def config(self):
        return RankingConfig(
            enabled=True,
            openai_api_key="test-key",
            circuit_failure_threshold=2,
            circuit_recovery_timeout=60.0,
        )

    async def test_relevance_from_embeddings(self, config):
        capability = OpenAICapability(config)
        client = MagicMock()
        client.embeddings.create = AsyncMock(
            side_effect=[_embedding_response([1.0, 0.0]), _embedding_response([1.0, 0.0])]
        )
        capability._client = client

        score = await capability.calculate_relevance("query", "content")

        assert score == pytest.approx(1.0)
        assert client.embeddings.create.await_count == 2

    async def test_embeddings_are_memoized(self, config):
        capability = OpenAICapability(config)
        client = MagicMock()
        client.embeddings.create = AsyncMock(return_value=_embedding_response([0.5, 0.5]))
        capability._client = client

        await capability.embed("same text")
        await capability.embed("same text")

        assert client.embeddings.create.await_count == 1

    async def test_summary(self, config):
        capability = OpenAICapability(config)
        response = MagicMock()
        response.choices = [MagicMock(message=MagicMock(content="  A short summary. "))]
        client = MagicMock()
        client.chat.completions.create = AsyncMock(return_value=response)
        capability._client = client

        assert await capability.summarize_content("long text " * 50, 200) == "A short summary."

    async def test_breaker_opens_on_repeated_failures(self, config):
        capability = OpenAICapability(config)
        client = MagicMock()
        client.embeddings.create = AsyncMock(side_effect=RuntimeError("api down"))
        capability._client = client

        for text in ("a", "b"):
            with pytest.raises(RuntimeError):
                await capability.embed(text)

        with pytest.raises(CircuitOpenError):
            await capability.embed("c")
        assert client.embeddings.create.await_count == 2
