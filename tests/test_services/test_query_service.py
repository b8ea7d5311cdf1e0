"""Tests for the query service."""

import httpx
import pytest
import respx

from wikicontext.config.loader import load_config
from wikicontext.fallback.policies import AlwaysEligible
from wikicontext.fallback.service import FallbackSynthesizer
from wikicontext.ingestion.service import ContentFetcher
from wikicontext.ranking.capability import KeywordOverlapCapability
from wikicontext.ranking.service import RelevanceRanker
from wikicontext.services.query_service import (
    PLACEHOLDER_TITLE,
    WikiContextService,
)

K8S_URL = "https://example.com/docs/k8s.md"
COOKING_URL = "https://example.com/docs/cooking.md"
DOWN_URL = "https://unreachable.example.com/docs/a.md"

K8S_MARKDOWN = (
    "# Kubernetes\n\n"
    "To deploy to kubernetes run:\n\n"
    "```bash\nkubectl apply -f deployment.yaml\n```\n"
)
COOKING_MARKDOWN = "# Recipes\n\nBake bread at 220 degrees."


class RaisingFetcher(ContentFetcher):
    async def fetch(self, entry):
        raise RuntimeError("extraction blew up")


def _mock_sources():
    respx.get(K8S_URL).mock(return_value=httpx.Response(200, text=K8S_MARKDOWN))
    respx.get(COOKING_URL).mock(return_value=httpx.Response(200, text=COOKING_MARKDOWN))
    respx.get(DOWN_URL).mock(side_effect=httpx.ConnectError("refused"))


class TestGetContext:
    @respx.mock
    async def test_kubernetes_query(self, build_service):
        _mock_sources()
        service = build_service([K8S_URL, COOKING_URL])

        results = await service.get_context({"query": {"text": "deploy to kubernetes"}})

        assert results == [
            {
                "title": "k8s",
                "content": "```bash\nkubectl apply -f deployment.yaml\n```",
                "url": K8S_URL,
                "source": "example.com",
                "type": "markdown",
            }
        ]

    @respx.mock
    async def test_unreachable_sources_give_placeholder(self, build_service):
        _mock_sources()
        service = build_service([DOWN_URL])

        results = await service.get_context({"query": {"text": "deploy to kubernetes"}})

        assert len(results) == 1
        assert results[0]["title"] == PLACEHOLDER_TITLE
        assert "wikiUrls" in results[0]["content"]

    async def test_no_sources_give_placeholder(self, build_service):
        results = await build_service([]).get_context({"query": {"text": "anything"}})

        assert [r["title"] for r in results] == [PLACEHOLDER_TITLE]

    @respx.mock
    async def test_unreachable_source_does_not_hide_others(self, build_service):
        _mock_sources()
        service = build_service([DOWN_URL, K8S_URL])

        results = await service.get_context({"query": {"text": "deploy to kubernetes"}})

        assert [r["url"] for r in results] == [K8S_URL]

    @respx.mock
    async def test_results_follow_configured_order(self, build_service):
        respx.get(COOKING_URL).mock(
            return_value=httpx.Response(200, text="bread for kubernetes clusters")
        )
        respx.get(K8S_URL).mock(return_value=httpx.Response(200, text=K8S_MARKDOWN))
        service = build_service([COOKING_URL, K8S_URL])

        results = await service.get_context({"query": {"text": "kubernetes"}})

        assert [r["url"] for r in results] == [COOKING_URL, K8S_URL]

    @pytest.mark.parametrize(
        "request_body",
        [None, {}, {"query": "deploy"}, {"query": {}}, {"query": {"text": None}}, "deploy"],
    )
    async def test_invalid_request_returns_empty(self, build_service, request_body):
        assert await build_service([]).get_context(request_body) == []

    async def test_processing_error_becomes_synthesized_result(self, build_service):
        service = build_service(
            [K8S_URL],
            synthesizer=FallbackSynthesizer(AlwaysEligible()),
            fetcher_cls=RaisingFetcher,
        )

        results = await service.get_context({"query": {"text": "deploy to kubernetes"}})

        assert len(results) == 1
        assert results[0]["url"] == K8S_URL
        assert "deploy to kubernetes" in results[0]["content"]

    async def test_processing_error_without_fallback_reports_error(self, build_service):
        service = build_service([K8S_URL], fetcher_cls=RaisingFetcher)

        results = await service.get_context({"query": {"text": "deploy"}})

        assert results[0]["content"] == (
            f"Unable to fetch content from {K8S_URL}: extraction blew up"
        )

    @respx.mock
    async def test_ranker_scores_results(self, build_service):
        _mock_sources()
        ranker = RelevanceRanker(KeywordOverlapCapability(), minimum_score=0.5)
        service = build_service([K8S_URL], ranker=ranker)

        results = await service.get_context({"query": {"text": "deploy to kubernetes"}})

        assert results[0]["relevanceScore"] == 0.5
        assert 0.0 <= results[0]["relevanceScore"] <= 1.0

    @respx.mock
    async def test_second_query_served_from_cache(self, build_service):
        route = respx.get(K8S_URL).mock(return_value=httpx.Response(200, text=K8S_MARKDOWN))
        service = build_service([K8S_URL])

        await service.get_context({"query": {"text": "kubernetes"}})
        await service.get_context({"query": {"text": "kubectl"}})

        assert route.call_count == 1

    @respx.mock
    async def test_repeated_query_returns_same_results(self, build_service):
        route = respx.get(K8S_URL).mock(return_value=httpx.Response(200, text=K8S_MARKDOWN))
        service = build_service([K8S_URL])

        first = await service.get_context({"query": {"text": "deploy to kubernetes"}})
        second = await service.get_context({"query": {"text": "deploy to kubernetes"}})

        assert first == second
        assert first[0]["url"] == K8S_URL
        assert route.call_count == 1


class TestSearch:
    @respx.mock
    async def test_max_results(self, build_service):
        respx.get(K8S_URL).mock(return_value=httpx.Response(200, text=K8S_MARKDOWN))
        respx.get(COOKING_URL).mock(return_value=httpx.Response(200, text="kubernetes bread"))
        service = build_service([K8S_URL, COOKING_URL])

        results = await service.search("kubernetes", max_results=1)

        assert len(results) == 1

    async def test_results_without_score_survive_filter(self, build_service):
        results = await build_service([]).search("anything", min_relevance_score=0.9)

        assert [r.title for r in results] == [PLACEHOLDER_TITLE]

    @respx.mock
    async def test_min_score_filter(self, build_service):
        respx.get(K8S_URL).mock(return_value=httpx.Response(200, text=K8S_MARKDOWN))
        ranker = RelevanceRanker(KeywordOverlapCapability(), minimum_score=0.0)
        service = build_service([K8S_URL], ranker=ranker)

        assert await service.search("deploy to kubernetes", min_relevance_score=0.9) == []

    async def test_blank_query_rejected(self, build_service):
        with pytest.raises(ValueError):
            await build_service([]).search("   ")


class TestCacheManagement:
    @respx.mock
    async def test_prefetch(self, build_service):
        _mock_sources()
        service = build_service([K8S_URL, DOWN_URL])

        outcomes = await service.prefetch()

        assert outcomes == {K8S_URL: "network", DOWN_URL: "error"}
        assert K8S_URL in service.cache
        assert DOWN_URL not in service.cache

    @respx.mock
    async def test_source_details_and_stats(self, build_service):
        _mock_sources()
        respx.get("https://wiki.example.org/api.php").mock(return_value=httpx.Response(500))
        service = build_service(
            [K8S_URL, "https://wiki.example.org/", "not a url"],
            auth_rules=[{"urlPattern": "wiki\\.example", "type": "token", "token": "t"}],
        )
        await service.prefetch()

        details = {d.url: d for d in service.source_details()}
        assert details[K8S_URL].cached
        assert details[K8S_URL].type == "markdown"
        assert details["https://wiki.example.org/"].auth_type == "token"
        assert not details["https://wiki.example.org/"].cached

        stats = service.source_stats(top_words=3)
        assert stats.total_sources == 2
        assert stats.by_type == {"markdown": 1, "mediawiki": 1}
        assert stats.authenticated_sources == 1
        assert stats.cached_sources == 1
        assert stats.invalid_urls == ["not a url"]
        assert K8S_URL in stats.top_words

        response = stats.to_response()
        assert response["totalSources"] == 2
        assert response["byType"] == {"markdown": 1, "mediawiki": 1}

    @respx.mock
    async def test_clear_cache(self, build_service):
        _mock_sources()
        service = build_service([K8S_URL])
        await service.prefetch()

        service.clear_cache()

        assert len(service.cache) == 0


class TestFromConfig:
    async def test_builds_engine(self, http_client):
        config = load_config(
            {
                "wikiUrls": [K8S_URL, "https://wiki.example.org/"],
                "cacheTimeoutMinutes": 5,
                "ai": {"enabled": True, "useMock": True, "minimumRelevanceScore": 0.2},
                "fallback": {"enabled": False},
            }
        )

        async with WikiContextService.from_config(config, http=http_client) as service:
            assert len(service.registry) == 2
            assert service.cache.ttl_seconds == 300
