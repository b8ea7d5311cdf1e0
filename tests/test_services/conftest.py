"""Fixtures for query service tests."""

import pytest

from wikicontext.fallback.policies import NeverEligible
from wikicontext.fallback.service import FallbackSynthesizer
from wikicontext.ingestion.service import ContentFetcher
from wikicontext.services.query_service import WikiContextService


@pytest.fixture
def build_service(cache, http_client, make_registry):
    """Build a service over the given URLs with a non-retrying client."""

    def _build(urls, synthesizer=None, ranker=None, auth_rules=None, fetcher_cls=ContentFetcher):
        synthesizer = synthesizer or FallbackSynthesizer(NeverEligible())
        fetcher = fetcher_cls(cache, http_client, synthesizer)
        return WikiContextService(
            make_registry(urls, auth_rules),
            fetcher=fetcher,
            ranker=ranker,
            synthesizer=synthesizer,
        )

    return _build
