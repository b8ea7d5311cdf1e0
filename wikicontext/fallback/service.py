"""
Fallback content synthesis.

Used only after a network fetch failed and nothing is cached for the
source. Two known source families are gated by a keyword allowlist;
every other source defers to the configured eligibility policy.
"""

import logging

from wikicontext.fallback.config import FallbackConfig
from wikicontext.fallback.policies import (
    EligibilityPolicy,
    NeverEligible,
    ProbabilisticEligibility,
)
from wikicontext.fallback.templates import render_fallback
from wikicontext.sources.schemas import SourceEntry

logger = logging.getLogger(__name__)

# URL marker -> keywords that make the source relevant
DOMAIN_ALLOWLISTS: dict[str, frozenset[str]] = {
    "devops": frozenset(
        {"devops", "docker", "kubernetes", "pipeline", "ci", "cd", "jenkins", "aws", "terraform"}
    ),
    "nixos": frozenset({"nix", "nixos", "package", "flake", "linux", "config", "system"}),
}


def allowlist_for(url: str) -> frozenset[str] | None:
    """Keyword allowlist for a source URL, if it belongs to a known family."""
    lowered = url.lower()
    for marker, allowlist in DOMAIN_ALLOWLISTS.items():
        if marker in lowered:
            return allowlist
    return None


class FallbackSynthesizer:
    """
    Produces placeholder documents for unreachable sources.

    Usage:
        synthesizer = FallbackSynthesizer(AlwaysEligible())
        text = synthesizer.synthesize(entry, "deploy", ["deploy"])
    """

    def __init__(self, policy: EligibilityPolicy | None = None):
        self._policy = policy or ProbabilisticEligibility()

    @classmethod
    def from_config(cls, config: FallbackConfig | None = None) -> "FallbackSynthesizer":
        """Build from settings; a disabled config never synthesizes."""
        config = config or FallbackConfig()
        if not config.enabled:
            return cls(NeverEligible())
        return cls(ProbabilisticEligibility(config.probability, seed=config.seed))

    @property
    def policy(self) -> EligibilityPolicy:
        return self._policy

    def is_eligible(self, entry: SourceEntry, keywords: list[str]) -> bool:
        allowlist = allowlist_for(entry.url)
        if allowlist is not None:
            return any(keyword.lower() in allowlist for keyword in keywords)
        return self._policy.is_eligible(entry)

    def synthesize(self, entry: SourceEntry, query: str, keywords: list[str]) -> str | None:
        """
        Generate placeholder content for a source.

        Returns:
            Templated document, or None if the source is not eligible
        """
        if not self.is_eligible(entry, keywords):
            logger.debug(f"No fallback content for {entry.url}")
            return None

        logger.info(f"Synthesized fallback content for {entry.url}")
        return render_fallback(entry, query, keywords)
