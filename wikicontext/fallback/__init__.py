"""Fallback synthesis for sources that cannot be fetched or served from cache."""

from wikicontext.fallback.config import FallbackConfig
from wikicontext.fallback.policies import (
    AlwaysEligible,
    EligibilityPolicy,
    NeverEligible,
    ProbabilisticEligibility,
)
from wikicontext.fallback.service import DOMAIN_ALLOWLISTS, FallbackSynthesizer, allowlist_for
from wikicontext.fallback.templates import TEMPLATES, render_fallback

__all__ = [
    "DOMAIN_ALLOWLISTS",
    "TEMPLATES",
    "AlwaysEligible",
    "EligibilityPolicy",
    "FallbackConfig",
    "FallbackSynthesizer",
    "NeverEligible",
    "ProbabilisticEligibility",
    "allowlist_for",
    "render_fallback",
]
