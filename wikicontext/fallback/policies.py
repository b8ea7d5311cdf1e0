"""Eligibility policies for sources without a keyword allowlist."""

import random
from typing import Protocol

from wikicontext.sources.schemas import SourceEntry


class EligibilityPolicy(Protocol):
    """Decides whether a source may get synthesized content."""

    def is_eligible(self, entry: SourceEntry) -> bool: ...


class ProbabilisticEligibility:
    """
    Eligible with a fixed probability.

    Args:
        probability: Chance in [0, 1] that a source is eligible
        seed: RNG seed for reproducible decisions
    """

    def __init__(self, probability: float = 0.7, seed: int | None = None):
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"probability must be within [0, 1], got {probability}")
        self.probability = probability
        self._rng = random.Random(seed)

    def is_eligible(self, entry: SourceEntry) -> bool:
        return self._rng.random() < self.probability


class AlwaysEligible:
    def is_eligible(self, entry: SourceEntry) -> bool:
        return True


class NeverEligible:
    def is_eligible(self, entry: SourceEntry) -> bool:
        return False
