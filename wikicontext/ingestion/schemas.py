"""Result types for the fetch stage."""

from dataclasses import dataclass
from enum import Enum


class FetchOrigin(str, Enum):
    """Where the content of a fetch came from."""

    CACHE_FRESH = "cache_fresh"
    NETWORK = "network"
    CACHE_STALE = "cache_stale"
    FALLBACK = "fallback"
    ERROR = "error"


@dataclass(frozen=True)
class FetchOutcome:
    """Content for one source plus the step of the failure chain that produced it."""

    url: str
    content: str
    origin: FetchOrigin
    error: str | None = None

    @property
    def from_network(self) -> bool:
        return self.origin == FetchOrigin.NETWORK

    @property
    def degraded(self) -> bool:
        """True when the network fetch failed and something else filled in."""
        return self.origin in (FetchOrigin.CACHE_STALE, FetchOrigin.FALLBACK, FetchOrigin.ERROR)
