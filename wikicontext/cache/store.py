"""
In-memory content cache keyed by source URL.

Every configured source gets exactly one slot for the life of the
process. Freshness is evaluated lazily at read time against the TTL;
nothing is evicted by age. A stale entry stays available as a fallback
value until the next successful fetch overwrites it.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from wikicontext.relevance.keywords import build_word_index

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 30 * 60


@dataclass(frozen=True)
class CacheEntry:
    """Content fetched for one source URL."""

    content: str
    fetched_at: float
    word_index: dict[str, int] = field(default_factory=dict, repr=False)

    def top_words(self, n: int = 10) -> list[tuple[str, int]]:
        """Most frequent words in the content."""
        return sorted(self.word_index.items(), key=lambda item: (-item[1], item[0]))[:n]


def is_fresh(entry: CacheEntry, now: float, ttl: float) -> bool:
    """Check whether an entry is young enough to serve without refetching."""
    return now - entry.fetched_at <= ttl


@dataclass
class CacheStats:
    """Cache read statistics."""

    hits: int = 0
    misses: int = 0
    stale_reads: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total


class ContentCache:
    """
    Single-level TTL cache of source content.

    Args:
        ttl_seconds: Maximum age before an entry is considered stale
        clock: Time source returning epoch seconds (injectable for tests)

    Usage:
        cache = ContentCache(ttl_seconds=60)
        cache.put(url, content)
        entry = cache.get_fresh(url)  # None once older than 60s
        stale = cache.get(url)        # still available
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._stats = CacheStats()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def stats(self) -> CacheStats:
        return self._stats

    def now(self) -> float:
        """Current time according to the cache clock."""
        return self._clock()

    def get(self, url: str) -> CacheEntry | None:
        """Return the entry for a URL regardless of age."""
        return self._entries.get(url)

    def get_fresh(self, url: str) -> CacheEntry | None:
        """
        Return the entry for a URL only if it is within the TTL.

        Counts a hit or a miss in the cache statistics.
        """
        entry = self._entries.get(url)
        if entry is not None and is_fresh(entry, self._clock(), self._ttl):
            self._stats.hits += 1
            return entry
        self._stats.misses += 1
        return None

    def get_stale(self, url: str) -> CacheEntry | None:
        """
        Return the entry for a URL to serve after a failed fetch.

        Counts a stale read when an entry exists.
        """
        entry = self._entries.get(url)
        if entry is not None:
            self._stats.stale_reads += 1
        return entry

    def put(self, url: str, content: str) -> CacheEntry:
        """
        Replace the entry for a URL with freshly fetched content.

        Builds the word-frequency index and stamps the current time.
        """
        entry = CacheEntry(
            content=content,
            fetched_at=self._clock(),
            word_index=build_word_index(content),
        )
        self._entries[url] = entry
        logger.debug("Cached %d chars for %s", len(content), url)
        return entry

    def is_stale(self, url: str) -> bool:
        """True if an entry exists but is older than the TTL."""
        entry = self._entries.get(url)
        return entry is not None and not is_fresh(entry, self._clock(), self._ttl)

    def age_seconds(self, url: str) -> float | None:
        """Age of the entry for a URL, if cached."""
        entry = self._entries.get(url)
        if entry is None:
            return None
        return self._clock() - entry.fetched_at

    def clear(self) -> None:
        """Drop every entry and reset statistics."""
        self._entries.clear()
        self._stats = CacheStats()

    def urls(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def __len__(self) -> int:
        return len(self._entries)
