"""Content cache: one TTL-checked slot per source URL."""

from wikicontext.cache.store import (
    DEFAULT_TTL_SECONDS,
    CacheEntry,
    CacheStats,
    ContentCache,
    is_fresh,
)

__all__ = [
    "DEFAULT_TTL_SECONDS",
    "CacheEntry",
    "CacheStats",
    "ContentCache",
    "is_fresh",
]
