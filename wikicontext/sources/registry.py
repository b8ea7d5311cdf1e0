"""Registry of configured documentation sources."""

import logging
from collections import Counter
from collections.abc import Iterable, Iterator
from typing import Any
from urllib.parse import unquote, urlparse

from wikicontext.sources.auth import AuthResolver
from wikicontext.sources.detection import detect_source_type
from wikicontext.sources.schemas import SourceEntry, SourceType

logger = logging.getLogger(__name__)


class InvalidSourceURLError(ValueError):
    """Raised when a configured source URL cannot be used."""


def build_entry(url: str, resolver: AuthResolver | None = None) -> SourceEntry:
    """
    Build a SourceEntry for one URL.

    Args:
        url: Source URL (http or https)
        resolver: Auth rules to attach credentials from

    Raises:
        InvalidSourceURLError: If the URL has no http(s) scheme or host
    """
    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise InvalidSourceURLError(f"Invalid source URL: {url!r}")

    return SourceEntry(
        url=url,
        source_type=detect_source_type(url),
        display_name=parsed.hostname,
        auth=resolver.resolve(url) if resolver is not None else None,
    )


def title_from_url(url: str) -> str:
    """
    Derive a page title from a URL's last path segment.

    ``https://example.com/docs/getting-started.md`` -> ``getting started``
    """
    parsed = urlparse(url)
    segment = unquote(parsed.path.rstrip("/").rsplit("/", 1)[-1])
    if "." in segment:
        segment = segment.rsplit(".", 1)[0]
    title = segment.replace("-", " ").replace("_", " ").strip()
    return title or parsed.hostname or "Unknown"


class SourceRegistry:
    """
    Immutable, ordered collection of SourceEntry descriptors.

    Each URL is typed and bound to credentials once, at construction.
    A bad URL is logged and skipped without affecting the others.
    Duplicate URLs keep their first occurrence.

    Usage:
        registry = SourceRegistry.from_config(urls, auth_rules)
        for entry in registry:
            ...
    """

    def __init__(self, urls: Iterable[str], resolver: AuthResolver | None = None):
        self._resolver = resolver or AuthResolver()
        self._entries: list[SourceEntry] = []
        self._invalid: list[str] = []

        seen: set[str] = set()
        for url in urls:
            try:
                entry = build_entry(url, self._resolver)
            except InvalidSourceURLError as e:
                logger.warning("Skipping source: %s", e)
                self._invalid.append(url)
                continue

            if entry.url in seen:
                logger.debug("Ignoring duplicate source %s", entry.url)
                continue
            seen.add(entry.url)
            self._entries.append(entry)

        logger.info(
            "Source registry built: %d sources, %d invalid",
            len(self._entries),
            len(self._invalid),
        )

    @classmethod
    def from_config(
        cls,
        urls: Iterable[str],
        auth_rules: Iterable[dict[str, Any]] = (),
    ) -> "SourceRegistry":
        """Build a registry from raw config values."""
        return cls(urls, AuthResolver.from_config(auth_rules))

    @property
    def entries(self) -> list[SourceEntry]:
        """Entries in configured order."""
        return list(self._entries)

    @property
    def invalid_urls(self) -> list[str]:
        """URLs that were rejected during construction."""
        return list(self._invalid)

    def get(self, url: str) -> SourceEntry | None:
        """Look up an entry by URL."""
        for entry in self._entries:
            if entry.url == url:
                return entry
        return None

    def counts_by_type(self) -> dict[str, int]:
        """Number of entries per source type (types with no entries omitted)."""
        counts = Counter(entry.source_type for entry in self._entries)
        return {t.value: counts[t] for t in SourceType if counts[t]}

    def __iter__(self) -> Iterator[SourceEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
