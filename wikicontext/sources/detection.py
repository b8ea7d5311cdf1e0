"""
Source type detection.

Detection is an ordered priority table of ``(predicate, SourceType)``
pairs evaluated first-match-wins. Order matters because the markers
overlap (a GitBook site may serve ``/docs/`` pages, a Confluence space
may live on a ``wiki.`` host).
"""

from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import urlparse

from wikicontext.sources.schemas import SourceType


@dataclass(frozen=True)
class ParsedURL:
    """Lowercased URL parts the predicates look at."""

    hostname: str
    path: str

    @classmethod
    def from_url(cls, url: str) -> "ParsedURL":
        parsed = urlparse(url)
        return cls(
            hostname=(parsed.hostname or "").lower(),
            path=(parsed.path or "").lower(),
        )


Predicate = Callable[[ParsedURL], bool]


def _is_gitbook(url: ParsedURL) -> bool:
    return "gitbook" in url.hostname


def _is_mediawiki(url: ParsedURL) -> bool:
    return (
        "mediawiki" in url.hostname
        or "mediawiki" in url.path
        or url.hostname.endswith(".wiki")
        or url.hostname.startswith("wiki.")
        or "/wiki/" in url.path
    )


def _is_confluence(url: ParsedURL) -> bool:
    return (
        "confluence" in url.hostname
        or "confluence" in url.path
        or url.hostname.endswith("atlassian.net")
    )


def _is_sharepoint(url: ParsedURL) -> bool:
    return "sharepoint" in url.hostname


def _is_markdown(url: ParsedURL) -> bool:
    return (
        url.path.endswith((".md", ".markdown"))
        or "/docs/" in url.path
        or url.hostname.startswith("docs.")
    )


DETECTION_RULES: list[tuple[Predicate, SourceType]] = [
    (_is_gitbook, SourceType.GITBOOK),
    (_is_mediawiki, SourceType.MEDIAWIKI),
    (_is_confluence, SourceType.CONFLUENCE),
    (_is_sharepoint, SourceType.SHAREPOINT),
    (_is_markdown, SourceType.MARKDOWN),
]


def detect_source_type(
    url: str,
    rules: list[tuple[Predicate, SourceType]] | None = None,
) -> SourceType:
    """
    Decide a URL's source type from the priority table.

    Args:
        url: Source URL
        rules: Alternative priority table (defaults to DETECTION_RULES)

    Returns:
        The first matching SourceType, or SourceType.UNKNOWN
    """
    parsed = ParsedURL.from_url(url)
    for predicate, source_type in rules if rules is not None else DETECTION_RULES:
        if predicate(parsed):
            return source_type
    return SourceType.UNKNOWN
