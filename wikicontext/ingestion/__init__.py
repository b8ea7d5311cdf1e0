"""Ingestion: HTTP access, per-type fetchers and the cached fetch chain."""

from wikicontext.ingestion.base_fetcher import BaseFetcher
from wikicontext.ingestion.fetchers import (
    FETCHERS,
    GenericFetcher,
    HtmlPageFetcher,
    MarkdownFetcher,
    MediaWikiFetcher,
    MediaWikiParseError,
    get_fetcher,
    mediawiki_api_request,
)
from wikicontext.ingestion.http_client import (
    HTTPClient,
    HTTPClientError,
    RateLimitError,
    RetryConfig,
)
from wikicontext.ingestion.schemas import FetchOrigin, FetchOutcome
from wikicontext.ingestion.service import ContentFetcher, create_http_client, fetch_error_message
from wikicontext.ingestion.text import html_to_text, looks_like_html, render_markdown

__all__ = [
    "FETCHERS",
    "BaseFetcher",
    "ContentFetcher",
    "FetchOrigin",
    "FetchOutcome",
    "GenericFetcher",
    "HTTPClient",
    "HTTPClientError",
    "HtmlPageFetcher",
    "MarkdownFetcher",
    "MediaWikiFetcher",
    "MediaWikiParseError",
    "RateLimitError",
    "RetryConfig",
    "create_http_client",
    "fetch_error_message",
    "get_fetcher",
    "html_to_text",
    "looks_like_html",
    "mediawiki_api_request",
    "render_markdown",
]
