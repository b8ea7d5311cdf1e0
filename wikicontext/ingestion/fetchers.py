"""
Fetch strategies, one per documentation source type.

Dispatch goes through FETCHERS, a SourceType -> fetcher lookup table.
GitBook, Confluence and SharePoint pages are plain HTML and share a
fetcher; Markdown and MediaWiki have their own response formats.
"""

import json
import logging
from typing import Any
from urllib.parse import unquote, urlsplit, urlunsplit

import httpx

from wikicontext.ingestion.base_fetcher import BaseFetcher
from wikicontext.ingestion.http_client import HTTPClient
from wikicontext.ingestion.text import html_to_text, looks_like_html, render_markdown
from wikicontext.sources.schemas import SourceEntry, SourceType

logger = logging.getLogger(__name__)

MEDIAWIKI_DEFAULT_PAGE = "Main_Page"


class MediaWikiParseError(Exception):
    """Raised when a MediaWiki parse response has no page text."""

    pass


def decode_body(response: httpx.Response) -> Any:
    """
    Decode a response body the way the server labelled it.

    Returns the parsed JSON value for JSON content types, otherwise
    the body text.
    """
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            logger.debug(f"Body of {response.url} is labelled JSON but does not parse")
    return response.text


class MarkdownFetcher(BaseFetcher):
    """Raw Markdown files, or JSON documents carrying Markdown in ``content``."""

    @property
    def source_type(self) -> SourceType:
        return SourceType.MARKDOWN

    async def fetch(self, entry: SourceEntry, http: HTTPClient) -> str:
        response = await http.get(entry.url, headers=entry.request_headers())
        body = decode_body(response)

        if isinstance(body, str):
            return render_markdown(body)
        if isinstance(body, dict) and isinstance(body.get("content"), str):
            return render_markdown(body["content"])
        return json.dumps(body)


def mediawiki_api_request(url: str) -> tuple[str, dict[str, str]]:
    """
    Build the api.php endpoint and parse parameters for a wiki URL.

    ``https://host/docs/wiki/Some_Page`` maps to ``https://host/docs/api.php``
    with ``page=Some_Page``; URLs without a ``/wiki/`` segment use the site
    root and the main page.
    """
    parts = urlsplit(url)
    path = parts.path
    marker = path.find("/wiki/")

    if marker >= 0:
        base_path = path[:marker]
        page = unquote(path[marker + len("/wiki/"):].strip("/")) or MEDIAWIKI_DEFAULT_PAGE
    else:
        base_path = ""
        page = MEDIAWIKI_DEFAULT_PAGE

    endpoint = urlunsplit((parts.scheme, parts.netloc, f"{base_path}/api.php", "", ""))
    params = {
        "action": "parse",
        "format": "json",
        "prop": "text",
        "page": page,
    }
    return endpoint, params


class MediaWikiFetcher(BaseFetcher):
    """MediaWiki sites, read through the parse API."""

    @property
    def source_type(self) -> SourceType:
        return SourceType.MEDIAWIKI

    async def fetch(self, entry: SourceEntry, http: HTTPClient) -> str:
        endpoint, params = mediawiki_api_request(entry.url)
        response = await http.get(endpoint, params=params, headers=entry.request_headers())

        try:
            data = response.json()
        except ValueError as e:
            raise MediaWikiParseError(f"MediaWiki API at {endpoint} did not return JSON") from e

        parse = data.get("parse") if isinstance(data, dict) else None
        text = parse.get("text") if isinstance(parse, dict) else None
        if isinstance(text, dict):
            text = text.get("*")
        if not isinstance(text, str):
            raise MediaWikiParseError(f"No parse.text in MediaWiki response from {endpoint}")
        return text


class HtmlPageFetcher(BaseFetcher):
    """Rendered documentation pages (GitBook, Confluence, SharePoint)."""

    def __init__(self, source_type: SourceType):
        self._source_type = source_type

    @property
    def source_type(self) -> SourceType:
        return self._source_type

    async def fetch(self, entry: SourceEntry, http: HTTPClient) -> str:
        response = await http.get(entry.url, headers=entry.request_headers())
        return html_to_text(response.text)


class GenericFetcher(BaseFetcher):
    """Anything else: HTML pages are stripped, JSON is serialised, text passes through."""

    @property
    def source_type(self) -> SourceType:
        return SourceType.UNKNOWN

    async def fetch(self, entry: SourceEntry, http: HTTPClient) -> str:
        response = await http.get(entry.url, headers=entry.request_headers())
        body = decode_body(response)

        if isinstance(body, str):
            if looks_like_html(body):
                return html_to_text(body)
            return body
        return json.dumps(body)


FETCHERS: dict[SourceType, BaseFetcher] = {
    SourceType.MARKDOWN: MarkdownFetcher(),
    SourceType.MEDIAWIKI: MediaWikiFetcher(),
    SourceType.GITBOOK: HtmlPageFetcher(SourceType.GITBOOK),
    SourceType.CONFLUENCE: HtmlPageFetcher(SourceType.CONFLUENCE),
    SourceType.SHAREPOINT: HtmlPageFetcher(SourceType.SHAREPOINT),
    SourceType.UNKNOWN: GenericFetcher(),
}


def get_fetcher(
    source_type: SourceType,
    fetchers: dict[SourceType, BaseFetcher] | None = None,
) -> BaseFetcher:
    """Look up the fetcher for a source type, defaulting to the generic one."""
    table = fetchers or FETCHERS
    fetcher = table.get(source_type) or table.get(SourceType.UNKNOWN)
    return fetcher or FETCHERS[SourceType.UNKNOWN]
