"""
Base fetcher interface shared by the per-source-type strategies.

Each fetcher turns one SourceEntry into text using an open HTTPClient.
Fetchers raise on failure; recovery (stale cache, fallback) is handled
by the ContentFetcher that dispatches to them.
"""

from abc import ABC, abstractmethod

from wikicontext.ingestion.http_client import HTTPClient
from wikicontext.sources.schemas import SourceEntry, SourceType


class BaseFetcher(ABC):
    """
    Abstract base class for source fetchers.

    Subclasses must implement:
        - source_type: SourceType handled by this fetcher
        - fetch(): Retrieve and extract the document text
    """

    @property
    @abstractmethod
    def source_type(self) -> SourceType:
        """Return the source type this fetcher handles."""
        ...

    @property
    def name(self) -> str:
        return f"{self.source_type.value}_fetcher"

    @abstractmethod
    async def fetch(self, entry: SourceEntry, http: HTTPClient) -> str:
        """
        Fetch the document behind an entry.

        Args:
            entry: Source to fetch (carries URL and credentials)
            http: Open HTTP client

        Returns:
            Extracted document content

        Raises:
            HTTPClientError: On transport or HTTP status failures
        """
        ...
