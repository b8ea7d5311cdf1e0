"""
HTTP layer with retry logic for documentation fetches.

Provides:
- RetryConfig: Exponential backoff configuration
- HTTPClient: Async HTTP client with automatic retry on transient failures

Fetchers only deal with turning a response into text; retries, backoff
and connection lifetime live here.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


@dataclass
class RetryConfig:
    """
    Exponential backoff configuration for HTTP retries.

    Formula: min(max_backoff, base_delay * 2^attempt) * (1 + random(0, jitter_factor))
    """

    max_retries: int = 2
    max_backoff_seconds: float = 10.0
    base_delay: float = 0.5
    jitter_factor: float = 0.1

    def calculate_backoff(self, attempt: int) -> float:
        """
        Calculate backoff duration for a given retry attempt.

        Args:
            attempt: The retry attempt number (0-indexed)

        Returns:
            Backoff duration in seconds with jitter applied
        """
        delay = min(self.base_delay * (2**attempt), self.max_backoff_seconds)
        return delay + delay * self.jitter_factor * random.random()

    def is_retryable_status(self, status_code: int) -> bool:
        """429 and gateway/server errors are retried."""
        return status_code in RETRYABLE_STATUS_CODES

    def is_retryable_exception(self, exc: Exception) -> bool:
        """Timeouts, refused connections and broken reads are retried."""
        return isinstance(
            exc,
            (
                httpx.TimeoutException,
                httpx.ConnectError,
                httpx.ReadError,
            ),
        )


class HTTPClientError(Exception):
    """Base exception for HTTP client errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class RateLimitError(HTTPClientError):
    """Raised when rate limit is hit and all retries exhausted."""

    pass


class HTTPClient:
    """
    Async HTTP client with retry logic.

    Example:
        async with HTTPClient(RetryConfig(max_retries=2)) as client:
            response = await client.get(
                "https://wiki.example.org/api.php",
                params={"action": "parse"},
                headers={"Authorization": "Bearer ..."},
            )
    """

    def __init__(
        self,
        retry_config: RetryConfig | None = None,
        timeout: float = 30.0,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize HTTP client.

        Args:
            retry_config: Configuration for retry behavior. Uses defaults if None.
            timeout: Request timeout in seconds.
            user_agent: User-Agent header sent with every request.
            transport: Optional httpx transport (used by tests).
        """
        self.retry_config = retry_config or RetryConfig()
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "HTTPClient":
        await self.open()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    @property
    def is_open(self) -> bool:
        return self._client is not None

    async def open(self) -> None:
        """Create the underlying connection pool if not already open."""
        if self._client is not None:
            return
        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers=headers,
            follow_redirects=True,
            transport=self._transport,
        )

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """
        Perform GET request with retry logic.

        Args:
            url: Request URL
            params: Query parameters
            headers: Request headers (credentials)

        Returns:
            httpx.Response on success

        Raises:
            HTTPClientError: On non-retryable errors or after retries exhausted
            RateLimitError: When rate limited and retries exhausted
        """
        if not self._client:
            raise RuntimeError("HTTPClient must be opened before use")

        last_status_code: int | None = None
        attempts = self.retry_config.max_retries + 1

        for attempt in range(attempts):
            try:
                response = await self._client.get(url, params=params or None, headers=headers or None)
            except httpx.HTTPError as e:
                if not self.retry_config.is_retryable_exception(e):
                    raise HTTPClientError(f"Request to {url} failed: {e}") from e
                if attempt < self.retry_config.max_retries:
                    backoff = self.retry_config.calculate_backoff(attempt)
                    logger.warning(
                        f"Retryable error {type(e).__name__} for {url}, "
                        f"attempt {attempt + 1}/{attempts}, backing off {backoff:.2f}s"
                    )
                    await asyncio.sleep(backoff)
                    continue
                raise HTTPClientError(
                    f"Request failed after {attempt + 1} attempts: {e}",
                    status_code=last_status_code,
                ) from e

            if self.retry_config.is_retryable_status(response.status_code):
                last_status_code = response.status_code
                if attempt < self.retry_config.max_retries:
                    backoff = self.retry_config.calculate_backoff(attempt)
                    logger.warning(
                        f"Retryable status {response.status_code} from {url}, "
                        f"attempt {attempt + 1}/{attempts}, backing off {backoff:.2f}s"
                    )
                    await asyncio.sleep(backoff)
                    continue

                error_cls = RateLimitError if response.status_code == 429 else HTTPClientError
                raise error_cls(
                    f"Request failed with status {response.status_code} after {attempt + 1} attempts",
                    status_code=response.status_code,
                    response_body=response.text,
                )

            if response.status_code >= 400:
                raise HTTPClientError(
                    f"Request failed with status {response.status_code}",
                    status_code=response.status_code,
                    response_body=response.text,
                )

            return response

        raise HTTPClientError(
            f"Request failed after {attempts} attempts",
            status_code=last_status_code,
        )
