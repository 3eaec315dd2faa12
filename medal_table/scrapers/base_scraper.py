import asyncio
import json
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger
from tenacity import (
    AsyncRetrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from medal_table.config.settings import settings

# Define common HTTP status codes that warrant a retry
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class ScraperError(Exception):
    """Base exception for every medal pipeline error."""

    pass


class TransportError(ScraperError):
    """Raised when a URL could not be fetched by any transport."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class EmptyResultError(ScraperError):
    """Raised when a source was read successfully but yielded no teams."""

    pass


class NormalizationError(ScraperError):
    """Raised when a raw record holds a count that is not a whole number."""

    pass


class MedalDataUnavailable(ScraperError):
    """Raised when every fallback tier has failed."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class _RetryableStatus(Exception):
    """Internal marker so tenacity retries on retryable status codes."""

    def __init__(self, response: httpx.Response):
        super().__init__(f"HTTP {response.status_code}")
        self.response = response


class HttpTransport:
    """Fetches JSON or text over HTTP, falling back to an external CLI fetcher.

    The direct GET is retried for network errors and retryable status codes.
    If it still fails, the same URL is re-issued through ``fallback`` (a
    CurlFetcher). When the fallback fails too, the direct path's error is
    raised, not the fallback's.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        fallback: Optional[Any] = None,
        max_attempts: Optional[int] = None,
        user_agent: Optional[str] = None,
        request_timeout: Optional[float] = None,
    ):
        self.user_agent = user_agent or settings.user_agent
        self.request_timeout = request_timeout or settings.request_timeout
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.request_timeout),
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
        )
        self.fallback = fallback
        self.max_attempts = max_attempts or settings.http_max_attempts

    async def _get(self, url: str, headers: Optional[Dict[str, str]]) -> httpx.Response:
        """Direct GET with retry logic. Raises TransportError on failure."""
        logger.debug(f"GET {url}")
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
                retry=retry_if_exception_type((httpx.RequestError, _RetryableStatus)),
                reraise=True,
            ):
                with attempt:
                    try:
                        # Hard limit on the whole attempt, not just each read
                        response = await asyncio.wait_for(
                            self.client.get(url, headers=headers),
                            timeout=self.request_timeout,
                        )
                    except asyncio.TimeoutError:
                        raise httpx.TimeoutException(
                            f"No complete response within {self.request_timeout:g}s"
                        )
                    if response.status_code in RETRYABLE_STATUS_CODES:
                        logger.warning(
                            f"Retryable status {response.status_code} from {url} "
                            f"(attempt {attempt.retry_state.attempt_number}/{self.max_attempts})"
                        )
                        raise _RetryableStatus(response)
                    response.raise_for_status()
                    logger.debug(f"Request successful: {response.status_code} for {url}")
                    return response
        except _RetryableStatus as e:
            raise TransportError(f"HTTP {e.response.status_code} from {url}", url) from e
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"HTTP {e.response.status_code} from {url}", url
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"Request to {url} failed: {e!r}", url) from e
        raise TransportError(f"No response from {url}", url)  # pragma: no cover

    async def _fallback_text(self, url: str, error: TransportError) -> str:
        if self.fallback is None:
            raise error
        logger.warning(f"Direct fetch failed ({error}); trying CLI fallback for {url}")
        try:
            return await self.fallback.fetch(url, user_agent=self.user_agent)
        except ScraperError as fallback_error:
            logger.warning(f"CLI fallback failed for {url}: {fallback_error}")
            raise error

    async def fetch_json(
        self, url: str, headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """GETs ``url`` and decodes the body as JSON."""
        try:
            response = await self._get(url, headers)
            try:
                return response.json()
            except (ValueError, RecursionError) as e:
                raise TransportError(f"Invalid JSON from {url}: {e}", url) from e
        except TransportError as error:
            text = await self._fallback_text(url, error)
            try:
                return json.loads(text)
            except (ValueError, RecursionError) as e:
                logger.warning(f"CLI fallback returned invalid JSON for {url}: {e}")
                raise error

    async def fetch_text(
        self, url: str, headers: Optional[Dict[str, str]] = None
    ) -> str:
        """GETs ``url`` and returns the body as text."""
        try:
            response = await self._get(url, headers)
            return response.text
        except TransportError as error:
            return await self._fallback_text(url, error)

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.debug("Closed HTTP client")
