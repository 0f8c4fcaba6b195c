# ABOUTME: HTTP client abstraction for metadata provider API calls.
# ABOUTME: Provides rate limiting, opt-in retry with backoff, and injectable transport for testing.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

USER_AGENT = "shelfmark/0.1.0"


class MetadataFetchError(Exception):
    """Raised when an HTTP request to a metadata source fails.

    status_code is None for transport-level failures (DNS, connection reset,
    timeout, undecodable body) and the HTTP status otherwise.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations against metadata sources."""

    def get_json(self, url: str, params: dict[str, str] | None = None) -> Any: ...

    def get_text(
        self,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str: ...


class ShelfmarkHttpClient:
    """HTTP client with rate limiting and optional retry for metadata calls.

    Wraps httpx.Client. By default a call issues exactly one request; set
    max_retries to retry transient failures (429, 5xx) with exponential backoff.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        min_request_interval: float = 0.1,
        max_retries: int = 0,
        retry_delay: float = 1.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": USER_AGENT},
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request_time: float = 0.0

    def get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        """Send a GET request and return the parsed JSON body.

        Raises:
            MetadataFetchError: On transport errors, non-2xx responses,
                exhausted retries, or a body that is not valid JSON.
        """
        response = self._request(url, params=params)
        try:
            return response.json()
        except ValueError as exc:
            raise MetadataFetchError(
                f"Invalid JSON from {url}: {exc}", status_code=response.status_code
            ) from exc

    def get_text(
        self,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> str:
        """Send a GET request and return the decoded body text.

        Raises:
            MetadataFetchError: On transport errors, non-2xx responses,
                or exhausted retries.
        """
        return self._request(url, params=params, headers=headers).text

    def close(self) -> None:
        self._client.close()

    def _request(
        self,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        self._rate_limit()

        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = self._client.get(url, params=params, headers=headers)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc

            if response.is_success:
                return response

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise MetadataFetchError(
                    f"HTTP {response.status_code} from {url}",
                    status_code=response.status_code,
                )

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                time.sleep(delay)

        raise MetadataFetchError(
            f"HTTP {last_status} from {url} after {attempts} attempts",
            status_code=last_status,
        )

    def _rate_limit(self) -> None:
        """Sleep if needed to maintain minimum interval between requests."""
        if self._min_interval <= 0:
            return
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._min_interval and self._last_request_time > 0:
            time.sleep(self._min_interval - elapsed)
        self._last_request_time = time.monotonic()
