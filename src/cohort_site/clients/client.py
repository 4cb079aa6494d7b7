"""Base client for outbound HTTP requests."""

import logging
from time import sleep

import httpx

from .exceptions import (
    APIError,
    ConfigurationError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
)

logger = logging.getLogger(__name__)


class Client:
    """Shared plumbing for the content API and mailing-list clients.

    Holds one httpx.Client per instance, created on first use and released
    by close() or on leaving a with-block.

    Config keys:
        base_url (required): Base URL for all requests
        timeout: Request timeout in seconds (default: 10)
        retry_attempts: Attempts for connection failures and timeouts (default: 1)
        retry_delay: Delay between retries in seconds (default: 1)
        headers: Additional headers to include in requests
    """

    def __init__(self, config: dict):
        if not config.get("base_url"):
            raise ConfigurationError("config must include 'base_url'")

        self._config = config
        self._client: httpx.Client | None = None

    @property
    def base_url(self) -> str:
        return str(self._config["base_url"])

    @property
    def timeout(self) -> float:
        return float(self._config.get("timeout", 10))

    @property
    def retry_attempts(self) -> int:
        return max(1, int(self._config.get("retry_attempts", 1)))

    @property
    def retry_delay(self) -> float:
        return float(self._config.get("retry_delay", 1))

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._config.get("headers") or {})

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialized httpx client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
            )
        return self._client

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Map HTTP errors to exceptions.

        Raises:
            NotFoundError: For 404 responses
            RateLimitError: For 429 responses
            APIError: For other non-2xx responses
        """
        if response.is_success:
            return response

        status_code = response.status_code
        body = response.text or ""

        if status_code == 404:
            raise NotFoundError(f"Resource not found: {response.url}", body=body)
        elif status_code == 429:
            raise RateLimitError(f"Rate limit exceeded: {response.url}", body=body)
        else:
            raise APIError(
                f"API error {status_code}: {response.url}",
                status_code=status_code,
                body=body,
            )

    def _request(
        self,
        method: str,
        path: str,
        raise_for_status: bool = True,
        **kwargs,
    ) -> httpx.Response:
        """Make a request, retrying connection failures and timeouts.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: URL path (appended to base_url) or an absolute URL
            raise_for_status: Map non-2xx responses to exceptions
            **kwargs: Additional arguments passed to httpx.request

        Raises:
            ConnectionError: If all attempts fail due to network issues
            APIError: If raise_for_status is set and the response is non-2xx
        """
        last_exception: Exception | None = None

        for attempt in range(self.retry_attempts):
            try:
                response = self.client.request(method, path, **kwargs)
                if raise_for_status:
                    return self._handle_response(response)
                return response
            except httpx.TransportError as e:
                last_exception = e
                kind = "Timeout" if isinstance(e, httpx.TimeoutException) else "Connection error"
                logger.warning(f"{kind} on {method} {path} ({attempt + 1}/{self.retry_attempts}): {e}")
            if attempt < self.retry_attempts - 1:
                sleep(self.retry_delay)

        msg = f"Connection failed after {self.retry_attempts} attempts"
        raise ConnectionError(msg) from last_exception

    def get(self, path: str, **kwargs) -> httpx.Response:
        """Convenience method for GET requests."""
        return self._request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> httpx.Response:
        """Convenience method for POST requests."""
        return self._request("POST", path, **kwargs)
