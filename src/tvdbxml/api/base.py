"""Base classes for API clients.

Provides a unified exception hierarchy and a base client class holding
the HTTP transport used to download XML and zip payloads.
"""

from __future__ import annotations

import logging
from typing import Self

import httpx

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for all API errors."""

    pass


class APIAuthError(APIError):
    """Authentication error (missing or invalid API key)."""

    pass


class APINotFoundError(APIError):
    """Resource not found (404)."""

    pass


class APIRateLimitError(APIError):
    """Rate limit exceeded (429).

    Attributes:
        retry_after: Suggested wait time in seconds before retrying.
    """

    def __init__(self, retry_after: int | None = None, message: str | None = None) -> None:
        self.retry_after = retry_after
        if message is None:
            message = f"Rate limit exceeded. Retry after {retry_after}s"
        super().__init__(message)


class APITransportError(APIError):
    """The payload could not be downloaded (connection or HTTP failure)."""

    pass


class BaseAPIClient:
    """Base class for API clients with a shared download pattern.

    Subclasses must set:
        - _error_cls: The base error class for this API (e.g., TVDBError)
        - _auth_error_cls: Auth error class
        - _not_found_cls: Not-found error class
        - _rate_limit_cls: Rate-limit error class
        - _transport_error_cls: Transport error class
        - _api_name: Human name for error messages (e.g., "TVDB")
    """

    _error_cls: type[APIError] = APIError
    _auth_error_cls: type[APIAuthError] = APIAuthError
    _not_found_cls: type[APINotFoundError] = APINotFoundError
    _rate_limit_cls: type[APIRateLimitError] = APIRateLimitError
    _transport_error_cls: type[APITransportError] = APITransportError
    _api_name: str = "API"

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout, follow_redirects=True)
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def download(self, url: str) -> bytes:
        """Download a payload.

        Args:
            url: Absolute URL to fetch.

        Returns:
            The response body.

        Raises:
            APITransportError: If the request fails at the connection level.
            APIError: If the server answers with an error status.
        """
        logger.debug("Downloading %s", url)
        try:
            response = self._get_client().get(url)
        except httpx.RequestError as e:
            raise self._transport_error_cls(f"{self._api_name} request failed: {e}") from e
        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> bytes:
        """Handle a response and raise appropriate errors."""
        if response.status_code == 200:
            return response.content

        if response.status_code == 401:
            raise self._auth_error_cls("Authentication failed")

        if response.status_code == 404:
            raise self._not_found_cls("Resource not found")

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise self._rate_limit_cls(int(retry_after) if retry_after else None)

        message = response.text or "Unknown error"
        raise self._error_cls(f"{self._api_name} API error ({response.status_code}): {message}")
