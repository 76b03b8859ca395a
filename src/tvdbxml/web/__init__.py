"""TVDB XML web service integration."""

from tvdbxml.web.client import (
    TVDBAuthError,
    TVDBError,
    TVDBNotFoundError,
    TVDBRateLimitError,
    TVDBTransportError,
    WebInterface,
)

__all__ = [
    "WebInterface",
    "TVDBError",
    "TVDBAuthError",
    "TVDBNotFoundError",
    "TVDBRateLimitError",
    "TVDBTransportError",
]
