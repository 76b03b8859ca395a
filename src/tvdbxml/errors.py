"""User-facing error messages."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from tvdbxml.api import (
    APIAuthError,
    APIError,
    APINotFoundError,
    APIRateLimitError,
    APITransportError,
)


def get_friendly_message(error: BaseException) -> str:
    """Translate an exception into a short message for the terminal.

    Args:
        error: The exception raised by the library.

    Returns:
        A one-line description of what went wrong.
    """
    if isinstance(error, APIAuthError):
        return f"{error} Set TVDB_API_KEY or run 'tvdbxml config init'."
    if isinstance(error, APIRateLimitError):
        if error.retry_after:
            return f"The service is rate limiting requests. Try again in {error.retry_after}s."
        return "The service is rate limiting requests. Try again later."
    if isinstance(error, APINotFoundError):
        return "The requested item does not exist on the service."
    if isinstance(error, APITransportError):
        return f"Could not reach the service: {error}"
    if isinstance(error, APIError):
        if error.__cause__ is not None:
            return f"{error} ({error.__cause__})"
        return str(error)
    if isinstance(error, ET.ParseError):
        return f"Received an invalid XML document: {error}"
    if isinstance(error, FileNotFoundError):
        return str(error)
    return str(error) or type(error).__name__
