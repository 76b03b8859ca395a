"""Shared API client utilities."""

from tvdbxml.api.base import (
    APIAuthError,
    APIError,
    APINotFoundError,
    APIRateLimitError,
    APITransportError,
    BaseAPIClient,
)
from tvdbxml.api.helpers import data_node, extract_bundle, load_xml_document, parse_xml_bytes

__all__ = [
    "APIError",
    "APIAuthError",
    "APINotFoundError",
    "APIRateLimitError",
    "APITransportError",
    "BaseAPIClient",
    "data_node",
    "extract_bundle",
    "load_xml_document",
    "parse_xml_bytes",
]
