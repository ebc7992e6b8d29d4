"""Network clients for the ePaper API."""

from .client import Client
from .epaper_client import DEFAULT_BASE_URL, EPaperClient, parse_site_script
from .exceptions import (
    APIError,
    AuthenticationError,
    ClientError,
    ConnectionError,
    IssueUnavailableError,
    NotFoundError,
    RateLimitError,
    UnknownEditionError,
    ValidationError,
)

__all__ = [
    "Client",
    "EPaperClient",
    "DEFAULT_BASE_URL",
    "parse_site_script",
    "ClientError",
    "ConnectionError",
    "APIError",
    "RateLimitError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "UnknownEditionError",
    "IssueUnavailableError",
]
