"""Outbound HTTP clients for the content API and the mailing list."""

from .client import Client
from .content_client import ContentClient
from .exceptions import (
    APIError,
    ClientError,
    ConfigurationError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from .mailing_list_client import MailingListClient

__all__ = [
    "Client",
    "ContentClient",
    "MailingListClient",
    "ClientError",
    "ConfigurationError",
    "ConnectionError",
    "APIError",
    "RateLimitError",
    "NotFoundError",
    "ValidationError",
]
