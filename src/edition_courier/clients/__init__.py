"""Network clients for external services."""

from .client import Client
from .exceptions import (
    APIError,
    ClientError,
    ConnectionError,
    RateLimitError,
    SlackAPIError,
    ValidationError,
)
from .slack_client import SlackClient

__all__ = [
    "Client",
    "SlackClient",
    "ClientError",
    "ConnectionError",
    "APIError",
    "RateLimitError",
    "SlackAPIError",
    "ValidationError",
]
