"""Python client for the Craftly REST API.

Repositories wrap the HTTP calls and return Result values; view models
turn those results into UI states.
"""

from craftly.client.api_client import ApiClient
from craftly.client.config import ClientSettings
from craftly.client.errors import ApiError, ClientError, NotLoggedInError, friendly_message
from craftly.client.result import Result
from craftly.client.session import SessionStore

__all__ = [
    "ApiClient",
    "ApiError",
    "ClientError",
    "ClientSettings",
    "NotLoggedInError",
    "Result",
    "SessionStore",
    "friendly_message",
]
