"""HTTP transport: client, envelope, credentials, retry policy."""

from .client import ApiClient
from .credentials import CookieCredentials, CredentialStrategy, TokenCredentials
from .envelope import ApiEnvelope

__all__ = [
    "ApiClient",
    "ApiEnvelope",
    "CookieCredentials",
    "CredentialStrategy",
    "TokenCredentials",
]
