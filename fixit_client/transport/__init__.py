"""HTTP transport: configured client, auth and session-invalidation hooks."""

from fixit_client.transport.binary import BinaryPayload, filename_from_disposition
from fixit_client.transport.client import ApiClient
from fixit_client.transport.interceptors import (
    AuthInterceptor,
    Navigator,
    SessionInvalidationInterceptor,
)

__all__ = [
    "ApiClient",
    "AuthInterceptor",
    "BinaryPayload",
    "Navigator",
    "SessionInvalidationInterceptor",
    "filename_from_disposition",
]
