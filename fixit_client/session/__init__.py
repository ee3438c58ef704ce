"""Persisted session state."""

from fixit_client.session.storage import JsonFileStorage, MemoryStorage, Storage
from fixit_client.session.store import (
    SESSION_EXPIRED_MESSAGE,
    SessionCredential,
    SessionStore,
)

__all__ = [
    "JsonFileStorage",
    "MemoryStorage",
    "SESSION_EXPIRED_MESSAGE",
    "SessionCredential",
    "SessionStore",
    "Storage",
]
