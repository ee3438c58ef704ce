"""Async client for the Fix It property management REST API."""

from fixit_client.api import FixItClient
from fixit_client.config.settings import ClientSettings
from fixit_client.errors import (
    ApiError,
    AuthenticationError,
    ConflictError,
    ErrorKind,
    MissingFileError,
    NetworkError,
    NotFoundError,
    RequestAbortedError,
    ServerError,
    UploadContractError,
    ValidationError,
)
from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.payloads import UploadFile
from fixit_client.session import JsonFileStorage, MemoryStorage, SessionStore
from fixit_client.transport import BinaryPayload

__all__ = [
    "ApiError",
    "AuthenticationError",
    "BinaryPayload",
    "ClientSettings",
    "ConflictError",
    "ErrorKind",
    "FixItClient",
    "JsonFileStorage",
    "MemoryStorage",
    "MissingFileError",
    "NetworkError",
    "NotFoundError",
    "Page",
    "RequestAbortedError",
    "ServerError",
    "SessionStore",
    "ShapeDescriptor",
    "UploadContractError",
    "UploadFile",
    "ValidationError",
]
