"""Client error hierarchy.

Every service operation converts whatever went wrong (an HTTP error status,
a transport failure, a caller cancellation) into one ApiError subclass. The
error keeps a display message (``str(error)``) together with the machine-
readable parts of the original failure: the error kind, the HTTP status,
the backend's error code and the parsed response body.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import httpx


class ErrorKind(str, Enum):
    """Category of a failed API call."""

    VALIDATION = "validation"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER = "server"
    NETWORK = "network"
    ABORTED = "aborted"
    UNKNOWN = "unknown"


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class ApiError(Exception):
    """Base error for all client-side API failures."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    message: str = "Unexpected client error"

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        code: str | None = None,
        raw: Any = None,
    ) -> None:
        self.message = message or self.__class__.message
        self.status_code = status_code
        self.code = code
        self.raw = raw
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_exception(cls, exc: BaseException) -> ApiError:
        """Build the matching ApiError subclass for ``exc``."""
        if isinstance(exc, ApiError):
            return exc

        if isinstance(exc, httpx.HTTPStatusError):
            response = exc.response
            body = _parse_body(response)
            error_cls = error_class_for_status(response.status_code)
            return error_cls(
                extract_message(body, fallback=str(exc) or response.reason_phrase),
                status_code=response.status_code,
                code=_extract_code(body),
                raw=body,
            )

        if isinstance(exc, httpx.TransportError):
            return NetworkError(str(exc) or NetworkError.message, raw=exc)

        return cls(str(exc) or cls.message, raw=exc)


class ValidationError(ApiError):
    """Backend rejected the payload (400 / 422)."""

    kind = ErrorKind.VALIDATION
    message = "Invalid input provided"


class AuthenticationError(ApiError):
    """Missing, expired or insufficient credentials (401 / 403)."""

    kind = ErrorKind.AUTH
    message = "You are not authorized to perform this action"


class NotFoundError(ApiError):
    """Resource not found (404)."""

    kind = ErrorKind.NOT_FOUND
    message = "Resource not found"


class ConflictError(ApiError):
    """Resource state conflict (409)."""

    kind = ErrorKind.CONFLICT
    message = "Resource conflict"


class ServerError(ApiError):
    """Backend failure (5xx or an unexpected status)."""

    kind = ErrorKind.SERVER
    message = "An error occurred. Please try again."


class NetworkError(ApiError):
    """No response received from the backend."""

    kind = ErrorKind.NETWORK
    message = "Network Error"


class RequestAbortedError(ApiError):
    """The caller cancelled the request before a response arrived."""

    kind = ErrorKind.ABORTED
    message = "Request aborted"


class MissingFileError(ValidationError):
    """An upload operation was called without its required file(s)."""

    message = "No files provided for upload"


class UploadContractError(ApiError):
    """No upload contract is registered for an operation."""

    message = "No upload contract registered for operation"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_STATUS_CLASSES: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthenticationError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


def error_class_for_status(status_code: int) -> type[ApiError]:
    """Map an HTTP status code to its ApiError subclass."""
    return _STATUS_CLASSES.get(status_code, ServerError)


def extract_message(body: Any, fallback: str) -> str:
    """Pick the display message for a failed response.

    Priority: ``body["message"]``, then ``body["error"]`` when it is a plain
    string, then ``fallback`` (the transport's generic message).
    """
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
        error = body.get("error")
        if isinstance(error, str) and error:
            return error
    return fallback


def _extract_code(body: Any) -> str | None:
    if isinstance(body, dict):
        code = body.get("code") or body.get("errorCode")
        if code is not None:
            return str(code)
    return None


def _parse_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None
