"""Request and response hooks installed on the transport's httpx client.

AuthInterceptor (request phase) attaches at most one bearer credential,
chosen from the current session. SessionInvalidationInterceptor (response
phase) turns any 401 into a forced logout: the stored session is cleared,
a one-shot "session expired" flag is left for the next reader, and the
caller-supplied navigator is sent to the login path. The 401 itself still
propagates to the awaiting call site.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Callable

import httpx

from fixit_client.session.store import SESSION_EXPIRED_MESSAGE, SessionStore

logger = logging.getLogger(__name__)

Navigator = Callable[[str], None]

# Set by the transport for the duration of a background (polling) call.
background_call: ContextVar[bool] = ContextVar("fixit_background_call", default=False)


def log_navigation(path: str) -> None:
    """Default navigator for non-interactive callers: record the redirect."""
    logger.info("Navigation to %s requested after session invalidation", path)


class AuthInterceptor:
    """Attach ``Authorization: Bearer <token>`` based on the stored session.

    Resolution order:
    1. admin session + configured static override token -> override token
    2. stored session token
    3. no header (the backend decides whether to reject)
    """

    def __init__(self, session_store: SessionStore) -> None:
        self._session_store = session_store

    async def __call__(self, request: httpx.Request) -> None:
        # Only one credential per request, whatever the caller passed in.
        request.headers.pop("Authorization", None)

        token = self._session_store.get().bearer_token()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"


class SessionInvalidationInterceptor:
    """React uniformly to authentication failure from any endpoint."""

    def __init__(
        self,
        session_store: SessionStore,
        navigate: Navigator | None = None,
        login_path: str = "/login",
        logout_on_background_401: bool = True,
    ) -> None:
        self._session_store = session_store
        self._navigate = navigate or log_navigation
        self._login_path = login_path
        self._logout_on_background_401 = logout_on_background_401

    async def __call__(self, response: httpx.Response) -> None:
        if response.status_code != 401:
            return

        if background_call.get() and not self._logout_on_background_401:
            logger.warning(
                "Unauthorized background call, session left intact",
                extra={"method": response.request.method, "path": response.request.url.path},
            )
            return

        logger.warning(
            "Unauthorized API call, session expired or invalid. Logging out.",
            extra={
                "method": response.request.method,
                "path": response.request.url.path,
                "status_code": response.status_code,
            },
        )
        self._session_store.invalidate(SESSION_EXPIRED_MESSAGE)
        self._navigate(self._login_path)
