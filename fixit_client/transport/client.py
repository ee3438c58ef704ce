"""Transport client: the single configured HTTP entry point to the backend.

Wraps one ``httpx.AsyncClient`` with the backend base URL, default headers,
the auth and session-invalidation hooks, per-call cancellation and timing
logs. Non-2xx responses raise ``httpx.HTTPStatusError``; network failures
raise ``httpx.TransportError``. Service modules convert both into ApiError.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Literal, Mapping, Sequence
from urllib.parse import urljoin

import httpx

from fixit_client.config.settings import ClientSettings
from fixit_client.errors import RequestAbortedError
from fixit_client.session.store import SessionStore
from fixit_client.transport.binary import BinaryPayload
from fixit_client.transport.interceptors import (
    AuthInterceptor,
    Navigator,
    SessionInvalidationInterceptor,
    background_call,
)

logger = logging.getLogger(__name__)

ResponseType = Literal["json", "blob"]

_DEFAULT_HEADERS = {"Accept": "application/json"}


class ApiClient:
    """HTTP client bound to ``<backend origin>/api``.

    Parameters
    ----------
    settings:
        Client settings (backend origin, timeout, login path, override token).
    session_store:
        Session store read by the auth hook and cleared on 401.
    navigate:
        Called with the login path after a forced logout.
    transport:
        Optional httpx transport (tests pass ``httpx.MockTransport`` or
        ``httpx.ASGITransport``).
    """

    def __init__(
        self,
        settings: ClientSettings,
        session_store: SessionStore,
        navigate: Navigator | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._session_store = session_store
        self._transport = transport
        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            headers=_DEFAULT_HEADERS,
            timeout=settings.timeout_seconds,
            transport=transport,
            event_hooks={
                "request": [AuthInterceptor(session_store)],
                "response": [
                    SessionInvalidationInterceptor(
                        session_store,
                        navigate=navigate,
                        login_path=settings.login_path,
                        logout_on_background_401=settings.logout_on_background_401,
                    ),
                    self._drop_cookies,
                ],
            },
        )

    @property
    def session_store(self) -> SessionStore:
        return self._session_store

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Verb methods
    # ------------------------------------------------------------------

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        data: Mapping[str, Any] | None = None,
        files: Sequence[tuple[str, tuple]] | None = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        response_type: ResponseType = "json",
        abort: asyncio.Event | None = None,
        background: bool = False,
    ) -> Any:
        """Send one request and return the parsed body.

        Returns the decoded JSON body (``None`` for an empty body, the text
        for a non-JSON body) or a BinaryPayload when ``response_type`` is
        ``"blob"``.

        Raises
        ------
        httpx.HTTPStatusError
            On any non-2xx status (after the response hooks have run).
        httpx.TransportError
            When no response was received.
        RequestAbortedError
            When ``abort`` is set before the response arrives.
        """
        request_headers = dict(headers or {})
        if not files:
            request_headers.setdefault("Content-Type", "application/json")

        request = self._client.build_request(
            method,
            path,
            json=json,
            data=data,
            files=files,
            params=_clean_params(params),
            headers=request_headers,
        )

        started = time.monotonic()
        token = background_call.set(background)
        try:
            response = await self._send(request, abort)
        finally:
            background_call.reset(token)

        logger.debug(
            "%s %s -> %d",
            method,
            request.url.path,
            response.status_code,
            extra={
                "method": method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.monotonic() - started) * 1000, 2),
            },
        )

        response.raise_for_status()

        if response_type == "blob":
            return BinaryPayload.from_response(response)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def download_url(self, url: str, abort: asyncio.Event | None = None) -> BinaryPayload:
        """Fetch a download link handed out by the backend.

        Links under the API base URL go through the authenticated client.
        Any other host (e.g. a signed storage URL) is fetched without
        credentials so the bearer token never leaves the backend.
        """
        resolved = urljoin(self._settings.backend_origin.rstrip("/") + "/", url)
        if resolved.startswith(self.base_url.rstrip("/") + "/"):
            return await self.request("GET", resolved, response_type="blob", abort=abort)

        client = httpx.AsyncClient(
            timeout=self._settings.timeout_seconds,
            transport=self._transport,
            follow_redirects=True,
        )
        try:
            request = client.build_request("GET", resolved)
            response = await self._send(request, abort, client)
        finally:
            # An injected transport is shared with the main client; leave it open.
            if self._transport is None:
                await client.aclose()
        logger.debug(
            "GET %s -> %d (external)",
            request.url.host,
            response.status_code,
            extra={"method": "GET", "status_code": response.status_code},
        )
        response.raise_for_status()
        return BinaryPayload.from_response(response)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _send(
        self,
        request: httpx.Request,
        abort: asyncio.Event | None,
        client: httpx.AsyncClient | None = None,
    ) -> httpx.Response:
        client = client or self._client
        if abort is None:
            return await client.send(request)

        if abort.is_set():
            raise RequestAbortedError()

        send_task = asyncio.ensure_future(client.send(request))
        abort_task = asyncio.ensure_future(abort.wait())
        try:
            done, _pending = await asyncio.wait(
                {send_task, abort_task}, return_when=asyncio.FIRST_COMPLETED
            )
        except BaseException:
            send_task.cancel()
            abort_task.cancel()
            raise

        if send_task in done:
            abort_task.cancel()
            return send_task.result()

        send_task.cancel()
        await asyncio.wait({send_task})
        if not send_task.cancelled() and send_task.exception() is not None:
            logger.debug("Aborted request also failed: %s", send_task.exception())
        logger.info("Request aborted by caller: %s %s", request.method, request.url.path)
        raise RequestAbortedError()

    async def _drop_cookies(self, _response: httpx.Response) -> None:
        # Auth is header based only; never carry cookies between calls.
        self._client.cookies.clear()


def _clean_params(params: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Drop ``None`` query values and render booleans the way the backend expects."""
    if not params:
        return None
    cleaned: dict[str, Any] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            cleaned[key] = "true" if value else "false"
        else:
            cleaned[key] = value
    return cleaned
