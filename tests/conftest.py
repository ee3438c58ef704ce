"""Shared test fixtures: settings, a recording fake backend and client factories."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from fixit_client.api import FixItClient
from fixit_client.config.settings import ClientSettings
from fixit_client.config.upload_contracts import default_upload_contracts
from fixit_client.session.storage import MemoryStorage

BACKEND_ORIGIN = "https://api.fixit.test"


# ---------------------------------------------------------------------------
# Ensure required env vars are set for ClientSettings in tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _set_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set minimal env vars so ClientSettings can be instantiated in tests."""
    for key in (
        "FIXIT_ADMIN_OVERRIDE_TOKEN",
        "FIXIT_SESSION_FILE",
        "FIXIT_UPLOAD_CONTRACTS_PATH",
        "FIXIT_LOGOUT_ON_BACKGROUND_401",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("FIXIT_BACKEND_ORIGIN", BACKEND_ORIGIN)


# ---------------------------------------------------------------------------
# Fake backend
# ---------------------------------------------------------------------------

Responder = Callable[[httpx.Request], httpx.Response]


class RecordingBackend:
    """``httpx.MockTransport`` handler that records requests and replays routes.

    Routes are keyed by (method, path relative to the API prefix). Unrouted
    requests get a 404 with a backend-style message body.
    """

    def __init__(self, api_prefix: str = "/api") -> None:
        self.api_prefix = api_prefix
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Responder] = {}

    def route(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        status: int = 200,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        responder: Responder | None = None,
    ) -> None:
        if responder is None:
            def responder(request: httpx.Request) -> httpx.Response:  # noqa: F811
                if content is not None:
                    return httpx.Response(status, content=content, headers=headers)
                return httpx.Response(status, json=json_body, headers=headers)

        self._routes[(method.upper(), path)] = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith(self.api_prefix):
            path = path[len(self.api_prefix):]
        responder = self._routes.get((request.method, path))
        if responder is None:
            return httpx.Response(404, json={"success": False, "message": f"No route for {path}"})
        return responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


# ---------------------------------------------------------------------------
# Settings and client fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def client_settings() -> ClientSettings:
    """Test settings with safe defaults."""
    return ClientSettings(backend_origin=BACKEND_ORIGIN)


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def navigations() -> list[str]:
    """Paths passed to the navigator after a forced logout."""
    return []


@pytest.fixture
def make_client(
    backend: RecordingBackend,
    storage: MemoryStorage,
    navigations: list[str],
) -> Callable[..., FixItClient]:
    """Factory building a FixItClient over the recording backend."""

    def _make(**overrides: Any) -> FixItClient:
        settings = ClientSettings(backend_origin=BACKEND_ORIGIN, **overrides)
        return FixItClient(
            settings,
            storage=storage,
            navigate=navigations.append,
            transport=backend.transport,
            contracts=default_upload_contracts(),
        )

    return _make


@pytest.fixture
def client(make_client: Callable[..., FixItClient]) -> FixItClient:
    return make_client()
