"""Role dashboards (``/<role>/dashboard-data``) and dashboard sections.

Payloads are cached per key for ``cache_ttl_seconds`` (0 disables the
cache). Callers that change underlying data call ``invalidate``; the whole
cache is dropped whenever the session is set or cleared.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Iterable, Mapping
from urllib.parse import urlencode

from fixit_client.config.upload_contracts import UploadContract
from fixit_client.errors import ValidationError
from fixit_client.services.base import BaseService
from fixit_client.transport.client import ApiClient

logger = logging.getLogger(__name__)

DASHBOARD_ROLES = frozenset({"admin", "pm", "landlord", "tenant"})
_ROLE_ALIASES = {"propertymanager": "pm", "property_manager": "pm"}
_SECTION_PREFIX = "dashboard-section-"


class DashboardService(BaseService):
    service_name = "dashboard"

    def __init__(
        self,
        api_client: ApiClient,
        contracts: Mapping[str, UploadContract],
        cache_ttl_seconds: float = 300.0,
    ) -> None:
        super().__init__(api_client, contracts)
        self._cache_ttl_seconds = cache_ttl_seconds
        # Cache: key -> (data, expiry_timestamp)
        self._cache: dict[str, tuple[Any, float]] = {}
        # Cached payloads belong to one session.
        api_client.session_store.on_change(self.clear_cache)

    async def for_role(self, role: str, abort: asyncio.Event | None = None) -> Any:
        """Fetch the complete dashboard payload for ``role`` in one call."""
        segment = _ROLE_ALIASES.get(role.lower(), role.lower())
        if segment not in DASHBOARD_ROLES:
            error = ValidationError(f"Unknown dashboard role: {role!r}")
            self._log_failure("for_role", error)
            raise error
        return await self._cached(
            f"{segment}-dashboard",
            lambda: self._data("for_role", "GET", f"/{segment}/dashboard-data", abort=abort),
        )

    async def section(
        self, section: str, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None
    ) -> Any:
        key = f"{_SECTION_PREFIX}{section}-{urlencode(sorted((params or {}).items()))}"
        return await self._cached(
            key,
            lambda: self._data("section", "GET", f"/dashboard/{section}", params=params, abort=abort),
        )

    def invalidate(self, sections: Iterable[str] = ()) -> None:
        """Drop all role dashboards plus every cached entry for ``sections``."""
        for segment in DASHBOARD_ROLES:
            self._cache.pop(f"{segment}-dashboard", None)
        for section in sections:
            prefix = f"{_SECTION_PREFIX}{section}-"
            for key in [k for k in self._cache if k.startswith(prefix)]:
                del self._cache[key]

    def clear_cache(self) -> None:
        self._cache.clear()

    async def _cached(self, key: str, fetch: Callable[[], Awaitable[Any]]) -> Any:
        cached = self._cache.get(key)
        if cached is not None:
            data, expiry = cached
            if time.monotonic() < expiry:
                logger.debug("Dashboard cache hit for %s", key)
                return data

        data = await fetch()
        if self._cache_ttl_seconds > 0:
            self._cache[key] = (data, time.monotonic() + self._cache_ttl_seconds)
        return data
