"""Administrative endpoints (``/admin``).

The admin API mirrors the regular resources under ``/admin/<resource>``
(users, properties, units, vendors, requests, leases, rents,
scheduled-maintenances, invites, comments, media, property-users), so it is
exposed through a handful of generic helpers instead of one method per
route:

    await client.admin.list("users", {"role": "tenant"})
    await client.admin.get("properties", property_id)
    await client.admin.action("users", user_id, "approve")
"""

from __future__ import annotations

import asyncio
from typing import Any

from fixit_client.errors import ValidationError
from fixit_client.normalizer import Page
from fixit_client.services.base import BaseService

ADMIN_BASE_URL = "/admin"

ADMIN_RESOURCES = frozenset({
    "users",
    "properties",
    "units",
    "vendors",
    "requests",
    "leases",
    "rents",
    "scheduled-maintenances",
    "invites",
    "comments",
    "media",
    "property-users",
})

# Resource-specific enum fields lowercased on write.
_ENUM_FIELDS = ("role", "roles", "status", "category", "priority", "services")


class AdminService(BaseService):
    service_name = "admin"

    # -- Dashboard & system -------------------------------------------------

    async def stats(self, abort: asyncio.Event | None = None) -> Any:
        return await self._data("stats", "GET", f"{ADMIN_BASE_URL}/stats", abort=abort)

    async def system_health(self, abort: asyncio.Event | None = None) -> Any:
        return await self._data("system_health", "GET", f"{ADMIN_BASE_URL}/system-health", abort=abort)

    async def media_stats(self, abort: asyncio.Event | None = None) -> Any:
        return await self._data("media_stats", "GET", f"{ADMIN_BASE_URL}/media/stats", abort=abort)

    async def broadcast(self, notification: dict[str, Any]) -> Any:
        return await self._raw(
            "broadcast", "POST", f"{ADMIN_BASE_URL}/notifications/broadcast", json=notification
        )

    async def request_analytics(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Any:
        return await self._data(
            "request_analytics", "GET", f"{ADMIN_BASE_URL}/requests/analytics", params=params, abort=abort
        )

    # -- Generic resource helpers ------------------------------------------

    async def list(
        self, resource: str, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None
    ) -> Page | Any:
        return await self._list(
            "list",
            self._resource_url("list", resource),
            self._lower(params, _ENUM_FIELDS),
            abort,
        )

    async def get(self, resource: str, resource_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity("get", "GET", self._resource_url("get", resource, resource_id), abort=abort)

    async def create(self, resource: str, data: dict[str, Any]) -> Any:
        return await self._entity(
            "create", "POST", self._resource_url("create", resource), json=self._lower(data, _ENUM_FIELDS)
        )

    async def update(self, resource: str, resource_id: str, data: dict[str, Any]) -> Any:
        return await self._entity(
            "update",
            "PUT",
            self._resource_url("update", resource, resource_id),
            json=self._lower(data, _ENUM_FIELDS),
        )

    async def delete(self, resource: str, resource_id: str) -> Any:
        return await self._raw("delete", "DELETE", self._resource_url("delete", resource, resource_id))

    async def action(
        self,
        resource: str,
        resource_id: str,
        action: str,
        data: dict[str, Any] | None = None,
        method: str = "PUT",
    ) -> Any:
        """Run a state-changing action such as ``deactivate``, ``approve`` or ``terminate``."""
        return await self._entity(
            action.replace("-", "_"),
            method.upper(),
            self._resource_url(action.replace("-", "_"), resource, resource_id, action),
            json=self._lower(data, _ENUM_FIELDS) if data is not None else None,
        )

    # -- Request helpers with dedicated routes -----------------------------

    async def update_request_status(self, request_id: str, status: str) -> Any:
        return await self.action("requests", request_id, "status", {"status": status})

    async def assign_request(self, request_id: str, assignment: dict[str, Any]) -> Any:
        return await self.action("requests", request_id, "assign", assignment)

    async def comment_on_request(self, request_id: str, comment: dict[str, Any]) -> Any:
        return await self.action("requests", request_id, "comments", comment, method="POST")

    def _resource_url(
        self, operation: str, resource: str, resource_id: str | None = None, action: str | None = None
    ) -> str:
        resource = resource.strip("/")
        if resource.split("/")[0] not in ADMIN_RESOURCES:
            error = ValidationError(f"Unknown admin resource: {resource!r}")
            self._log_failure(operation, error)
            raise error
        url = f"{ADMIN_BASE_URL}/{resource}"
        if resource_id:
            url = f"{url}/{resource_id}"
        if action:
            url = f"{url}/{action.strip('/')}"
        return url
