"""Audit log endpoints (``/audit-logs``)."""

from __future__ import annotations

import asyncio
from typing import Any

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.services.base import BaseService

AUDIT_BASE_URL = "/audit-logs"
AUDIT_LIST_SHAPE = ShapeDescriptor.list_of("logs")

# Sample size used to derive the filter vocabularies.
FILTER_SAMPLE_LIMIT = 1000


class AuditLogService(BaseService):
    service_name = "audit_logs"

    async def list(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        """List logs; the backend answers ``{data, pagination}``."""
        return await self._list("list", AUDIT_BASE_URL, params, abort, AUDIT_LIST_SHAPE)

    async def get(self, log_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity("get", "GET", f"{AUDIT_BASE_URL}/{log_id}", abort=abort)

    async def resource_history(
        self,
        resource_type: str,
        resource_id: str,
        params: dict[str, Any] | None = None,
        abort: asyncio.Event | None = None,
    ) -> Page | Any:
        return await self._list(
            "resource_history",
            f"{AUDIT_BASE_URL}/resources/{resource_type}/{resource_id}",
            params,
            abort,
            AUDIT_LIST_SHAPE,
        )

    async def user_logs(
        self, user_id: str, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None
    ) -> Page | Any:
        return await self._list("user_logs", f"{AUDIT_BASE_URL}/users/{user_id}", params, abort, AUDIT_LIST_SHAPE)

    async def dashboard_summary(self, days: int = 30, abort: asyncio.Event | None = None) -> Any:
        return await self._data(
            "dashboard_summary", "GET", f"{AUDIT_BASE_URL}/dashboard/summary", params={"days": days}, abort=abort
        )

    async def action_types(self, abort: asyncio.Event | None = None) -> list[str]:
        return await self._distinct("action", abort)

    async def resource_types(self, abort: asyncio.Event | None = None) -> list[str]:
        return await self._distinct("resourceType", abort)

    async def _distinct(self, field: str, abort: asyncio.Event | None) -> list[str]:
        page = await self.list({"limit": FILTER_SAMPLE_LIMIT}, abort)
        items = page.items if isinstance(page, Page) else []
        values = {log.get(field) for log in items if isinstance(log, dict)}
        return sorted(v for v in values if v)
