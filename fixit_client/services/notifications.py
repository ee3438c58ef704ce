"""Notification endpoints (``/notifications``).

``unread_count`` is the passive polling call and is flagged as a background
request, so its 401 handling follows ``logout_on_background_401``.
"""

from __future__ import annotations

import asyncio
from typing import Any

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.services.base import BaseService

NOTIFICATION_BASE_URL = "/notifications"
NOTIFICATION_LIST_SHAPE = ShapeDescriptor.list_of("notifications")


class NotificationService(BaseService):
    service_name = "notifications"

    async def list(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list("list", NOTIFICATION_BASE_URL, params, abort, NOTIFICATION_LIST_SHAPE)

    async def mark_read(self, notification_id: str) -> Any:
        return await self._data("mark_read", "PUT", f"{NOTIFICATION_BASE_URL}/{notification_id}/read")

    async def mark_all_read(self) -> Any:
        return await self._data("mark_all_read", "PUT", f"{NOTIFICATION_BASE_URL}/read-all")

    async def delete(self, notification_id: str) -> Any:
        return await self._raw("delete", "DELETE", f"{NOTIFICATION_BASE_URL}/{notification_id}")

    async def unread_count(self, abort: asyncio.Event | None = None) -> int:
        page = await self._list(
            "unread_count", NOTIFICATION_BASE_URL, None, abort, NOTIFICATION_LIST_SHAPE, background=True
        )
        items = page.items if isinstance(page, Page) else []
        return sum(1 for n in items if isinstance(n, dict) and not n.get("isRead"))
