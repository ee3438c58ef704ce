"""Direct message endpoints (``/messages``)."""

from __future__ import annotations

import asyncio
from typing import Any

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.services.base import BaseService, count_from

MESSAGE_BASE_URL = "/messages"


class MessageService(BaseService):
    service_name = "messages"

    async def send(self, message_data: dict[str, Any], abort: asyncio.Event | None = None) -> Any:
        return await self._entity("send", "POST", MESSAGE_BASE_URL, json=message_data, abort=abort)

    async def list(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list("list", MESSAGE_BASE_URL, params, abort, ShapeDescriptor.list_of("messages"))

    async def get(self, message_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity("get", "GET", f"{MESSAGE_BASE_URL}/{message_id}", abort=abort)

    async def mark_read(self, message_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity("mark_read", "PATCH", f"{MESSAGE_BASE_URL}/{message_id}/read", json={}, abort=abort)

    async def mark_conversation_read(self, conversation: dict[str, Any], abort: asyncio.Event | None = None) -> Any:
        return await self._data(
            "mark_conversation_read", "POST", f"{MESSAGE_BASE_URL}/mark-conversation-read", json=conversation, abort=abort
        )

    async def unread_count(
        self,
        params: dict[str, Any] | None = None,
        abort: asyncio.Event | None = None,
        background: bool = True,
    ) -> int:
        data = await self._data(
            "unread_count",
            "GET",
            f"{MESSAGE_BASE_URL}/unread/count",
            params=params,
            abort=abort,
            background=background,
        )
        return count_from(data)

    async def delete(self, message_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._raw("delete", "DELETE", f"{MESSAGE_BASE_URL}/{message_id}", abort=abort)

