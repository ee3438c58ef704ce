"""Comment and mention endpoints (``/comments``)."""

from __future__ import annotations

import asyncio
from typing import Any

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.services.base import BaseService, count_from

COMMENT_BASE_URL = "/comments"


class CommentService(BaseService):
    service_name = "comments"

    async def add(self, comment: dict[str, Any], abort: asyncio.Event | None = None) -> Any:
        return await self._entity(
            "add", "POST", COMMENT_BASE_URL, json=self._lower(comment, ["contextType"]), abort=abort
        )

    async def list(self, params: dict[str, Any], abort: asyncio.Event | None = None) -> Page | Any:
        """List comments for one context (``contextType`` + ``contextId``)."""
        return await self._list(
            "list", COMMENT_BASE_URL, self._lower(params, ["contextType"]), abort, ShapeDescriptor.list_of("comments")
        )

    async def update(self, comment_id: str, updates: dict[str, Any], abort: asyncio.Event | None = None) -> Any:
        return await self._entity("update", "PUT", f"{COMMENT_BASE_URL}/{comment_id}", json=updates, abort=abort)

    async def delete(self, comment_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._raw("delete", "DELETE", f"{COMMENT_BASE_URL}/{comment_id}", abort=abort)

    async def unread_mention_count(self, abort: asyncio.Event | None = None, background: bool = True) -> int:
        data = await self._data(
            "unread_mention_count", "GET", f"{COMMENT_BASE_URL}/mentions/count", abort=abort, background=background
        )
        return count_from(data)

    async def mark_mentions_read(self, context: dict[str, Any], abort: asyncio.Event | None = None) -> Any:
        return await self._data(
            "mark_mentions_read",
            "POST",
            f"{COMMENT_BASE_URL}/mentions/mark-read",
            json=self._lower(context, ["contextType"]),
            abort=abort,
        )
