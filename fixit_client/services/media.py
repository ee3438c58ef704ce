"""Media library endpoints (``/media``)."""

from __future__ import annotations

import asyncio
from typing import Any

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.services.base import BaseService

MEDIA_BASE_URL = "/media"
MEDIA_LIST_SHAPE = ShapeDescriptor.list_of("media")


class MediaService(BaseService):
    service_name = "media"

    async def list(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list("list", MEDIA_BASE_URL, params, abort, MEDIA_LIST_SHAPE)

    async def get(self, media_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity("get", "GET", f"{MEDIA_BASE_URL}/{media_id}", abort=abort)

    async def update(self, media_id: str, updates: dict[str, Any], abort: asyncio.Event | None = None) -> Any:
        return await self._entity("update", "PUT", f"{MEDIA_BASE_URL}/{media_id}", json=updates, abort=abort)

    async def delete(self, media_id: str) -> Any:
        return await self._raw("delete", "DELETE", f"{MEDIA_BASE_URL}/{media_id}")

    async def stats(self, abort: asyncio.Event | None = None) -> Any:
        return await self._data("stats", "GET", f"{MEDIA_BASE_URL}/stats", abort=abort)

    async def by_resource(
        self,
        resource_type: str,
        resource_id: str,
        params: dict[str, Any] | None = None,
        abort: asyncio.Event | None = None,
    ) -> Page | Any:
        return await self._list(
            "by_resource",
            f"{MEDIA_BASE_URL}/by-resource/{resource_type}/{resource_id}",
            params,
            abort,
            MEDIA_LIST_SHAPE,
        )
