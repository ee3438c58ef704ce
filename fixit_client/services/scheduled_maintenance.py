"""Scheduled (recurring) maintenance endpoints (``/scheduled-maintenance``).

The list endpoint answers ``{tasks, total, currentPage, itemsPerPage}``;
that envelope maps straight onto a Page.
"""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.payloads import UploadFile
from fixit_client.services.base import BaseService

SCHEDULED_MAINTENANCE_BASE_URL = "/scheduled-maintenance"
TASK_LIST_SHAPE = ShapeDescriptor.list_of("tasks")
TASK_ENUM_FIELDS = ("category", "status", "frequency.type")


class ScheduledMaintenanceService(BaseService):
    service_name = "scheduled_maintenance"

    async def create(self, task_data: dict[str, Any], media: Sequence[UploadFile] = ()) -> Any:
        body = self._upload_body("create", task_data, media, TASK_ENUM_FIELDS)
        return await self._entity("create", "POST", SCHEDULED_MAINTENANCE_BASE_URL, **body.as_kwargs())

    async def list(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list(
            "list",
            SCHEDULED_MAINTENANCE_BASE_URL,
            self._lower(params, ("category", "status")),
            abort,
            TASK_LIST_SHAPE,
        )

    async def get(self, task_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity("get", "GET", f"{SCHEDULED_MAINTENANCE_BASE_URL}/{task_id}", abort=abort)

    async def update(self, task_id: str, updates: dict[str, Any], media: Sequence[UploadFile] = ()) -> Any:
        body = self._upload_body("update", updates, media, TASK_ENUM_FIELDS)
        return await self._entity(
            "update", "PUT", f"{SCHEDULED_MAINTENANCE_BASE_URL}/{task_id}", **body.as_kwargs()
        )

    async def delete(self, task_id: str) -> Any:
        return await self._raw("delete", "DELETE", f"{SCHEDULED_MAINTENANCE_BASE_URL}/{task_id}")

    async def enable_public_link(self, task_id: str, expires_in_days: int | None = None) -> Any:
        return await self._data(
            "enable_public_link",
            "POST",
            f"{SCHEDULED_MAINTENANCE_BASE_URL}/{task_id}/enable-public-link",
            json={"expiresInDays": expires_in_days},
        )

    async def disable_public_link(self, task_id: str) -> Any:
        return await self._raw(
            "disable_public_link", "POST", f"{SCHEDULED_MAINTENANCE_BASE_URL}/{task_id}/disable-public-link"
        )

    async def pause(self, task_id: str) -> Any:
        return await self._entity("pause", "PUT", f"{SCHEDULED_MAINTENANCE_BASE_URL}/{task_id}/pause")

    async def resume(self, task_id: str) -> Any:
        return await self._entity("resume", "PUT", f"{SCHEDULED_MAINTENANCE_BASE_URL}/{task_id}/resume")
