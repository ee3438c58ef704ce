"""Unit endpoints, nested under a property (``/properties/{id}/units``).

Unit responses arrive as ``{success, data: {unit: {...}}}``; the entity
shape unwraps both layers.
"""

from __future__ import annotations

import asyncio
from typing import Any

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.services.base import BaseService

UNIT_SHAPE = ShapeDescriptor.entity("unit")
UNIT_LIST_SHAPE = ShapeDescriptor.list_of("units")


def _units_url(property_id: str, unit_id: str | None = None) -> str:
    base = f"/properties/{property_id}/units"
    return f"{base}/{unit_id}" if unit_id else base


class UnitService(BaseService):
    service_name = "units"

    async def create(
        self, property_id: str, unit_data: dict[str, Any], abort: asyncio.Event | None = None
    ) -> Any:
        return await self._entity(
            "create", "POST", _units_url(property_id), UNIT_SHAPE, json=unit_data, abort=abort
        )

    async def list(
        self,
        property_id: str,
        params: dict[str, Any] | None = None,
        abort: asyncio.Event | None = None,
    ) -> Page | Any:
        return await self._list("list", _units_url(property_id), params, abort, UNIT_LIST_SHAPE)

    async def get(self, property_id: str, unit_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity("get", "GET", _units_url(property_id, unit_id), UNIT_SHAPE, abort=abort)

    async def update(self, property_id: str, unit_id: str, updates: dict[str, Any]) -> Any:
        return await self._entity("update", "PUT", _units_url(property_id, unit_id), UNIT_SHAPE, json=updates)

    async def delete(self, property_id: str, unit_id: str) -> Any:
        return await self._data("delete", "DELETE", _units_url(property_id, unit_id))

    async def assign_tenant(self, property_id: str, unit_id: str, tenant_id: str) -> Any:
        return await self._entity(
            "assign_tenant",
            "POST",
            f"{_units_url(property_id, unit_id)}/assign-tenant",
            UNIT_SHAPE,
            json={"tenantId": tenant_id},
        )

    async def remove_tenant(self, property_id: str, unit_id: str, tenant_id: str) -> Any:
        return await self._entity(
            "remove_tenant",
            "DELETE",
            f"{_units_url(property_id, unit_id)}/remove-tenant/{tenant_id}",
            UNIT_SHAPE,
        )
