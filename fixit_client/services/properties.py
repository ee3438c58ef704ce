"""Property endpoints (``/properties``)."""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.services.base import BaseService

PROPERTY_BASE_URL = "/properties"


class PropertyService(BaseService):
    service_name = "properties"

    async def list(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list(
            "list", PROPERTY_BASE_URL, params, abort, ShapeDescriptor.list_of("properties")
        )

    async def get(self, property_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity(
            "get", "GET", f"{PROPERTY_BASE_URL}/{property_id}", ShapeDescriptor.entity("property"), abort=abort
        )

    async def create(self, property_data: dict[str, Any]) -> Any:
        return await self._entity(
            "create", "POST", PROPERTY_BASE_URL, ShapeDescriptor.entity("property"), json=property_data
        )

    async def update(self, property_id: str, property_data: dict[str, Any]) -> Any:
        return await self._entity(
            "update",
            "PUT",
            f"{PROPERTY_BASE_URL}/{property_id}",
            ShapeDescriptor.entity("property"),
            json=property_data,
        )

    async def delete(self, property_id: str) -> Any:
        return await self._raw("delete", "DELETE", f"{PROPERTY_BASE_URL}/{property_id}")

    async def assign_user(
        self,
        property_id: str,
        user_id: str,
        roles: Sequence[str],
        unit_id: str | None = None,
    ) -> Any:
        payload: dict[str, Any] = {"userIdToAssign": user_id, "roles": [r.lower() for r in roles]}
        if unit_id:
            payload["unitId"] = unit_id
        return await self._raw("assign_user", "POST", f"{PROPERTY_BASE_URL}/{property_id}/assign-user", json=payload)

    async def remove_user(
        self,
        property_id: str,
        user_id: str,
        roles_to_remove: Sequence[str],
        unit_id: str | None = None,
    ) -> Any:
        params = {
            "rolesToRemove": [r.lower() for r in roles_to_remove],
            "unitId": unit_id,
        }
        return await self._raw(
            "remove_user", "DELETE", f"{PROPERTY_BASE_URL}/{property_id}/remove-user/{user_id}", params=params
        )
