"""Vendor endpoints (``/vendors``)."""

from __future__ import annotations

import asyncio
from typing import Any

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.services.base import BaseService

VENDOR_BASE_URL = "/vendors"
VENDOR_LIST_SHAPE = ShapeDescriptor.list_of("vendors")

# Page size used by the per-property and per-service lookups.
LOOKUP_LIMIT = 100


class VendorService(BaseService):
    service_name = "vendors"

    async def list(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list(
            "list", VENDOR_BASE_URL, self._lower(params, ["services", "status"]), abort, VENDOR_LIST_SHAPE
        )

    async def get(self, vendor_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity("get", "GET", f"{VENDOR_BASE_URL}/{vendor_id}", abort=abort)

    async def create(self, vendor_data: dict[str, Any]) -> Any:
        payload = self._lower(vendor_data, ["services"])
        payload.setdefault("services", [])
        return await self._entity("create", "POST", VENDOR_BASE_URL, json=payload)

    async def update(self, vendor_id: str, vendor_data: dict[str, Any]) -> Any:
        return await self._entity(
            "update", "PUT", f"{VENDOR_BASE_URL}/{vendor_id}", json=self._lower(vendor_data, ["services"])
        )

    async def delete(self, vendor_id: str) -> Any:
        return await self._raw("delete", "DELETE", f"{VENDOR_BASE_URL}/{vendor_id}")

    async def rate(self, vendor_id: str, rating: dict[str, Any]) -> Any:
        return await self._entity("rate", "POST", f"{VENDOR_BASE_URL}/{vendor_id}/rate", json=rating)

    async def deactivate(self, vendor_id: str) -> Any:
        return await self._entity("deactivate", "PUT", f"{VENDOR_BASE_URL}/{vendor_id}/deactivate")

    async def stats(self, abort: asyncio.Event | None = None) -> Any:
        return await self._data("stats", "GET", f"{VENDOR_BASE_URL}/stats", abort=abort)

    async def by_property(self, property_id: str, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list(
            "by_property",
            VENDOR_BASE_URL,
            {"propertyId": property_id, "limit": LOOKUP_LIMIT},
            abort,
            VENDOR_LIST_SHAPE,
        )

    async def by_service(self, service: str, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list(
            "by_service",
            VENDOR_BASE_URL,
            {"service": service.lower(), "limit": LOOKUP_LIMIT},
            abort,
            VENDOR_LIST_SHAPE,
        )

    async def associate_with_property(self, vendor_id: str, property_id: str) -> Any:
        """Add ``property_id`` to the vendor's associated properties (idempotent)."""
        vendor = await self.get(vendor_id)
        associated = list(vendor.get("associatedProperties") or []) if isinstance(vendor, dict) else []
        if not any(_property_id(p) == property_id for p in associated):
            associated.append(property_id)
        ids = [_property_id(p) for p in associated]
        return await self._entity(
            "associate_with_property",
            "PUT",
            f"{VENDOR_BASE_URL}/{vendor_id}",
            json={"associatedProperties": ids},
        )


def _property_id(entry: Any) -> Any:
    # Populated references arrive as {"_id": ...}.
    if isinstance(entry, dict):
        return entry.get("_id")
    return entry
