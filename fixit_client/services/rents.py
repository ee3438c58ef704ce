"""Rent record endpoints (``/rents``), including payment proofs."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.payloads import UploadFile
from fixit_client.services.base import BaseService
from fixit_client.transport.binary import BinaryPayload

RENT_BASE_URL = "/rents"
RENT_LIST_SHAPE = ShapeDescriptor.list_of("rents")


class RentService(BaseService):
    service_name = "rents"

    async def create(self, rent_data: dict[str, Any]) -> Any:
        return await self._entity("create", "POST", RENT_BASE_URL, json=self._lower(rent_data, ["status"]))

    async def list(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list("list", RENT_BASE_URL, params, abort, RENT_LIST_SHAPE)

    async def get(self, rent_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity("get", "GET", f"{RENT_BASE_URL}/{rent_id}", abort=abort)

    async def update(self, rent_id: str, updates: dict[str, Any]) -> Any:
        return await self._entity("update", "PUT", f"{RENT_BASE_URL}/{rent_id}", json=self._lower(updates, ["status"]))

    async def record_payment(
        self,
        rent_id: str,
        payment_data: dict[str, Any],
        proof: UploadFile | None = None,
    ) -> Any:
        """Record a payment; an optional proof file switches the body to multipart."""
        body = self._upload_body("record_payment", payment_data, [proof] if proof else [], ["status"])
        return await self._entity("record_payment", "POST", f"{RENT_BASE_URL}/{rent_id}/pay", **body.as_kwargs())

    async def delete(self, rent_id: str) -> Any:
        return await self._raw("delete", "DELETE", f"{RENT_BASE_URL}/{rent_id}")

    async def upcoming(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list("upcoming", f"{RENT_BASE_URL}/upcoming", params, abort, RENT_LIST_SHAPE)

    async def history(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list("history", f"{RENT_BASE_URL}/history", params, abort, RENT_LIST_SHAPE)

    async def upload_proof(self, rent_id: str, proof: UploadFile) -> Any:
        body = self._upload_body("upload_proof", None, [proof])
        return await self._entity("upload_proof", "POST", f"{RENT_BASE_URL}/{rent_id}/upload-proof", **body.as_kwargs())

    async def download_proof(self, rent_id: str) -> BinaryPayload:
        return await self._blob("download_proof", "GET", f"{RENT_BASE_URL}/{rent_id}/download-proof")

    async def download_proof_to(self, rent_id: str, directory: str | Path) -> Path:
        return await self._download_to(
            "download_proof",
            directory,
            f"rent-{rent_id}-proof",
            "GET",
            f"{RENT_BASE_URL}/{rent_id}/download-proof",
        )
