"""Lease endpoints (``/leases``), including document upload and download."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.payloads import UploadFile
from fixit_client.services.base import BaseService
from fixit_client.transport.binary import BinaryPayload

LEASE_BASE_URL = "/leases"
LEASE_LIST_SHAPE = ShapeDescriptor.list_of("leases")


class LeaseService(BaseService):
    service_name = "leases"

    async def create(self, lease_data: dict[str, Any]) -> Any:
        return await self._entity("create", "POST", LEASE_BASE_URL, json=self._lower(lease_data, ["status"]))

    async def list(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list("list", LEASE_BASE_URL, params, abort, LEASE_LIST_SHAPE)

    async def get(self, lease_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity("get", "GET", f"{LEASE_BASE_URL}/{lease_id}", abort=abort)

    async def update(self, lease_id: str, updates: dict[str, Any]) -> Any:
        return await self._entity(
            "update", "PUT", f"{LEASE_BASE_URL}/{lease_id}", json=self._lower(updates, ["status"])
        )

    async def delete(self, lease_id: str) -> Any:
        return await self._raw("delete", "DELETE", f"{LEASE_BASE_URL}/{lease_id}")

    async def expiring(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list("expiring", f"{LEASE_BASE_URL}/expiring", params, abort, LEASE_LIST_SHAPE)

    async def mark_renewal_sent(self, lease_id: str) -> Any:
        return await self._entity("mark_renewal_sent", "PUT", f"{LEASE_BASE_URL}/{lease_id}/mark-renewal-sent")

    async def upload_document(self, lease_id: str, document: UploadFile) -> Any:
        body = self._upload_body("upload_document", None, [document])
        return await self._entity(
            "upload_document", "POST", f"{LEASE_BASE_URL}/{lease_id}/documents", **body.as_kwargs()
        )

    async def download_document(self, lease_id: str, document_id: str) -> BinaryPayload:
        return await self._blob(
            "download_document", "GET", f"{LEASE_BASE_URL}/{lease_id}/documents/{document_id}/download"
        )

    async def download_document_to(self, lease_id: str, document_id: str, directory: str | Path) -> Path:
        return await self._download_to(
            "download_document",
            directory,
            f"lease-{lease_id}-document-{document_id}",
            "GET",
            f"{LEASE_BASE_URL}/{lease_id}/documents/{document_id}/download",
        )

    async def generate_document(self, lease_id: str, document_type: str) -> BinaryPayload:
        """Render a lease document (renewal letter, notice...) as a PDF blob."""
        return await self._blob(
            "generate_document",
            "POST",
            f"{LEASE_BASE_URL}/{lease_id}/generate-document",
            json={"documentType": document_type},
        )
