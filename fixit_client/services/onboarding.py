"""Onboarding document endpoints (``/onboarding``).

Creation always carries the document file, so it is always multipart, with
list fields sent in bracket form (``tags[]``). Updates switch to multipart
only when a replacement file is supplied.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from fixit_client.errors import ValidationError
from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.payloads import UploadFile
from fixit_client.services.base import BaseService
from fixit_client.transport.binary import BinaryPayload

logger = logging.getLogger(__name__)

ONBOARDING_BASE_URL = "/onboarding"
ONBOARDING_ENUM_FIELDS = ("category", "visibility")


class OnboardingService(BaseService):
    service_name = "onboarding"

    async def create(
        self,
        document_data: dict[str, Any],
        document: UploadFile | None,
        abort: asyncio.Event | None = None,
    ) -> Any:
        body = self._upload_body("create", document_data, [document] if document else [], ONBOARDING_ENUM_FIELDS)
        return await self._entity("create", "POST", ONBOARDING_BASE_URL, abort=abort, **body.as_kwargs())

    async def list(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list(
            "list",
            ONBOARDING_BASE_URL,
            self._lower(params, ONBOARDING_ENUM_FIELDS),
            abort,
            ShapeDescriptor.list_of("documents"),
        )

    async def get(self, document_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity("get", "GET", f"{ONBOARDING_BASE_URL}/{document_id}", abort=abort)

    async def update(
        self,
        document_id: str,
        updates: dict[str, Any],
        document: UploadFile | None = None,
        abort: asyncio.Event | None = None,
    ) -> Any:
        body = self._upload_body("update", updates, [document] if document else [], ONBOARDING_ENUM_FIELDS)
        return await self._entity(
            "update", "PUT", f"{ONBOARDING_BASE_URL}/{document_id}", abort=abort, **body.as_kwargs()
        )

    async def delete(self, document_id: str) -> Any:
        return await self._raw("delete", "DELETE", f"{ONBOARDING_BASE_URL}/{document_id}")

    async def mark_completed(self, document_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity(
            "mark_completed", "PATCH", f"{ONBOARDING_BASE_URL}/{document_id}/complete", json={}, abort=abort
        )

    async def download_info(self, document_id: str, abort: asyncio.Event | None = None) -> dict[str, Any]:
        """Return ``{downloadUrl, fileName, ...}`` for a document."""
        return await self._data(
            "download_info", "GET", f"{ONBOARDING_BASE_URL}/{document_id}/download", abort=abort
        )

    async def download(self, document_id: str, abort: asyncio.Event | None = None) -> BinaryPayload:
        info = await self.download_info(document_id, abort)
        url = info.get("downloadUrl") if isinstance(info, dict) else None
        if not url:
            error = ValidationError("Download link unavailable for this document")
            self._log_failure("download", error)
            raise error

        payload = await self._call("download", self._api.download_url(url, abort))
        if payload.filename is None and info.get("fileName"):
            payload = BinaryPayload(payload.content, payload.content_type, info["fileName"])
        return payload

    async def download_to(self, document_id: str, directory: str | Path) -> Path:
        payload = await self.download(document_id)
        target = payload.save_to(directory, f"onboarding-document-{document_id}")
        logger.info(
            "Saved onboarding document to %s",
            target,
            extra={"service": self.service_name, "operation": "download"},
        )
        return target
