"""Generated document endpoints (``/documents``) and stored file downloads."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from fixit_client.services.base import BaseService
from fixit_client.transport.binary import BinaryPayload

DOCUMENT_BASE_URL = "/documents"

# Template types offered for each document context.
CONTEXT_TEMPLATE_TYPES: dict[str, frozenset[str]] = {
    "lease": frozenset({"lease_notice", "renewal_letter", "exit_letter", "termination_notice"}),
    "rent": frozenset({"rent_report"}),
    "maintenance": frozenset({"maintenance_report"}),
}


class DocumentService(BaseService):
    service_name = "documents"

    async def generate(
        self,
        document_type: str,
        data: dict[str, Any],
        options: dict[str, Any] | None = None,
        abort: asyncio.Event | None = None,
    ) -> Any:
        """Generate and store a document; returns its metadata (including URL)."""
        return await self._data(
            "generate",
            "POST",
            f"{DOCUMENT_BASE_URL}/generate",
            json={"documentType": document_type, "data": data, "options": options or {}},
            abort=abort,
        )

    async def templates(self, abort: asyncio.Event | None = None) -> list[dict[str, Any]]:
        data = await self._data("templates", "GET", f"{DOCUMENT_BASE_URL}/templates", abort=abort)
        return data if isinstance(data, list) else []

    async def context_templates(self, context: str, abort: asyncio.Event | None = None) -> list[dict[str, Any]]:
        """Templates applicable to ``context`` (lease, rent, maintenance); all for any other context."""
        templates = await self.templates(abort)
        allowed = CONTEXT_TEMPLATE_TYPES.get(context)
        if allowed is None:
            return templates
        return [t for t in templates if isinstance(t, dict) and t.get("type") in allowed]

    async def download(self, document_id: str) -> BinaryPayload:
        return await self._blob("download", "GET", f"/media/{document_id}")

    async def download_to(self, document_id: str, directory: str | Path) -> Path:
        return await self._download_to(
            "download", directory, f"document-{document_id}.pdf", "GET", f"/media/{document_id}"
        )

    async def preview(
        self, document_type: str, data: dict[str, Any], abort: asyncio.Event | None = None
    ) -> BinaryPayload:
        return await self._blob(
            "preview",
            "POST",
            f"{DOCUMENT_BASE_URL}/preview",
            json={"documentType": document_type, "data": data},
            abort=abort,
        )

    async def generate_report(
        self,
        report_type: str,
        filters: dict[str, Any],
        options: dict[str, Any] | None = None,
        abort: asyncio.Event | None = None,
    ) -> Any:
        return await self._data(
            "generate_report",
            "POST",
            "/reports/document",
            json={"reportType": report_type, "filters": filters, "options": options or {}},
            abort=abort,
        )
