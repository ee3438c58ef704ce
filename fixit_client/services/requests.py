"""Maintenance request endpoints (``/requests``)."""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.payloads import UploadFile
from fixit_client.services.base import BaseService

REQUEST_BASE_URL = "/requests"
REQUEST_LIST_SHAPE = ShapeDescriptor.list_of("requests")

# Enum fields the backend stores lowercase.
REQUEST_ENUM_FIELDS = ("category", "priority", "status")


class RequestService(BaseService):
    service_name = "requests"

    async def list(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list(
            "list", REQUEST_BASE_URL, self._lower(params, REQUEST_ENUM_FIELDS), abort, REQUEST_LIST_SHAPE
        )

    async def get(self, request_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity("get", "GET", f"{REQUEST_BASE_URL}/{request_id}", abort=abort)

    async def create(
        self,
        request_data: dict[str, Any],
        files: Sequence[UploadFile] = (),
        abort: asyncio.Event | None = None,
    ) -> Any:
        """Create a maintenance request.

        With at least one file the body is multipart and the files are sent
        under the operation's upload field; otherwise it is plain JSON.
        """
        body = self._upload_body("create", request_data, files, REQUEST_ENUM_FIELDS)
        return await self._entity("create", "POST", REQUEST_BASE_URL, abort=abort, **body.as_kwargs())

    async def update(self, request_id: str, updates: dict[str, Any], abort: asyncio.Event | None = None) -> Any:
        return await self._entity(
            "update",
            "PUT",
            f"{REQUEST_BASE_URL}/{request_id}",
            json=self._lower(updates, REQUEST_ENUM_FIELDS),
            abort=abort,
        )

    async def delete(self, request_id: str) -> Any:
        return await self._raw("delete", "DELETE", f"{REQUEST_BASE_URL}/{request_id}")

    async def assign(
        self, request_id: str, assignment: dict[str, Any], abort: asyncio.Event | None = None
    ) -> Any:
        return await self._entity(
            "assign", "POST", f"{REQUEST_BASE_URL}/{request_id}/assign", json=assignment, abort=abort
        )

    async def upload_media(
        self, request_id: str, files: Sequence[UploadFile], abort: asyncio.Event | None = None
    ) -> Any:
        body = self._upload_body("upload_media", None, files)
        return await self._entity(
            "upload_media", "POST", f"{REQUEST_BASE_URL}/{request_id}/media", abort=abort, **body.as_kwargs()
        )

    async def delete_media(self, request_id: str, media_url: str) -> Any:
        return await self._data(
            "delete_media", "DELETE", f"{REQUEST_BASE_URL}/{request_id}/media", json={"mediaUrl": media_url}
        )

    async def submit_feedback(
        self, request_id: str, feedback: dict[str, Any], abort: asyncio.Event | None = None
    ) -> Any:
        return await self._entity(
            "submit_feedback", "POST", f"{REQUEST_BASE_URL}/{request_id}/feedback", json=feedback, abort=abort
        )

    async def enable_public_link(
        self, request_id: str, expires_in_days: int | None = None, abort: asyncio.Event | None = None
    ) -> Any:
        return await self._data(
            "enable_public_link",
            "POST",
            f"{REQUEST_BASE_URL}/{request_id}/enable-public-link",
            json={"expiresInDays": expires_in_days},
            abort=abort,
        )

    async def disable_public_link(self, request_id: str) -> Any:
        return await self._raw(
            "disable_public_link", "POST", f"{REQUEST_BASE_URL}/{request_id}/disable-public-link"
        )

    async def verify(self, request_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._status_change("verify", request_id, abort)

    async def reopen(self, request_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._status_change("reopen", request_id, abort)

    async def archive(self, request_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._status_change("archive", request_id, abort)

    async def _status_change(self, action: str, request_id: str, abort: asyncio.Event | None) -> Any:
        return await self._entity(action, "PUT", f"{REQUEST_BASE_URL}/{request_id}/{action}", json={}, abort=abort)
