"""Unauthenticated public endpoints (``/public``).

Public links (shared request and scheduled-maintenance views, invite
acceptance) need no session. Every state-changing public call first fetches
a CSRF token from ``/public/csrf-token`` and sends it back in the
``X-CSRF-Token`` header.
"""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

from fixit_client.errors import AuthenticationError
from fixit_client.payloads import UploadFile
from fixit_client.services.base import BaseService

PUBLIC_BASE_URL = "/public"
CSRF_HEADER = "X-CSRF-Token"


class PublicService(BaseService):
    service_name = "public"

    async def csrf_token(self, abort: asyncio.Event | None = None) -> str:
        body = await self._raw("csrf_token", "GET", f"{PUBLIC_BASE_URL}/csrf-token", abort=abort)
        token = None
        if isinstance(body, dict):
            data = body.get("data")
            token = (data.get("csrfToken") if isinstance(data, dict) else None) or body.get("csrfToken")
        if not token:
            error = AuthenticationError("CSRF token missing from response")
            self._log_failure("csrf_token", error)
            raise error
        return token

    # -- Invites -------------------------------------------------------------

    async def verify_invite(self, token: str, abort: asyncio.Event | None = None) -> Any:
        return await self._data("verify_invite", "GET", f"{PUBLIC_BASE_URL}/invites/{token}/verify", abort=abort)

    async def accept_invite(self, token: str, accept_data: dict[str, Any], abort: asyncio.Event | None = None) -> Any:
        return await self._protected("accept_invite", f"/invites/{token}/accept", abort, json=accept_data)

    async def decline_invite(self, token: str, reason: str = "", abort: asyncio.Event | None = None) -> Any:
        return await self._protected("decline_invite", f"/invites/{token}/decline", abort, json={"reason": reason})

    # -- Shared maintenance requests -----------------------------------------

    async def request_view(self, public_token: str, abort: asyncio.Event | None = None) -> Any:
        return await self._data("request_view", "GET", f"{PUBLIC_BASE_URL}/requests/{public_token}", abort=abort)

    async def request_update(
        self,
        public_token: str,
        update_data: dict[str, Any],
        media: Sequence[UploadFile] = (),
        abort: asyncio.Event | None = None,
    ) -> Any:
        body = self._upload_body("request_update", update_data, media, ["status"])
        return await self._protected(
            "request_update", f"/requests/{public_token}/update", abort, **body.as_kwargs()
        )

    async def request_comment(
        self, public_token: str, comment: dict[str, Any], abort: asyncio.Event | None = None
    ) -> Any:
        return await self._protected("request_comment", f"/requests/{public_token}/comments", abort, json=comment)

    # -- Shared scheduled maintenance ----------------------------------------

    async def scheduled_maintenance_view(self, public_token: str, abort: asyncio.Event | None = None) -> Any:
        return await self._data(
            "scheduled_maintenance_view",
            "GET",
            f"{PUBLIC_BASE_URL}/scheduled-maintenances/{public_token}",
            abort=abort,
        )

    async def scheduled_maintenance_update(
        self,
        public_token: str,
        update_data: dict[str, Any],
        media: Sequence[UploadFile] = (),
        abort: asyncio.Event | None = None,
    ) -> Any:
        body = self._upload_body("scheduled_maintenance_update", update_data, media, ["status"])
        return await self._protected(
            "scheduled_maintenance_update",
            f"/scheduled-maintenances/{public_token}/update",
            abort,
            **body.as_kwargs(),
        )

    async def scheduled_maintenance_comment(
        self, public_token: str, comment: dict[str, Any], abort: asyncio.Event | None = None
    ) -> Any:
        return await self._protected(
            "scheduled_maintenance_comment",
            f"/scheduled-maintenances/{public_token}/comments",
            abort,
            json=comment,
        )

    async def _protected(self, operation: str, path: str, abort: asyncio.Event | None, **kwargs: Any) -> Any:
        csrf = await self.csrf_token(abort)
        return await self._data(
            operation, "POST", f"{PUBLIC_BASE_URL}{path}", headers={CSRF_HEADER: csrf}, abort=abort, **kwargs
        )
