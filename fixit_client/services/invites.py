"""Invitation endpoints (``/invites``)."""

from __future__ import annotations

import asyncio
from typing import Any

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.services.base import BaseService

INVITE_BASE_URL = "/invites"


class InviteService(BaseService):
    service_name = "invites"

    async def send(self, invite_data: dict[str, Any]) -> Any:
        return await self._raw("send", "POST", f"{INVITE_BASE_URL}/send", json=self._lower(invite_data, ["role", "roles"]))

    async def accept(self, accept_data: dict[str, Any]) -> Any:
        return await self._raw("accept", "POST", f"{INVITE_BASE_URL}/accept", json=accept_data)

    async def list(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list(
            "list", INVITE_BASE_URL, self._lower(params, ["status", "role"]), abort, ShapeDescriptor.list_of("invites")
        )

    async def revoke(self, invite_id: str) -> Any:
        return await self._raw("revoke", "DELETE", f"{INVITE_BASE_URL}/{invite_id}")

    async def resend(self, invite_id: str) -> Any:
        return await self._raw("resend", "POST", f"{INVITE_BASE_URL}/resend/{invite_id}")

    async def verify(self, token: str, abort: asyncio.Event | None = None) -> Any:
        return await self._data("verify", "GET", f"{INVITE_BASE_URL}/verify/{token}", abort=abort)
