"""User endpoints (``/users``).

The signed-in user's own record lives at ``/users/profile``.
"""

from __future__ import annotations

import asyncio
from typing import Any

from fixit_client.normalizer import Page, ShapeDescriptor
from fixit_client.services.base import BaseService

USER_BASE_URL = "/users"
PROFILE_URL = f"{USER_BASE_URL}/profile"
USER_LIST_SHAPE = ShapeDescriptor.list_of("users")


class UserService(BaseService):
    service_name = "users"

    async def me(self, abort: asyncio.Event | None = None) -> Any:
        return await self._entity("me", "GET", PROFILE_URL, abort=abort)

    async def update_me(self, profile_data: dict[str, Any]) -> Any:
        profile = await self._entity("update_me", "PUT", PROFILE_URL, json=profile_data)
        if isinstance(profile, dict) and self._api.session_store.get().is_authenticated:
            self._api.session_store.update_profile(profile)
        return profile

    async def list(self, params: dict[str, Any] | None = None, abort: asyncio.Event | None = None) -> Page | Any:
        return await self._list(
            "list", USER_BASE_URL, self._lower(params, ["role", "status"]), abort, USER_LIST_SHAPE
        )

    async def create(self, user_data: dict[str, Any]) -> Any:
        return await self._entity("create", "POST", USER_BASE_URL, json=self._lower(user_data, ["role"]))

    async def get(self, user_id: str, abort: asyncio.Event | None = None) -> Any:
        return await self._entity("get", "GET", f"{USER_BASE_URL}/{user_id}", abort=abort)

    async def update(self, user_id: str, updates: dict[str, Any]) -> Any:
        return await self._entity(
            "update", "PUT", f"{USER_BASE_URL}/{user_id}", json=self._lower(updates, ["role"])
        )

    async def approve(self, user_id: str) -> Any:
        return await self._entity("approve", "PUT", f"{USER_BASE_URL}/{user_id}/approve")

    async def update_role(self, user_id: str, role: str) -> Any:
        return await self._entity(
            "update_role", "PUT", f"{USER_BASE_URL}/{user_id}/role", json={"role": role.lower()}
        )

    async def delete(self, user_id: str) -> Any:
        return await self._raw("delete", "DELETE", f"{USER_BASE_URL}/{user_id}")

    async def deactivate(self, user_id: str) -> Any:
        return await self._entity("deactivate", "PUT", f"{USER_BASE_URL}/{user_id}/deactivate")

    async def activate(self, user_id: str) -> Any:
        return await self._entity("activate", "PUT", f"{USER_BASE_URL}/{user_id}/activate")

    async def reset_password(self, user_id: str, new_password: str) -> Any:
        return await self._raw(
            "reset_password", "POST", f"{USER_BASE_URL}/{user_id}/reset-password", json={"newPassword": new_password}
        )
