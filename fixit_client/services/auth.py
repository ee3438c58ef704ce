"""Authentication endpoints (``/auth``).

``login`` is the only place a session is created. ``logout`` always clears
the local session, even when the backend call fails.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fixit_client.errors import ApiError
from fixit_client.services.base import BaseService

logger = logging.getLogger(__name__)

_SENSITIVE_PROFILE_KEYS = frozenset({"token", "password", "accessToken", "refreshToken"})


class AuthService(BaseService):
    service_name = "auth"

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """Authenticate and persist the returned session.

        The backend answers ``{token, user}`` (or the profile fields inline
        next to ``token``). Only non-sensitive profile fields are stored.
        """
        body = await self._raw("login", "POST", "/auth/login", json={"email": email, "password": password})
        if isinstance(body, dict) and body.get("token"):
            self._api.session_store.set(body["token"], _profile_from_login(body))
            logger.info("Session established", extra={"service": self.service_name, "operation": "login"})
        else:
            logger.warning(
                "Login response carried no token",
                extra={"service": self.service_name, "operation": "login"},
            )
        return body

    async def register(self, user_data: dict[str, Any]) -> Any:
        return await self._raw("register", "POST", "/auth/register", json=self._lower(user_data, ["role"]))

    async def me(self, abort: asyncio.Event | None = None) -> Any:
        return await self._data("me", "GET", "/auth/me", abort=abort)

    async def logout(self) -> dict[str, Any]:
        try:
            return await self._raw("logout", "POST", "/auth/logout")
        except ApiError as exc:
            logger.warning(
                "Logout call failed, clearing local session anyway: %s",
                exc,
                extra={"service": self.service_name, "operation": "logout"},
            )
            return {"success": True, "message": "Logged out from client."}
        finally:
            self._api.session_store.clear()

    async def forgot_password(self, email: str) -> Any:
        return await self._raw("forgot_password", "POST", "/auth/forgot-password", json={"email": email})

    async def reset_password(self, token: str, new_password: str) -> Any:
        return await self._raw(
            "reset_password", "PUT", f"/auth/reset-password/{token}", json={"newPassword": new_password}
        )

    async def send_verification_email(self) -> Any:
        return await self._raw("send_verification_email", "POST", "/auth/send-verification-email")

    async def verify_email(self, token: str) -> Any:
        return await self._raw("verify_email", "GET", f"/auth/verify-email/{token}")


def _profile_from_login(body: dict[str, Any]) -> dict[str, Any]:
    user = body.get("user")
    profile = dict(user) if isinstance(user, dict) else dict(body)
    return {k: v for k, v in profile.items() if k not in _SENSITIVE_PROFILE_KEYS}
