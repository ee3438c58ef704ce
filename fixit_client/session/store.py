"""Session store over a key/value Storage backend.

Persisted layout (three named entries):

- ``user``: JSON-serialized profile record (role plus non-sensitive fields)
- ``token``: the raw session token
- ``authError``: one-shot "session expired" message for the next reader
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from fixit_client.session.storage import MemoryStorage, Storage

logger = logging.getLogger(__name__)

USER_KEY = "user"
TOKEN_KEY = "token"
AUTH_ERROR_KEY = "authError"

ADMIN_ROLE = "admin"
SESSION_EXPIRED_MESSAGE = "Session expired or invalid. Please log in again."

InvalidateCallback = Callable[[str], None]
ChangeCallback = Callable[[], None]


@dataclass(frozen=True)
class SessionCredential:
    """Snapshot of the stored session at the time of a request."""

    raw_token: str | None = None
    owner_role: str | None = None
    profile: dict[str, Any] = field(default_factory=dict)
    static_override_token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.raw_token is not None

    def bearer_token(self) -> str | None:
        """Resolve the single token to attach to an outgoing request.

        An admin session with a configured static override always uses the
        override, even when the session has a token of its own.
        """
        if self.owner_role == ADMIN_ROLE and self.static_override_token:
            return self.static_override_token
        return self.raw_token or None


class SessionStore:
    """Explicit owner of the persisted session entries."""

    def __init__(
        self,
        storage: Storage | None = None,
        static_override_token: str | None = None,
    ) -> None:
        self._storage = storage if storage is not None else MemoryStorage()
        self._static_override_token = static_override_token or None
        self._callbacks: list[InvalidateCallback] = []
        self._change_callbacks: list[ChangeCallback] = []

    @property
    def storage(self) -> Storage:
        return self._storage

    def get(self) -> SessionCredential:
        """Read the stored session; corrupted entries are removed and treated as absent."""
        profile = self._read_profile()
        token = self._read_token()
        role = profile.get("role") if profile else None
        return SessionCredential(
            raw_token=token,
            owner_role=str(role) if role else None,
            profile=profile or {},
            static_override_token=self._static_override_token,
        )

    def set(self, token: str, profile: dict[str, Any] | None = None) -> None:
        """Persist a freshly issued session (login / invite acceptance)."""
        self._storage.set_item(TOKEN_KEY, token)
        if profile is not None:
            self._storage.set_item(USER_KEY, json.dumps(profile, default=str))
        self._storage.remove_item(AUTH_ERROR_KEY)
        self._notify_change()

    def update_profile(self, profile: dict[str, Any]) -> None:
        self._storage.set_item(USER_KEY, json.dumps(profile, default=str))

    def clear(self) -> None:
        """Remove the token and profile entries."""
        self._storage.remove_item(TOKEN_KEY)
        self._storage.remove_item(USER_KEY)
        self._notify_change()

    def invalidate(self, message: str = SESSION_EXPIRED_MESSAGE) -> None:
        """Forced logout: clear the session, leave a one-shot flag, notify subscribers."""
        self.clear()
        self._storage.set_item(AUTH_ERROR_KEY, message)
        for callback in list(self._callbacks):
            callback(message)

    def on_invalidate(self, callback: InvalidateCallback) -> Callable[[], None]:
        """Subscribe to forced logouts. Returns an unsubscribe function."""
        return _subscribe(self._callbacks, callback)

    def on_change(self, callback: ChangeCallback) -> Callable[[], None]:
        """Subscribe to the session being set or cleared, including forced logouts.

        Returns an unsubscribe function.
        """
        return _subscribe(self._change_callbacks, callback)

    def pop_auth_error(self) -> str | None:
        """Read and consume the one-shot "session expired" flag."""
        message = self._storage.get_item(AUTH_ERROR_KEY)
        if message is not None:
            self._storage.remove_item(AUTH_ERROR_KEY)
        return message

    def _notify_change(self) -> None:
        for callback in list(self._change_callbacks):
            callback()

    # ------------------------------------------------------------------

    def _read_profile(self) -> dict[str, Any] | None:
        try:
            raw = self._storage.get_item(USER_KEY)
            if not raw:
                return None
            profile = json.loads(raw)
            if not isinstance(profile, dict):
                raise ValueError("stored user profile is not an object")
            return profile
        except (OSError, ValueError) as exc:
            logger.error("Error parsing stored user profile, clearing it: %s", exc)
            self._storage.remove_item(USER_KEY)
            return None

    def _read_token(self) -> str | None:
        try:
            token = self._storage.get_item(TOKEN_KEY)
        except OSError as exc:
            logger.error("Error retrieving stored token, clearing it: %s", exc)
            self._storage.remove_item(TOKEN_KEY)
            return None
        return token or None


def _subscribe(callbacks: list, callback: Callable[..., None]) -> Callable[[], None]:
    callbacks.append(callback)

    def _unsubscribe() -> None:
        if callback in callbacks:
            callbacks.remove(callback)

    return _unsubscribe
