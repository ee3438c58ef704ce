"""Pydantic Settings for the Fix It API client.

All environment variables use the FIXIT_ prefix.
Example: FIXIT_BACKEND_ORIGIN=https://api.fixit.example, FIXIT_ADMIN_OVERRIDE_TOKEN=...
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """API client configuration validated from environment variables."""

    # Backend
    backend_origin: str  # e.g. "https://api.fixit.example"
    api_prefix: str = "/api"
    timeout_seconds: float = Field(default=30.0, gt=0)

    # Auth
    admin_override_token: str | None = None  # Static token for admin sessions
    login_path: str = "/login"
    logout_on_background_401: bool = True

    # Storage
    session_file: str | None = None  # Persistent session; in-memory when unset
    upload_contracts_path: str | None = None  # Overrides the bundled table

    # Dashboard
    dashboard_cache_ttl_seconds: float = Field(default=300.0, ge=0)  # 0 disables caching

    log_level: str = "INFO"

    model_config = {"env_prefix": "FIXIT_"}

    @property
    def base_url(self) -> str:
        """Backend origin joined with the fixed API prefix."""
        return self.backend_origin.rstrip("/") + "/" + self.api_prefix.strip("/")
