"""FixItClient: the single entry point wiring settings, session and services.

Construction order: settings -> logging -> session store (memory or JSON
file) -> upload contracts -> transport client -> one object per service.

    async with FixItClient.from_env() as client:
        await client.auth.login("pm@example.com", "secret")
        page = await client.requests.list({"status": "new"})
"""

from __future__ import annotations

import logging
from typing import Mapping

import httpx

from fixit_client.config.settings import ClientSettings
from fixit_client.config.upload_contracts import UploadContract, load_upload_contracts
from fixit_client.logging_config import configure_logging
from fixit_client.services import (
    AdminService,
    AuditLogService,
    AuthService,
    CommentService,
    DashboardService,
    DocumentService,
    InviteService,
    LeaseService,
    MediaService,
    MessageService,
    NotificationService,
    OnboardingService,
    PropertyService,
    PublicService,
    RentService,
    ReportService,
    RequestService,
    ScheduledMaintenanceService,
    UnitService,
    UserService,
    VendorService,
)
from fixit_client.session.storage import JsonFileStorage, MemoryStorage, Storage
from fixit_client.session.store import SessionStore
from fixit_client.transport.client import ApiClient
from fixit_client.transport.interceptors import Navigator

logger = logging.getLogger(__name__)


class FixItClient:
    """Async facade exposing every backend resource as an attribute.

    Parameters
    ----------
    settings:
        Client settings; see ``ClientSettings``.
    storage:
        Session storage backend. Defaults to ``JsonFileStorage`` when
        ``settings.session_file`` is set, otherwise ``MemoryStorage``.
    navigate:
        Called with ``settings.login_path`` after a 401 forces a logout.
    transport:
        Optional httpx transport (tests pass a mock or ASGI transport).
    contracts:
        Upload contract table; loaded from ``settings.upload_contracts_path``
        (or the bundled YAML) when omitted.
    """

    def __init__(
        self,
        settings: ClientSettings,
        storage: Storage | None = None,
        navigate: Navigator | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        contracts: Mapping[str, UploadContract] | None = None,
    ) -> None:
        self.settings = settings

        if storage is None:
            storage = JsonFileStorage(settings.session_file) if settings.session_file else MemoryStorage()
        self.session = SessionStore(storage, static_override_token=settings.admin_override_token)

        if contracts is None:
            contracts = load_upload_contracts(settings.upload_contracts_path)
        self.contracts = contracts

        self.api = ApiClient(settings, self.session, navigate=navigate, transport=transport)

        self.auth = AuthService(self.api, contracts)
        self.properties = PropertyService(self.api, contracts)
        self.units = UnitService(self.api, contracts)
        self.leases = LeaseService(self.api, contracts)
        self.rents = RentService(self.api, contracts)
        self.requests = RequestService(self.api, contracts)
        self.scheduled_maintenance = ScheduledMaintenanceService(self.api, contracts)
        self.vendors = VendorService(self.api, contracts)
        self.users = UserService(self.api, contracts)
        self.invites = InviteService(self.api, contracts)
        self.media = MediaService(self.api, contracts)
        self.messages = MessageService(self.api, contracts)
        self.notifications = NotificationService(self.api, contracts)
        self.comments = CommentService(self.api, contracts)
        self.reports = ReportService(self.api, contracts)
        self.onboarding = OnboardingService(self.api, contracts)
        self.documents = DocumentService(self.api, contracts)
        self.dashboard = DashboardService(
            self.api, contracts, cache_ttl_seconds=settings.dashboard_cache_ttl_seconds
        )
        self.admin = AdminService(self.api, contracts)
        self.audit_logs = AuditLogService(self.api, contracts)
        self.public = PublicService(self.api, contracts)

        logger.debug("FixItClient ready for %s", self.api.base_url)

    @classmethod
    def from_env(cls, **kwargs) -> FixItClient:
        """Build from ``FIXIT_*`` environment variables and configure logging."""
        settings = ClientSettings()  # type: ignore[call-arg]
        configure_logging(settings.log_level)
        return cls(settings, **kwargs)

    async def aclose(self) -> None:
        await self.api.aclose()

    async def __aenter__(self) -> FixItClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
