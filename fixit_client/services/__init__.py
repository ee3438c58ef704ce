"""Domain service modules, one per backend resource."""

from fixit_client.services.admin import AdminService
from fixit_client.services.audit_logs import AuditLogService
from fixit_client.services.auth import AuthService
from fixit_client.services.base import BaseService
from fixit_client.services.comments import CommentService
from fixit_client.services.dashboard import DashboardService
from fixit_client.services.documents import DocumentService
from fixit_client.services.invites import InviteService
from fixit_client.services.leases import LeaseService
from fixit_client.services.media import MediaService
from fixit_client.services.messages import MessageService
from fixit_client.services.notifications import NotificationService
from fixit_client.services.onboarding import OnboardingService
from fixit_client.services.properties import PropertyService
from fixit_client.services.public import PublicService
from fixit_client.services.rents import RentService
from fixit_client.services.reports import ReportService
from fixit_client.services.requests import RequestService
from fixit_client.services.scheduled_maintenance import ScheduledMaintenanceService
from fixit_client.services.units import UnitService
from fixit_client.services.users import UserService
from fixit_client.services.vendors import VendorService

__all__ = [
    "AdminService",
    "AuditLogService",
    "AuthService",
    "BaseService",
    "CommentService",
    "DashboardService",
    "DocumentService",
    "InviteService",
    "LeaseService",
    "MediaService",
    "MessageService",
    "NotificationService",
    "OnboardingService",
    "PropertyService",
    "PublicService",
    "RentService",
    "ReportService",
    "RequestService",
    "ScheduledMaintenanceService",
    "UnitService",
    "UserService",
    "VendorService",
]
