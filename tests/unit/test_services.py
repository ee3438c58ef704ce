"""Unit tests for the domain services against a recording fake backend."""

import json
import logging

import httpx
import pytest

from fixit_client.errors import (
    AuthenticationError,
    ErrorKind,
    MissingFileError,
    NetworkError,
    NotFoundError,
    UploadContractError,
    ValidationError,
)
from fixit_client.normalizer import Page
from fixit_client.payloads import UploadFile

_IMAGE = UploadFile("leak.jpg", b"\xff\xd8\xff", "image/jpeg")
_PDF = UploadFile("lease.pdf", b"%PDF-1.7", "application/pdf")


def _form_field(name: str, value: str) -> bytes:
    return f'Content-Disposition: form-data; name="{name}"\r\n\r\n{value}\r\n'.encode()


def _file_field(name: str, filename: str) -> bytes:
    return f'Content-Disposition: form-data; name="{name}"; filename="{filename}"'.encode()


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------


class TestErrorBoundary:
    @pytest.mark.asyncio
    async def test_http_error_becomes_tagged_api_error(self, client, backend, caplog):
        backend.route("GET", "/properties/p9", json_body={"success": False, "message": "Property not found"}, status=404)

        with caplog.at_level(logging.ERROR, logger="fixit_client.services.base"):
            with pytest.raises(NotFoundError) as exc_info:
                await client.properties.get("p9")

        err = exc_info.value
        assert err.kind is ErrorKind.NOT_FOUND
        assert str(err) == "Property not found"
        assert isinstance(err.__cause__, httpx.HTTPStatusError)

        record = next(r for r in caplog.records if r.levelno == logging.ERROR)
        assert record.service == "properties"
        assert record.operation == "get"
        assert record.error_kind == "not_found"
        assert record.status_code == 404
        await client.aclose()

    @pytest.mark.asyncio
    async def test_transport_failure_becomes_network_error(self, client, backend):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        backend.route("GET", "/vendors", responder=refuse)

        with pytest.raises(NetworkError):
            await client.vendors.list()
        await client.aclose()

    @pytest.mark.asyncio
    async def test_unknown_contract(self, client):
        client.contracts.pop("requests.create")

        with pytest.raises(UploadContractError):
            await client.requests.create({"title": "Leak"}, [_IMAGE])
        await client.aclose()


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class TestAuthService:
    @pytest.mark.asyncio
    async def test_login_persists_sanitized_session(self, client, backend):
        backend.route(
            "POST",
            "/auth/login",
            json_body={
                "token": "T1",
                "user": {"_id": "u1", "role": "Tenant", "email": "t@example.com", "password": "hash"},
            },
        )

        body = await client.auth.login("t@example.com", "secret")

        assert body["token"] == "T1"
        assert backend.last_json() == {"email": "t@example.com", "password": "secret"}
        cred = client.session.get()
        assert cred.raw_token == "T1"
        assert cred.owner_role == "Tenant"
        assert "password" not in cred.profile
        await client.aclose()

    @pytest.mark.asyncio
    async def test_login_with_inline_profile(self, client, backend):
        backend.route("POST", "/auth/login", json_body={"token": "T2", "_id": "u2", "role": "landlord"})

        await client.auth.login("l@example.com", "secret")

        assert client.session.get().profile == {"_id": "u2", "role": "landlord"}
        await client.aclose()

    @pytest.mark.asyncio
    async def test_logout_clears_session_even_when_backend_fails(self, client, backend):
        backend.route("POST", "/auth/logout", json_body={"message": "boom"}, status=500)
        client.session.set("T1", {"role": "tenant"})

        result = await client.auth.logout()

        assert result == {"success": True, "message": "Logged out from client."}
        assert client.session.get().is_authenticated is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_register_lowercases_role(self, client, backend):
        backend.route("POST", "/auth/register", json_body={"success": True})

        await client.auth.register({"email": "a@b.c", "role": "PropertyManager"})

        assert backend.last_json()["role"] == "propertymanager"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_reset_password(self, client, backend):
        backend.route("PUT", "/auth/reset-password/abc", json_body={"success": True})

        await client.auth.reset_password("abc", "n3w")

        assert backend.last_json() == {"newPassword": "n3w"}
        await client.aclose()


# ---------------------------------------------------------------------------
# Requests and uploads
# ---------------------------------------------------------------------------


class TestRequestService:
    @pytest.mark.asyncio
    async def test_create_with_image_is_multipart(self, client, backend):
        """Enum fields are lowercased and the image travels under the route's field name."""
        backend.route("POST", "/requests", json_body={"success": True, "data": {"_id": "r1"}}, status=201)

        created = await client.requests.create({"title": "Leak", "category": "Plumbing"}, [_IMAGE])

        assert created == {"_id": "r1"}
        request = backend.last
        assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert _form_field("title", "Leak") in request.content
        assert _form_field("category", "plumbing") in request.content
        assert _file_field("files", "leak.jpg") in request.content
        await client.aclose()

    @pytest.mark.asyncio
    async def test_create_without_files_is_json(self, client, backend):
        backend.route("POST", "/requests", json_body={"success": True, "data": {"_id": "r1"}})

        await client.requests.create({"title": "Leak", "category": "Plumbing", "priority": "High"})

        assert backend.last.headers["Content-Type"] == "application/json"
        assert backend.last_json() == {"title": "Leak", "category": "plumbing", "priority": "high"}
        await client.aclose()

    @pytest.mark.asyncio
    async def test_upload_media_requires_files(self, client, backend):
        with pytest.raises(MissingFileError):
            await client.requests.upload_media("r1", [])

        assert backend.requests == []
        await client.aclose()

    @pytest.mark.asyncio
    async def test_upload_media_field_name(self, client, backend):
        backend.route("POST", "/requests/r1/media", json_body={"success": True, "data": {"media": []}})

        await client.requests.upload_media("r1", [_IMAGE, _IMAGE])

        assert backend.last.content.count(_file_field("mediaFiles", "leak.jpg")) == 2
        await client.aclose()

    @pytest.mark.asyncio
    async def test_list_lowercases_filters(self, client, backend):
        backend.route("GET", "/requests", json_body={"success": True, "data": [{"_id": "r1"}], "total": 1})

        page = await client.requests.list({"status": "New", "propertyId": "p1"})

        assert isinstance(page, Page)
        assert page.items == [{"_id": "r1"}]
        assert backend.last.url.params["status"] == "new"
        assert backend.last.url.params["propertyId"] == "p1"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_list_keeps_single_entity_body(self, client, backend):
        backend.route("GET", "/properties", json_body={"success": True, "data": {"_id": "p1", "name": "Only property"}})

        result = await client.properties.list()

        assert result == {"_id": "p1", "name": "Only property"}
        await client.aclose()

    @pytest.mark.asyncio
    async def test_delete_media_sends_url(self, client, backend):
        backend.route("DELETE", "/requests/r1/media", json_body={"success": True, "data": {"media": []}})

        await client.requests.delete_media("r1", "https://cdn.example.com/a.jpg")

        assert backend.last_json() == {"mediaUrl": "https://cdn.example.com/a.jpg"}
        await client.aclose()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("action", ["verify", "reopen", "archive"])
    async def test_status_changes(self, client, backend, action):
        backend.route("PUT", f"/requests/r1/{action}", json_body={"success": True, "data": {"_id": "r1"}})

        result = await getattr(client.requests, action)("r1")

        assert result == {"_id": "r1"}
        await client.aclose()


class TestScheduledMaintenanceService:
    @pytest.mark.asyncio
    async def test_list_tasks_envelope(self, client, backend):
        tasks = [{"_id": "t1"}, {"_id": "t2"}, {"_id": "t3"}]
        backend.route(
            "GET",
            "/scheduled-maintenance",
            json_body={"tasks": tasks, "total": 3, "currentPage": 1, "itemsPerPage": 10},
        )

        page = await client.scheduled_maintenance.list()

        assert page.items == tasks
        assert (page.total, page.page, page.page_size) == (3, 1, 10)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_create_with_media_lowercases_nested_frequency(self, client, backend):
        backend.route("POST", "/scheduled-maintenance", json_body={"success": True, "data": {"_id": "t1"}})

        await client.scheduled_maintenance.create(
            {"title": "Gutters", "category": "Roofing", "frequency": {"type": "Monthly"}}, [_IMAGE]
        )

        content = backend.last.content
        assert _form_field("category", "roofing") in content
        assert _form_field("frequency", json.dumps({"type": "monthly"})) in content
        assert _file_field("media", "leak.jpg") in content
        await client.aclose()


# ---------------------------------------------------------------------------
# Leases, rents, documents
# ---------------------------------------------------------------------------


class TestLeaseAndRentServices:
    @pytest.mark.asyncio
    async def test_upload_lease_document(self, client, backend):
        backend.route("POST", "/leases/l1/documents", json_body={"success": True, "data": {"_id": "l1"}})

        await client.leases.upload_document("l1", _PDF)

        assert _file_field("documentFile", "lease.pdf") in backend.last.content
        await client.aclose()

    @pytest.mark.asyncio
    async def test_download_document_to_directory(self, client, backend, tmp_path):
        backend.route("GET", "/leases/l1/documents/d1/download", content=b"%PDF-1.7")

        target = await client.leases.download_document_to("l1", "d1", tmp_path)

        assert target == tmp_path / "lease-l1-document-d1"
        assert target.read_bytes() == b"%PDF-1.7"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_record_payment_without_proof_is_json(self, client, backend):
        backend.route("POST", "/rents/r1/pay", json_body={"success": True, "data": {"status": "paid"}})

        result = await client.rents.record_payment("r1", {"amountPaid": 950, "status": "Paid"})

        assert result == {"status": "paid"}
        assert backend.last_json() == {"amountPaid": 950, "status": "paid"}
        await client.aclose()

    @pytest.mark.asyncio
    async def test_record_payment_with_proof_is_multipart(self, client, backend):
        backend.route("POST", "/rents/r1/pay", json_body={"success": True, "data": {}})

        await client.rents.record_payment("r1", {"amountPaid": 950}, proof=_PDF)

        assert _form_field("amountPaid", "950") in backend.last.content
        assert _file_field("documentFile", "lease.pdf") in backend.last.content
        await client.aclose()

    @pytest.mark.asyncio
    async def test_context_templates_filter(self, client, backend):
        backend.route(
            "GET",
            "/documents/templates",
            json_body={
                "success": True,
                "data": [{"type": "lease_notice"}, {"type": "rent_report"}, {"type": "maintenance_report"}],
            },
        )

        lease = await client.documents.context_templates("lease")
        everything = await client.documents.context_templates("other")

        assert lease == [{"type": "lease_notice"}]
        assert len(everything) == 3
        await client.aclose()


# ---------------------------------------------------------------------------
# Properties, vendors, users
# ---------------------------------------------------------------------------


class TestPropertyService:
    @pytest.mark.asyncio
    async def test_get_unwraps_named_entity(self, client, backend):
        backend.route("GET", "/properties/p1", json_body={"success": True, "data": {"property": {"_id": "p1"}}})

        assert await client.properties.get("p1") == {"_id": "p1"}
        await client.aclose()

    @pytest.mark.asyncio
    async def test_remove_user_sends_roles_as_repeated_params(self, client, backend):
        backend.route("DELETE", "/properties/p1/remove-user/u1", json_body={"success": True})

        await client.properties.remove_user("p1", "u1", ["Tenant", "Landlord"], unit_id="un1")

        params = backend.last.url.params
        assert params.get_list("rolesToRemove") == ["tenant", "landlord"]
        assert params["unitId"] == "un1"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_assign_user(self, client, backend):
        backend.route("POST", "/properties/p1/assign-user", json_body={"success": True})

        await client.properties.assign_user("p1", "u1", ["Tenant"])

        assert backend.last_json() == {"userIdToAssign": "u1", "roles": ["tenant"]}
        await client.aclose()


class TestVendorService:
    @pytest.mark.asyncio
    async def test_create_defaults_services(self, client, backend):
        backend.route("POST", "/vendors", json_body={"success": True, "data": {"_id": "v1"}})

        await client.vendors.create({"name": "Ace Plumbing"})

        assert backend.last_json() == {"name": "Ace Plumbing", "services": []}
        await client.aclose()

    @pytest.mark.asyncio
    async def test_associate_with_property_is_idempotent(self, client, backend):
        backend.route(
            "GET", "/vendors/v1", json_body={"success": True, "data": {"_id": "v1", "associatedProperties": [{"_id": "p1"}]}}
        )
        backend.route("PUT", "/vendors/v1", json_body={"success": True, "data": {"_id": "v1"}})

        await client.vendors.associate_with_property("v1", "p1")
        assert backend.last_json() == {"associatedProperties": ["p1"]}

        await client.vendors.associate_with_property("v1", "p2")
        assert backend.last_json() == {"associatedProperties": ["p1", "p2"]}
        await client.aclose()


class TestUserService:
    @pytest.mark.asyncio
    async def test_update_me_refreshes_stored_profile(self, client, backend):
        backend.route(
            "PUT", "/users/profile", json_body={"success": True, "data": {"role": "tenant", "firstName": "Ann"}}
        )
        client.session.set("T1", {"role": "tenant", "firstName": "Ana"})

        await client.users.update_me({"firstName": "Ann"})

        assert client.session.get().profile["firstName"] == "Ann"
        assert client.session.get().raw_token == "T1"
        await client.aclose()


# ---------------------------------------------------------------------------
# Counters, dashboard, onboarding, public
# ---------------------------------------------------------------------------


class TestCountersAndDashboard:
    @pytest.mark.asyncio
    async def test_notification_unread_count(self, client, backend):
        backend.route(
            "GET",
            "/notifications",
            json_body={"success": True, "data": [{"isRead": False}, {"isRead": True}, {}]},
        )

        assert await client.notifications.unread_count() == 2
        await client.aclose()

    @pytest.mark.asyncio
    async def test_message_unread_count(self, client, backend):
        backend.route("GET", "/messages/unread/count", json_body={"success": True, "data": {"count": 4}})

        assert await client.messages.unread_count() == 4
        await client.aclose()

    @pytest.mark.asyncio
    async def test_dashboard_role_alias_and_cache(self, client, backend):
        backend.route("GET", "/pm/dashboard-data", json_body={"success": True, "data": {"properties": 3}})

        first = await client.dashboard.for_role("PropertyManager")
        second = await client.dashboard.for_role("pm")

        assert first == second == {"properties": 3}
        assert len(backend.requests) == 1

        client.dashboard.invalidate()
        await client.dashboard.for_role("pm")
        assert len(backend.requests) == 2
        await client.aclose()

    @pytest.mark.asyncio
    async def test_dashboard_cache_disabled(self, make_client, backend):
        client = make_client(dashboard_cache_ttl_seconds=0)
        backend.route("GET", "/dashboard/summary", json_body={"success": True, "data": {}})

        await client.dashboard.section("summary", {"days": 7})
        await client.dashboard.section("summary", {"days": 7})

        assert len(backend.requests) == 2
        await client.aclose()

    @pytest.mark.asyncio
    async def test_dashboard_unknown_role(self, client, backend, caplog):
        with caplog.at_level(logging.ERROR, logger="fixit_client.services.base"):
            with pytest.raises(ValidationError) as exc_info:
                await client.dashboard.for_role("vendor")

        assert exc_info.value.kind is ErrorKind.VALIDATION
        assert backend.requests == []
        record = next(r for r in caplog.records if r.levelno == logging.ERROR)
        assert record.service == "dashboard"
        assert record.operation == "for_role"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_dashboard_cache_dropped_on_forced_logout(self, client, backend):
        def dashboard(request: httpx.Request) -> httpx.Response:
            owner = request.headers["Authorization"].removeprefix("Bearer TOKEN-")
            return httpx.Response(200, json={"success": True, "data": {"owner": owner}})

        backend.route("GET", "/landlord/dashboard-data", responder=dashboard)
        backend.route("GET", "/auth/me", json_body={"success": False, "message": "Token expired"}, status=401)
        backend.route("POST", "/auth/login", json_body={"token": "TOKEN-B", "user": {"role": "landlord"}})

        client.session.set("TOKEN-A", {"role": "landlord"})
        assert await client.dashboard.for_role("landlord") == {"owner": "A"}

        with pytest.raises(AuthenticationError):
            await client.auth.me()
        await client.auth.login("b@example.com", "secret")

        assert await client.dashboard.for_role("landlord") == {"owner": "B"}
        await client.aclose()

    @pytest.mark.asyncio
    async def test_dashboard_cache_dropped_on_logout(self, client, backend):
        backend.route("GET", "/tenant/dashboard-data", json_body={"success": True, "data": {"rent": 1}})
        backend.route("POST", "/auth/logout", json_body={"success": True})
        client.session.set("T1", {"role": "tenant"})

        await client.dashboard.for_role("tenant")
        await client.auth.logout()
        client.session.set("T2", {"role": "tenant"})
        await client.dashboard.for_role("tenant")

        dashboard_calls = [r for r in backend.requests if r.url.path.endswith("/dashboard-data")]
        assert [r.headers["Authorization"] for r in dashboard_calls] == ["Bearer T1", "Bearer T2"]
        await client.aclose()


class TestOnboardingService:
    @pytest.mark.asyncio
    async def test_create_requires_document(self, client):
        with pytest.raises(MissingFileError):
            await client.onboarding.create({"title": "Welcome"}, None)
        await client.aclose()

    @pytest.mark.asyncio
    async def test_create_uses_bracket_lists(self, client, backend):
        backend.route("POST", "/onboarding", json_body={"success": True, "data": {"_id": "o1"}})

        await client.onboarding.create({"title": "Welcome", "category": "Guide", "tags": ["a", "b"]}, _PDF)

        content = backend.last.content
        assert _form_field("tags[]", "a") in content
        assert _form_field("tags[]", "b") in content
        assert _form_field("category", "guide") in content
        await client.aclose()

    @pytest.mark.asyncio
    async def test_download_follows_download_url(self, client, backend):
        backend.route(
            "GET",
            "/onboarding/o1/download",
            json_body={"success": True, "data": {"downloadUrl": "https://files.example.com/o1", "fileName": "guide.pdf"}},
        )
        backend.route("GET", "/o1", content=b"%PDF")

        payload = await client.onboarding.download("o1")

        assert payload.content == b"%PDF"
        assert payload.filename == "guide.pdf"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_download_without_link(self, client, backend):
        backend.route("GET", "/onboarding/o1/download", json_body={"success": True, "data": {}})

        with pytest.raises(ValidationError):
            await client.onboarding.download("o1")
        await client.aclose()


class TestPublicService:
    @pytest.mark.asyncio
    async def test_state_changing_call_sends_csrf_token(self, client, backend):
        backend.route("GET", "/public/csrf-token", json_body={"csrfToken": "csrf-1"})
        backend.route("POST", "/public/requests/pub1/comments", json_body={"success": True, "data": {"_id": "c1"}})

        result = await client.public.request_comment("pub1", {"message": "Fixed?"})

        assert result == {"_id": "c1"}
        assert backend.last.headers["X-CSRF-Token"] == "csrf-1"
        await client.aclose()

    @pytest.mark.asyncio
    async def test_request_update_with_media(self, client, backend):
        backend.route("GET", "/public/csrf-token", json_body={"success": True, "data": {"csrfToken": "csrf-2"}})
        backend.route("POST", "/public/requests/pub1/update", json_body={"success": True, "data": {}})

        await client.public.request_update("pub1", {"status": "Completed"}, [_IMAGE])

        assert _form_field("status", "completed") in backend.last.content
        assert _file_field("mediaFiles", "leak.jpg") in backend.last.content
        await client.aclose()


# ---------------------------------------------------------------------------
# Admin and audit logs
# ---------------------------------------------------------------------------


class TestAdminAndAudit:
    @pytest.mark.asyncio
    async def test_admin_action_url(self, client, backend):
        backend.route("PUT", "/admin/users/u1/approve", json_body={"success": True, "data": {"_id": "u1"}})

        assert await client.admin.action("users", "u1", "approve") == {"_id": "u1"}
        await client.aclose()

    @pytest.mark.asyncio
    async def test_admin_unknown_resource(self, client, backend):
        with pytest.raises(ValidationError):
            await client.admin.list("secrets")

        assert backend.requests == []
        await client.aclose()

    @pytest.mark.asyncio
    async def test_audit_action_types(self, client, backend):
        backend.route(
            "GET",
            "/audit-logs",
            json_body={
                "data": [{"action": "UPDATE"}, {"action": "CREATE"}, {"action": "UPDATE"}, {}],
                "pagination": {"total": 4, "page": 1, "limit": 1000, "pages": 1},
            },
        )

        assert await client.audit_logs.action_types() == ["CREATE", "UPDATE"]
        assert backend.last.url.params["limit"] == "1000"
        await client.aclose()
