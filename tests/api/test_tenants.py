"""Tests for tenant provisioning endpoints (SQLite database, recording email transport)."""

import re
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from villagetech.api.v1.dependencies import get_identity_service
from villagetech.infrastructure.exceptions import IdentityServiceError
from villagetech.infrastructure.persistence.repositories import (
    GateRepository,
    IdentityUserRepository,
    PropertyRepository,
    TenantRepository,
    UserProfileRepository,
)
from villagetech.infrastructure.security.password import verify_password

_PASSWORD_LINE = re.compile(r"^Temporary Password: (\S+)$", re.MULTILINE)


def _sunset_ridge(**overrides) -> dict:
    body = {
        "name": "Sunset Ridge",
        "subdomain": "sunset-ridge",
        "community_type": "HOA",
        "max_residences": 100,
        "admin_email": "Jane@SunsetRidge.com",
        "admin_first_name": "Jane",
        "admin_last_name": "Reyes",
        "admin_phone": "+63 917 555 0101",
        "properties": [
            {"address": "1 Ridge Way", "property_type": "single_family", "block": "1", "lot": "1"},
            {"address": "2 Ridge Way", "property_type": "townhouse", "block": "1", "lot": "2"},
            {"address": "3 Ridge Way", "property_type": "lot_only", "block": "1", "lot": "3"},
        ],
        "gates": [
            {
                "name": "Main Gate",
                "gate_type": "primary",
                "operating_hours_start": "05:00",
                "operating_hours_end": "23:00",
            },
            {"name": "Service Gate", "gate_type": "service"},
        ],
    }
    body.update(overrides)
    return body


async def test_provision_tenant_end_to_end(
    client: AsyncClient, superadmin_headers, session_factory, email_transport
) -> None:
    """Full success: tenant, 3 properties, 2 gates, admin head and one activation email."""
    response = await client.post(
        "/api/v1/tenants", json=_sunset_ridge(), headers=superadmin_headers
    )
    assert response.status_code == 201, response.text
    data = response.json()
    assert data["success"] is True
    assert data["subdomain"] == "sunset-ridge"
    assert data["properties_created"] == 3
    assert data["gates_created"] == 2
    assert data["notification_sent"] is True
    assert data["warnings"] == []
    assert data["admin_user_id"]

    tenant = await TenantRepository(session_factory).get_by_subdomain("sunset-ridge")
    assert tenant is not None
    assert tenant.id == data["tenant_id"]
    assert tenant.legal_name == "Sunset Ridge"
    assert tenant.timezone == "UTC"
    assert tenant.language == "en"
    assert tenant.total_residences == 3
    assert await PropertyRepository(session_factory).count_by_tenant(tenant.id) == 3
    assert await GateRepository(session_factory).count_by_tenant(tenant.id) == 2

    assert len(email_transport.sent) == 1
    message = email_transport.sent[0]
    assert message.to == ("jane@sunsetridge.com",)
    assert message.subject == "Welcome to Sunset Ridge - Your Admin Portal Access"
    match = _PASSWORD_LINE.search(message.text_body or "")
    assert match is not None
    password = match.group(1)
    assert message.text_body.count(password) == 1
    assert message.html_body.count(password) == 1
    assert "https://sunset-ridge.admin.villagetech.app" in message.html_body

    # The password reaches the admin only by email.
    assert password not in response.text
    identity = await IdentityUserRepository(session_factory).get_by_email("jane@sunsetridge.com")
    assert identity is not None
    assert identity.id == data["admin_user_id"]
    assert identity.email_confirmed_at is not None
    assert verify_password(password, identity.hashed_password)


async def test_provision_tenant_without_resources(
    client: AsyncClient, superadmin_headers, session_factory
) -> None:
    """Empty property and gate lists are a full success with zero counts."""
    response = await client.post(
        "/api/v1/tenants",
        json=_sunset_ridge(subdomain="empty-village", properties=[], gates=[]),
        headers=superadmin_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["properties_created"] == 0
    assert data["gates_created"] == 0
    assert await PropertyRepository(session_factory).count_by_tenant(data["tenant_id"]) == 0


async def test_provision_tenant_email_failure_is_degraded_success(
    client: AsyncClient, superadmin_headers, email_transport
) -> None:
    """Email delivery failure still returns 201 with notification_sent false."""
    email_transport.fail = True
    response = await client.post(
        "/api/v1/tenants", json=_sunset_ridge(), headers=superadmin_headers
    )
    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["notification_sent"] is False
    assert any(w.startswith("notify_admin") for w in data["warnings"])


async def test_provision_tenant_unexpected_transport_error_is_degraded_success(
    client: AsyncClient, superadmin_headers, session_factory, email_transport
) -> None:
    """A transport bug after the admin exists must not turn into a retryable 500."""
    email_transport.send = AsyncMock(
        side_effect=AttributeError("'list' object has no attribute 'get'")
    )
    response = await client.post(
        "/api/v1/tenants", json=_sunset_ridge(), headers=superadmin_headers
    )
    assert response.status_code == 201, response.text
    data = response.json()
    assert data["notification_sent"] is False
    assert any(w.startswith("notify_admin") for w in data["warnings"])
    profiles = UserProfileRepository(session_factory)
    assert await profiles.get_admin_head_id(data["tenant_id"]) == data["admin_user_id"]


async def test_provision_tenant_without_token_returns_401(client: AsyncClient) -> None:
    response = await client.post("/api/v1/tenants", json=_sunset_ridge())
    assert response.status_code == 401
    assert response.json()["error_code"] == "AUTHENTICATION_ERROR"


async def test_provision_tenant_with_invalid_token_returns_401(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/tenants",
        json=_sunset_ridge(),
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == 401


async def test_provision_tenant_non_superadmin_returns_403(
    client: AsyncClient, officer_headers, session_factory, email_transport
) -> None:
    """Non-superadmin callers are rejected before anything is written."""
    response = await client.post(
        "/api/v1/tenants", json=_sunset_ridge(), headers=officer_headers
    )
    assert response.status_code == 403
    data = response.json()
    assert data["success"] is False
    assert data["error"] == "Forbidden: superadmin access required"
    assert await TenantRepository(session_factory).get_by_subdomain("sunset-ridge") is None
    assert email_transport.sent == []


@pytest.mark.parametrize(
    "subdomain",
    ["ab", "admin", "-sunset", "sunset--ridge", "sunset_ridge", "x" * 64],
)
async def test_provision_tenant_invalid_subdomain_returns_400(
    client: AsyncClient, superadmin_headers, session_factory, subdomain: str
) -> None:
    response = await client.post(
        "/api/v1/tenants", json=_sunset_ridge(subdomain=subdomain), headers=superadmin_headers
    )
    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


async def test_provision_tenant_missing_field_returns_400(
    client: AsyncClient, superadmin_headers
) -> None:
    body = _sunset_ridge()
    del body["admin_email"]
    response = await client.post("/api/v1/tenants", json=body, headers=superadmin_headers)
    assert response.status_code == 400
    data = response.json()
    assert data["error_code"] == "VALIDATION_ERROR"
    assert "admin_email" in data["error"]


async def test_provision_tenant_bad_community_type_returns_400(
    client: AsyncClient, superadmin_headers
) -> None:
    response = await client.post(
        "/api/v1/tenants",
        json=_sunset_ridge(community_type="Castle"),
        headers=superadmin_headers,
    )
    assert response.status_code == 400


async def test_provision_tenant_taken_subdomain_returns_400(
    client: AsyncClient, superadmin_headers, email_transport
) -> None:
    first = await client.post(
        "/api/v1/tenants", json=_sunset_ridge(), headers=superadmin_headers
    )
    assert first.status_code == 201
    second = await client.post(
        "/api/v1/tenants",
        json=_sunset_ridge(subdomain="Sunset-Ridge", admin_email="other@sunsetridge.com"),
        headers=superadmin_headers,
    )
    assert second.status_code == 400
    data = second.json()
    assert data["error_code"] == "SUBDOMAIN_TAKEN"
    assert data["error"] == "Subdomain 'sunset-ridge' is already taken"
    assert len(email_transport.sent) == 1


async def test_subdomain_availability(client: AsyncClient, superadmin_headers) -> None:
    response = await client.get(
        "/api/v1/tenants/subdomain-availability",
        params={"subdomain": "Sunset-Ridge"},
        headers=superadmin_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"subdomain": "sunset-ridge", "available": True, "error": None}

    await client.post("/api/v1/tenants", json=_sunset_ridge(), headers=superadmin_headers)
    response = await client.get(
        "/api/v1/tenants/subdomain-availability",
        params={"subdomain": "sunset-ridge"},
        headers=superadmin_headers,
    )
    assert response.json()["available"] is False
    assert response.json()["error"] == "Subdomain 'sunset-ridge' is already taken"


async def test_subdomain_availability_reserved(client: AsyncClient, superadmin_headers) -> None:
    response = await client.get(
        "/api/v1/tenants/subdomain-availability",
        params={"subdomain": "WWW"},
        headers=superadmin_headers,
    )
    data = response.json()
    assert data["available"] is False
    assert data["error"] == "Subdomain 'www' is reserved and cannot be used"


async def test_subdomain_availability_requires_superadmin(
    client: AsyncClient, officer_headers
) -> None:
    response = await client.get(
        "/api/v1/tenants/subdomain-availability",
        params={"subdomain": "sunset-ridge"},
        headers=officer_headers,
    )
    assert response.status_code == 403


async def test_orphaned_tenant_and_admin_head_remediation(
    app, client: AsyncClient, superadmin_headers, session_factory, email_transport
) -> None:
    """Identity failure leaves the tenant without an admin; the admin-head route repairs it."""
    failing_identity = AsyncMock()
    failing_identity.create_user.side_effect = IdentityServiceError("upstream timeout")
    app.dependency_overrides[get_identity_service] = lambda: failing_identity

    response = await client.post(
        "/api/v1/tenants", json=_sunset_ridge(), headers=superadmin_headers
    )
    assert response.status_code == 500
    data = response.json()
    assert data["error_code"] == "TENANT_ORPHANED"
    assert "tenant" in data["error"].lower()
    assert "admin" in data["error"].lower()
    assert data["subdomain"] == "sunset-ridge"
    assert data["properties_created"] == 3
    assert data["gates_created"] == 2
    tenant_id = data["tenant_id"]
    assert await TenantRepository(session_factory).get_by_id(tenant_id) is not None
    assert email_transport.sent == []

    # Resubmitting the whole request now fails on the taken subdomain.
    retry = await client.post(
        "/api/v1/tenants", json=_sunset_ridge(), headers=superadmin_headers
    )
    assert retry.json()["error_code"] == "SUBDOMAIN_TAKEN"

    del app.dependency_overrides[get_identity_service]
    admin_body = {
        "admin_email": "jane@sunsetridge.com",
        "admin_first_name": "Jane",
        "admin_last_name": "Reyes",
    }
    repaired = await client.post(
        f"/api/v1/tenants/{tenant_id}/admin-head", json=admin_body, headers=superadmin_headers
    )
    assert repaired.status_code == 201, repaired.text
    repaired_data = repaired.json()
    assert repaired_data["tenant_id"] == tenant_id
    assert repaired_data["subdomain"] == "sunset-ridge"
    assert repaired_data["notification_sent"] is True
    assert len(email_transport.sent) == 1

    again = await client.post(
        f"/api/v1/tenants/{tenant_id}/admin-head",
        json={**admin_body, "admin_email": "second@sunsetridge.com"},
        headers=superadmin_headers,
    )
    assert again.status_code == 409
    assert again.json()["error_code"] == "ADMIN_ALREADY_EXISTS"


async def test_admin_head_for_unknown_tenant_returns_404(
    client: AsyncClient, superadmin_headers
) -> None:
    response = await client.post(
        "/api/v1/tenants/does-not-exist/admin-head",
        json={
            "admin_email": "jane@sunsetridge.com",
            "admin_first_name": "Jane",
            "admin_last_name": "Reyes",
        },
        headers=superadmin_headers,
    )
    assert response.status_code == 404
    assert response.json()["error_code"] == "TENANT_NOT_FOUND"


async def test_unexpected_identity_error_orphans_tenant(
    app, client: AsyncClient, superadmin_headers, session_factory, email_transport
) -> None:
    """Any identity failure after the tenant commit reports the orphan, not a bare 500."""
    broken_identity = AsyncMock()
    broken_identity.create_user.side_effect = TypeError("unexpected payload shape")
    app.dependency_overrides[get_identity_service] = lambda: broken_identity

    response = await client.post(
        "/api/v1/tenants", json=_sunset_ridge(), headers=superadmin_headers
    )
    assert response.status_code == 500
    data = response.json()
    assert data["error_code"] == "TENANT_ORPHANED"
    assert "tenant" in data["error"].lower()
    assert "admin" in data["error"].lower()
    assert data["details"]["reason"] == "unexpected payload shape"
    assert await TenantRepository(session_factory).get_by_id(data["tenant_id"]) is not None
    assert email_transport.sent == []
