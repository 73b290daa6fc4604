"""Tests for domain exceptions (error_code, message, details) and their HTTP status mapping."""

import pytest

from villagetech.core.exception_handlers import status_for
from villagetech.domain.exceptions import (
    AdminAlreadyExistsException,
    AuthenticationException,
    AuthorizationException,
    IdentityProvisioningException,
    OrphanedTenantException,
    SubdomainTakenException,
    TenantNotFoundException,
    TenantRegistrationException,
    ValidationException,
    VillageTechException,
)
from villagetech.infrastructure.exceptions import (
    EmailDeliveryError,
    IdentityConflictError,
    IdentityServiceError,
)


def test_base_exception_default_error_code() -> None:
    """Base VillageTechException uses class name as error_code when not provided."""
    exc = VillageTechException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "VillageTechException"
    assert exc.details == {}


def test_base_exception_to_dict() -> None:
    exc = VillageTechException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "success": False,
        "error": "Oops",
        "error_code": "CUSTOM",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    """ValidationException sets VALIDATION_ERROR and optional field in details."""
    exc = ValidationException("Invalid format", field="subdomain")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "subdomain"}
    assert ValidationException("Invalid").details == {}


def test_subdomain_taken_exception() -> None:
    exc = SubdomainTakenException("sunset-ridge")
    assert exc.message == "Subdomain 'sunset-ridge' is already taken"
    assert exc.error_code == "SUBDOMAIN_TAKEN"
    assert exc.details["subdomain"] == "sunset-ridge"


def test_authentication_exception() -> None:
    exc = AuthenticationException()
    assert exc.message == "Authentication failed"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_authorization_exception_default() -> None:
    exc = AuthorizationException()
    assert exc.message == "Permission denied"
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.details == {}


def test_authorization_exception_with_required_role() -> None:
    exc = AuthorizationException(required_role="superadmin")
    assert exc.message == "Forbidden: superadmin access required"
    assert exc.details == {"required_role": "superadmin"}


def test_tenant_not_found_exception() -> None:
    exc = TenantNotFoundException("t-123")
    assert "t-123" in exc.message
    assert exc.error_code == "TENANT_NOT_FOUND"
    assert exc.details == {"tenant_id": "t-123"}


def test_tenant_registration_exception_keeps_reason_in_details() -> None:
    exc = TenantRegistrationException("sunset-ridge", "connection refused")
    assert exc.message == "Failed to create tenant"
    assert exc.details == {"subdomain": "sunset-ridge", "reason": "connection refused"}


def test_orphaned_tenant_exception_exposes_remedy_fields() -> None:
    exc = OrphanedTenantException(
        "t-1", "sunset-ridge", "timeout", properties_created=3, gates_created=2
    )
    body = exc.to_dict()
    assert body["error_code"] == "TENANT_ORPHANED"
    assert body["tenant_id"] == "t-1"
    assert body["subdomain"] == "sunset-ridge"
    assert body["properties_created"] == 3
    assert body["gates_created"] == 2
    assert "tenant" in body["error"].lower() and "admin" in body["error"].lower()
    assert body["details"]["reason"] == "timeout"


def test_identity_conflict_is_identity_service_error() -> None:
    exc = IdentityConflictError("jane@sunsetridge.com")
    assert isinstance(exc, IdentityServiceError)
    assert exc.error_code == "IDENTITY_CONFLICT"
    assert exc.details["email"] == "jane@sunsetridge.com"


@pytest.mark.parametrize(
    "exc, status",
    [
        (ValidationException("bad"), 400),
        (SubdomainTakenException("sunset-ridge"), 400),
        (AuthenticationException(), 401),
        (AuthorizationException(required_role="superadmin"), 403),
        (TenantNotFoundException("t-1"), 404),
        (AdminAlreadyExistsException("t-1", "u-1"), 409),
        (TenantRegistrationException("sunset-ridge", "boom"), 500),
        (OrphanedTenantException("t-1", "sunset-ridge", "boom"), 500),
        (IdentityProvisioningException("jane@sunsetridge.com", "boom"), 500),
        (EmailDeliveryError("boom"), 500),
        (VillageTechException("unmapped"), 400),
    ],
)
def test_status_mapping(exc: VillageTechException, status: int) -> None:
    assert status_for(exc) == status


def test_exception_is_raiseable() -> None:
    """All exceptions can be raised and caught as VillageTechException."""
    with pytest.raises(VillageTechException) as exc_info:
        raise ValidationException("Bad input", field="x")
    assert exc_info.value.error_code == "VALIDATION_ERROR"
