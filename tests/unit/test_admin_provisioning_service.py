"""Tests for one-time password generation and Admin Head provisioning."""

import string
from unittest.mock import AsyncMock

from villagetech.application.dtos.tenant import AdminSpec
from villagetech.application.interfaces.services import IdentityUser
from villagetech.application.services.admin_provisioning_service import (
    PASSWORD_SYMBOLS,
    AdminProvisioningService,
    generate_one_time_password,
)
from villagetech.domain.enums import UserRole
from villagetech.infrastructure.exceptions import IdentityConflictError

ADMIN = AdminSpec(
    email="jane@sunsetridge.com", first_name="Jane", last_name="Reyes", phone="+63 917 555 0101"
)


def test_one_time_password_complexity() -> None:
    for _ in range(50):
        password = generate_one_time_password()
        assert len(password) >= 16
        assert any(c in string.ascii_lowercase for c in password)
        assert any(c in string.ascii_uppercase for c in password)
        assert any(c in string.digits for c in password)
        assert any(c in PASSWORD_SYMBOLS for c in password)
        assert not set(password) & set("&<>\"'")


def test_one_time_password_length_is_clamped() -> None:
    assert len(generate_one_time_password(8)) == 16
    assert len(generate_one_time_password(24)) == 24


def test_one_time_passwords_are_distinct() -> None:
    assert len({generate_one_time_password() for _ in range(100)}) == 100


async def test_provision_admin_creates_confirmed_identity_and_profile() -> None:
    identity = AsyncMock()
    identity.create_user.return_value = IdentityUser(
        id="admin-1", email=ADMIN.email, email_confirmed=True
    )
    profiles = AsyncMock()

    outcome = await AdminProvisioningService(identity, profiles).provision_admin("tenant-1", ADMIN)

    assert outcome.is_ok
    assert outcome.value.user_id == "admin-1"
    password = outcome.value.one_time_password
    assert len(password) >= 16
    assert password not in repr(outcome.value)

    args = identity.create_user.await_args
    assert args.args == (ADMIN.email, password)
    assert args.kwargs["email_confirmed"] is True
    metadata = args.kwargs["metadata"]
    assert metadata["tenant_id"] == "tenant-1"
    assert metadata["role"] == "admin_head"
    assert metadata["position"] == "Admin Head"
    assert metadata["phone_number"] == "+63 917 555 0101"

    profile = profiles.create_profile.await_args.args[0]
    assert profile.user_id == "admin-1"
    assert profile.tenant_id == "tenant-1"
    assert profile.role is UserRole.ADMIN_HEAD
    assert profile.position == "Admin Head"


async def test_provision_admin_conflict_is_hard_failure() -> None:
    identity = AsyncMock()
    identity.create_user.side_effect = IdentityConflictError(ADMIN.email)
    profiles = AsyncMock()

    outcome = await AdminProvisioningService(identity, profiles).provision_admin("tenant-1", ADMIN)

    assert not outcome.is_ok
    assert "already been registered" in outcome.reason
    profiles.create_profile.assert_not_awaited()


async def test_provision_admin_profile_failure_is_hard_failure() -> None:
    identity = AsyncMock()
    identity.create_user.return_value = IdentityUser(
        id="admin-1", email=ADMIN.email, email_confirmed=True
    )
    profiles = AsyncMock()
    profiles.create_profile.side_effect = RuntimeError("constraint failed")

    outcome = await AdminProvisioningService(identity, profiles).provision_admin("tenant-1", ADMIN)

    assert not outcome.is_ok
    assert outcome.reason == "Admin profile could not be saved: constraint failed"


async def test_provision_admin_unexpected_identity_error_is_hard_failure() -> None:
    identity = AsyncMock()
    identity.create_user.side_effect = TypeError("unexpected payload shape")
    profiles = AsyncMock()

    outcome = await AdminProvisioningService(identity, profiles).provision_admin("tenant-1", ADMIN)

    assert not outcome.is_ok
    assert outcome.reason == "unexpected payload shape"
    profiles.create_profile.assert_not_awaited()
