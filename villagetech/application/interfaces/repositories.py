"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.

Each write method commits its own unit of work: provisioning spans several
stores and deliberately has no enclosing transaction.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from villagetech.application.dtos.tenant import (
        GateSpec,
        PropertySpec,
        TenantResult,
        TenantSpec,
    )
    from villagetech.application.interfaces.services import UserProfileSpec
    from villagetech.domain.enums import UserRole


# Tenant registry interface
class ITenantRepository(Protocol):
    """Protocol for the tenant registry (root of the tenant hierarchy)."""

    async def get_by_id(self, tenant_id: str) -> TenantResult | None:
        """Return tenant by id, or None."""

    async def get_by_subdomain(self, subdomain: str) -> TenantResult | None:
        """Return tenant whose subdomain matches case-insensitively, or None."""

    async def create_tenant(self, spec: TenantSpec, total_residences: int) -> TenantResult:
        """Insert and commit one tenant row with defaults applied.

        Raises SubdomainTakenException when the unique constraint rejects the
        subdomain; TenantRegistrationException for any other store failure.
        """


# Property repository interface
class IPropertyRepository(Protocol):
    """Protocol for bulk property inserts scoped to a tenant."""

    async def create_properties(self, tenant_id: str, specs: Sequence[PropertySpec]) -> int:
        """Insert and commit one batch; return the number of rows the store created."""

    async def count_by_tenant(self, tenant_id: str) -> int:
        """Return the number of properties belonging to the tenant."""


# Gate repository interface
class IGateRepository(Protocol):
    """Protocol for bulk gate inserts scoped to a tenant."""

    async def create_gates(self, tenant_id: str, specs: Sequence[GateSpec]) -> int:
        """Insert and commit one batch; return the number of rows the store created."""

    async def count_by_tenant(self, tenant_id: str) -> int:
        """Return the number of gates belonging to the tenant."""


# User profile repository interface
class IUserProfileRepository(Protocol):
    """Protocol for tenant-scoped profile rows that carry identity roles."""

    async def create_profile(self, profile: UserProfileSpec) -> None:
        """Insert and commit the profile row for an identity."""

    async def get_role(self, user_id: str) -> UserRole | None:
        """Return the role recorded for the identity, or None when no profile exists."""

    async def get_admin_head_id(self, tenant_id: str) -> str | None:
        """Return the id of the tenant's admin head, or None."""
