"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from villagetech.domain.enums import (
    CommunityType,
    GateStatus,
    GateType,
    PropertyStatus,
    PropertyType,
    ProvisioningStage,
    UserRole,
)
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

__all__ = [
    "AdminAlreadyExistsException",
    "AuthenticationException",
    "AuthorizationException",
    "CommunityType",
    "GateStatus",
    "GateType",
    "IdentityProvisioningException",
    "OrphanedTenantException",
    "PropertyStatus",
    "PropertyType",
    "ProvisioningStage",
    "SubdomainTakenException",
    "TenantNotFoundException",
    "TenantRegistrationException",
    "UserRole",
    "ValidationException",
    "VillageTechException",
]
