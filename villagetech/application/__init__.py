"""Application layer: DTOs, interfaces, services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, identity, email).
"""

from villagetech.application.interfaces import (
    IActivationEmailRenderer,
    IEmailTransport,
    IGateRepository,
    IIdentityService,
    IPropertyRepository,
    ITenantRepository,
    IUserProfileRepository,
)
from villagetech.application.services import TenantProvisioningService

__all__ = [
    "IActivationEmailRenderer",
    "IEmailTransport",
    "IGateRepository",
    "IIdentityService",
    "IPropertyRepository",
    "ITenantRepository",
    "IUserProfileRepository",
    "TenantProvisioningService",
]
