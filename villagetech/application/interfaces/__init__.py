"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from villagetech.infrastructure or villagetech.api.
"""

from villagetech.application.interfaces.repositories import (
    IGateRepository,
    IPropertyRepository,
    ITenantRepository,
    IUserProfileRepository,
)
from villagetech.application.interfaces.services import (
    IActivationEmailRenderer,
    IdentityUser,
    IEmailTransport,
    IIdentityService,
    UserProfileSpec,
)

__all__ = [
    "IActivationEmailRenderer",
    "IEmailTransport",
    "IGateRepository",
    "IIdentityService",
    "IPropertyRepository",
    "ITenantRepository",
    "IUserProfileRepository",
    "IdentityUser",
    "UserProfileSpec",
]
