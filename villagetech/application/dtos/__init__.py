"""Application DTOs (no ORM dependency)."""

from villagetech.application.dtos.notification import (
    ActivationEmailContext,
    EmailMessage,
    RenderedEmail,
)
from villagetech.application.dtos.provisioning import (
    AdminIdentity,
    AdminReprovisionResult,
    CallerCredential,
    ProvisioningResult,
    StepOutcome,
    StepStatus,
)
from villagetech.application.dtos.tenant import (
    AdminSpec,
    GateSpec,
    PropertySpec,
    TenantProvisioningRequest,
    TenantResult,
    TenantSpec,
)

__all__ = [
    "ActivationEmailContext",
    "EmailMessage",
    "RenderedEmail",
    "AdminIdentity",
    "AdminReprovisionResult",
    "AdminSpec",
    "CallerCredential",
    "GateSpec",
    "PropertySpec",
    "ProvisioningResult",
    "StepOutcome",
    "StepStatus",
    "TenantProvisioningRequest",
    "TenantResult",
    "TenantSpec",
]
