"""Pydantic request/response schemas for the API."""

from villagetech.schemas.health import HealthResponse
from villagetech.schemas.tenant import (
    AdminHeadCreateResponse,
    AdminHeadIn,
    GateSpecIn,
    PropertySpecIn,
    SubdomainAvailabilityResponse,
    TenantProvisionRequest,
    TenantProvisionResponse,
)

__all__ = [
    "AdminHeadCreateResponse",
    "AdminHeadIn",
    "GateSpecIn",
    "HealthResponse",
    "PropertySpecIn",
    "SubdomainAvailabilityResponse",
    "TenantProvisionRequest",
    "TenantProvisionResponse",
]
