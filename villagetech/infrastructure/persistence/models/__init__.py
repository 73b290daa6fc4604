"""Persistence models: ORM entities and mixins."""

from villagetech.infrastructure.persistence.models.gate import Gate
from villagetech.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TenantResourceModel,
    TenantMixin,
    TimestampMixin,
)
from villagetech.infrastructure.persistence.models.property import Property
from villagetech.infrastructure.persistence.models.tenant import Tenant
from villagetech.infrastructure.persistence.models.user import IdentityUser, UserProfile

__all__ = [
    "CuidMixin",
    "Gate",
    "IdentityUser",
    "TenantResourceModel",
    "Property",
    "Tenant",
    "TenantMixin",
    "TimestampMixin",
    "UserProfile",
]
