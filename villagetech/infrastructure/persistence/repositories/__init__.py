"""Persistence repositories. Re-exports for dependency injection."""

from villagetech.infrastructure.persistence.repositories.base import BaseRepository
from villagetech.infrastructure.persistence.repositories.gate_repo import GateRepository
from villagetech.infrastructure.persistence.repositories.property_repo import (
    PropertyRepository,
)
from villagetech.infrastructure.persistence.repositories.tenant_repo import TenantRepository
from villagetech.infrastructure.persistence.repositories.user_repo import (
    IdentityUserRepository,
    UserProfileRepository,
)

__all__ = [
    "BaseRepository",
    "GateRepository",
    "IdentityUserRepository",
    "PropertyRepository",
    "TenantRepository",
    "UserProfileRepository",
]
