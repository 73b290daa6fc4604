"""Tenant repository (registrar). Returns application DTOs."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from villagetech.application.dtos.tenant import (
    DEFAULT_LANGUAGE,
    DEFAULT_MAX_ADMIN_USERS,
    DEFAULT_MAX_SECURITY_USERS,
    DEFAULT_STORAGE_QUOTA_GB,
    DEFAULT_TIMEZONE,
    TenantResult,
    TenantSpec,
)
from villagetech.domain.enums import CommunityType
from villagetech.domain.exceptions import (
    SubdomainTakenException,
    TenantRegistrationException,
)
from villagetech.infrastructure.persistence.models.tenant import Tenant
from villagetech.infrastructure.persistence.repositories.base import (
    BaseRepository,
    is_unique_violation,
)
from villagetech.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)


def _tenant_to_result(t: Tenant) -> TenantResult:
    """Map ORM Tenant to application TenantResult."""
    return TenantResult(
        id=t.id,
        name=t.name,
        legal_name=t.legal_name,
        subdomain=t.subdomain,
        community_type=CommunityType(t.community_type),
        timezone=t.timezone,
        language=t.language,
        total_residences=t.total_residences,
        max_residences=t.max_residences,
        max_admin_users=t.max_admin_users,
        max_security_users=t.max_security_users,
        storage_quota_gb=t.storage_quota_gb,
        created_at=ensure_utc(t.created_at),
    )


def _default(value: int | None, default: int) -> int:
    """Quota defaults apply only when the value was not supplied; 0 is kept."""
    return default if value is None else value


class TenantRepository(BaseRepository[Tenant]):
    """Tenant registry. Each create commits immediately."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory, Tenant)

    async def get_by_id(self, tenant_id: str) -> TenantResult | None:
        """Get tenant by ID."""
        tenant = await self._get(tenant_id)
        return _tenant_to_result(tenant) if tenant else None

    async def get_by_subdomain(self, subdomain: str) -> TenantResult | None:
        """Get tenant by subdomain (case-insensitive)."""
        async with self.session_factory() as session:
            result = await session.execute(
                select(Tenant).where(func.lower(Tenant.subdomain) == subdomain.lower())
            )
            tenant = result.scalar_one_or_none()
        return _tenant_to_result(tenant) if tenant else None

    async def create_tenant(self, spec: TenantSpec, total_residences: int) -> TenantResult:
        """Create the tenant row with defaults applied and commit it.

        legal_name defaults to name; regional and quota fields fall back to
        platform defaults. Subdomain is stored lowercase.

        Raises SubdomainTakenException on unique constraint violation and
        TenantRegistrationException on any other store error.
        """
        subdomain = spec.subdomain.lower()
        tenant = Tenant(
            name=spec.name,
            legal_name=spec.legal_name or spec.name,
            subdomain=subdomain,
            community_type=spec.community_type.value,
            year_established=spec.year_established,
            timezone=spec.timezone or DEFAULT_TIMEZONE,
            language=spec.language or DEFAULT_LANGUAGE,
            total_residences=total_residences,
            max_residences=spec.max_residences,
            max_admin_users=_default(spec.max_admin_users, DEFAULT_MAX_ADMIN_USERS),
            max_security_users=_default(spec.max_security_users, DEFAULT_MAX_SECURITY_USERS),
            storage_quota_gb=_default(spec.storage_quota_gb, DEFAULT_STORAGE_QUOTA_GB),
        )
        try:
            created = await self._add(tenant)
        except IntegrityError as e:
            if is_unique_violation(e):
                raise SubdomainTakenException(subdomain) from e
            logger.error("Tenant insert rejected for %s: %s", subdomain, e.orig)
            raise TenantRegistrationException(subdomain, str(e.orig)) from e
        except SQLAlchemyError as e:
            logger.error("Tenant insert failed for %s: %s", subdomain, e)
            raise TenantRegistrationException(subdomain, str(e)) from e
        return _tenant_to_result(created)
