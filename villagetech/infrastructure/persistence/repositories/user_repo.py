"""Identity and profile repositories. Interface methods return application DTOs."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from villagetech.application.interfaces.services import IdentityUser as IdentityUserResult
from villagetech.application.interfaces.services import UserProfileSpec
from villagetech.domain.enums import UserRole
from villagetech.domain.exceptions import AdminAlreadyExistsException
from villagetech.infrastructure.exceptions import IdentityConflictError
from villagetech.infrastructure.persistence.models.user import IdentityUser, UserProfile
from villagetech.infrastructure.persistence.repositories.base import (
    BaseRepository,
    is_unique_violation,
)
from villagetech.shared.utils.datetime import utc_now


def _identity_to_result(u: IdentityUser) -> IdentityUserResult:
    """Map ORM IdentityUser to the identity port's result (no password hash)."""
    return IdentityUserResult(
        id=u.id, email=u.email, email_confirmed=u.email_confirmed_at is not None
    )


class IdentityUserRepository(BaseRepository[IdentityUser]):
    """Local identity store: accounts with bcrypt hashes, unique by email."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory, IdentityUser)

    async def get_by_email(self, email: str) -> IdentityUser | None:
        """Return the account for email (case-insensitive), or None."""
        async with self.session_factory() as session:
            result = await session.execute(
                select(IdentityUser).where(func.lower(IdentityUser.email) == email.lower())
            )
            return result.scalar_one_or_none()

    async def create_identity(
        self,
        email: str,
        hashed_password: str,
        *,
        email_confirmed: bool,
        metadata: dict[str, Any] | None = None,
    ) -> IdentityUserResult:
        """Insert the account and commit. Raises IdentityConflictError for a duplicate email."""
        user = IdentityUser(
            email=email.lower(),
            hashed_password=hashed_password,
            email_confirmed_at=utc_now() if email_confirmed else None,
            user_metadata=metadata or {},
        )
        try:
            created = await self._add(user)
        except IntegrityError as e:
            raise IdentityConflictError(email) from e
        return _identity_to_result(created)


class UserProfileRepository(BaseRepository[UserProfile]):
    """Profile rows carrying role and tenant membership for identities."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory, UserProfile)

    async def create_profile(self, profile: UserProfileSpec) -> None:
        """Insert the profile and commit.

        Raises AdminAlreadyExistsException when the tenant already has an admin head.
        """
        try:
            await self._add(
                UserProfile(
                    id=profile.user_id,
                    tenant_id=profile.tenant_id,
                    role=profile.role.value,
                    first_name=profile.first_name,
                    last_name=profile.last_name,
                    phone_number=profile.phone_number,
                    position=profile.position,
                )
            )
        except IntegrityError as e:
            if profile.role is UserRole.ADMIN_HEAD and profile.tenant_id and is_unique_violation(e):
                existing = await self.get_admin_head_id(profile.tenant_id)
                if existing is not None and existing != profile.user_id:
                    raise AdminAlreadyExistsException(profile.tenant_id, existing) from e
            raise

    async def get_role(self, user_id: str) -> UserRole | None:
        profile = await self._get(user_id)
        return UserRole(profile.role) if profile else None

    async def get_admin_head_id(self, tenant_id: str) -> str | None:
        async with self.session_factory() as session:
            result = await session.execute(
                select(UserProfile.id)
                .where(
                    UserProfile.tenant_id == tenant_id,
                    UserProfile.role == UserRole.ADMIN_HEAD.value,
                )
                .limit(1)
            )
            return result.scalar_one_or_none()
