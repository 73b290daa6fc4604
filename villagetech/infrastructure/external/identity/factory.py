"""Identity service factory: selects the backend named by settings.identity_backend."""

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from villagetech.application.interfaces.services import IIdentityService
from villagetech.core.config import Settings
from villagetech.infrastructure.external.identity.gotrue import GoTrueIdentityService
from villagetech.infrastructure.external.identity.local import LocalIdentityService
from villagetech.infrastructure.persistence.repositories.user_repo import IdentityUserRepository


def build_identity_service(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
    *,
    http_client: httpx.AsyncClient | None = None,
) -> IIdentityService:
    """Return the identity service for settings ("local" or "gotrue")."""
    if settings.identity_backend == "gotrue":
        assert settings.gotrue_url and settings.gotrue_service_role_key
        return GoTrueIdentityService(
            settings.gotrue_url,
            settings.gotrue_service_role_key.get_secret_value(),
            timeout=settings.identity_timeout_seconds,
            http_client=http_client,
        )
    return LocalIdentityService(IdentityUserRepository(session_factory))
