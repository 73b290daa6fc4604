"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the session factory, caller credential and
the provisioning service. All services are built from infrastructure
implementations here; routes depend only on these dependencies.

Repositories receive the session factory (not a request-scoped session)
because each provisioning step commits its own unit of work.
"""

from __future__ import annotations

from typing import Annotated

import httpx
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from villagetech.application.dtos.provisioning import CallerCredential
from villagetech.application.interfaces.repositories import IUserProfileRepository
from villagetech.application.interfaces.services import IEmailTransport, IIdentityService
from villagetech.application.services import (
    ActivationNotifier,
    AdminProvisioningService,
    GateConfigurationService,
    PropertyImportService,
    SubdomainValidator,
    TenantProvisioningService,
)
from villagetech.core.config import Settings, get_settings
from villagetech.domain.exceptions import AuthenticationException
from villagetech.infrastructure.external.email import build_email_transport
from villagetech.infrastructure.external.identity import build_identity_service
from villagetech.infrastructure.persistence import database
from villagetech.infrastructure.persistence.repositories import (
    GateRepository,
    PropertyRepository,
    TenantRepository,
    UserProfileRepository,
)
from villagetech.infrastructure.security.jwt import verify_token
from villagetech.infrastructure.services.activation_email_renderer import (
    ActivationEmailRenderer,
)

_http_bearer = HTTPBearer(auto_error=False)

SessionFactory = async_sessionmaker[AsyncSession]


def get_session_factory() -> SessionFactory:
    """Process-wide session factory (overridden in tests)."""
    return database.get_session_factory()


def get_http_client(request: Request) -> httpx.AsyncClient | None:
    """Shared outbound HTTP client created in lifespan (None outside the app lifespan)."""
    return getattr(request.app.state, "http_client", None)


def get_profile_repo(
    session_factory: Annotated[SessionFactory, Depends(get_session_factory)],
) -> IUserProfileRepository:
    return UserProfileRepository(session_factory)


def get_identity_service(
    settings: Annotated[Settings, Depends(get_settings)],
    session_factory: Annotated[SessionFactory, Depends(get_session_factory)],
    http_client: Annotated[httpx.AsyncClient | None, Depends(get_http_client)],
) -> IIdentityService:
    """Identity backend selected by IDENTITY_BACKEND (composition root)."""
    return build_identity_service(settings, session_factory, http_client=http_client)


def get_email_transport(
    settings: Annotated[Settings, Depends(get_settings)],
    http_client: Annotated[httpx.AsyncClient | None, Depends(get_http_client)],
) -> IEmailTransport:
    """Resend when RESEND_API_KEY is set, else the unconfigured transport (composition root)."""
    return build_email_transport(settings, http_client=http_client)


async def get_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    profile_repo: Annotated[IUserProfileRepository, Depends(get_profile_repo)],
) -> CallerCredential:
    """Resolve the bearer token to a CallerCredential; 401 if missing or invalid.

    The role comes from the caller's profile row, never from token claims.
    Role enforcement happens in the service so it runs before any write.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Missing bearer token")
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException("Invalid or expired token") from e
    user_id = str(payload["sub"])
    role = await profile_repo.get_role(user_id)
    return CallerCredential(user_id=user_id, role=role)


def get_tenant_provisioning_service(
    settings: Annotated[Settings, Depends(get_settings)],
    session_factory: Annotated[SessionFactory, Depends(get_session_factory)],
    profile_repo: Annotated[IUserProfileRepository, Depends(get_profile_repo)],
    identity_service: Annotated[IIdentityService, Depends(get_identity_service)],
    email_transport: Annotated[IEmailTransport, Depends(get_email_transport)],
) -> TenantProvisioningService:
    """Tenant provisioning orchestrator with all collaborators (composition root)."""
    tenant_repo = TenantRepository(session_factory)
    return TenantProvisioningService(
        tenant_repo=tenant_repo,
        profile_repo=profile_repo,
        validator=SubdomainValidator(tenant_repo),
        property_importer=PropertyImportService(
            PropertyRepository(session_factory), settings.resource_batch_size
        ),
        gate_configurator=GateConfigurationService(
            GateRepository(session_factory), settings.resource_batch_size
        ),
        admin_provisioner=AdminProvisioningService(identity_service, profile_repo),
        notifier=ActivationNotifier(
            ActivationEmailRenderer(), email_transport, settings.portal_url_template
        ),
    )
