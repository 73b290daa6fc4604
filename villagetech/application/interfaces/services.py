"""Service interfaces (ports) for the application layer.

Protocols define contracts for external collaborators (DIP): the identity
service that owns administrator accounts, the outbound email transport, and
the activation email renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from villagetech.domain.enums import UserRole

if TYPE_CHECKING:
    from villagetech.application.dtos.notification import (
        ActivationEmailContext,
        EmailMessage,
        RenderedEmail,
    )


@dataclass(frozen=True)
class IdentityUser:
    """Account returned by the identity service after creation."""

    id: str
    email: str
    email_confirmed: bool


@dataclass(frozen=True)
class UserProfileSpec:
    """Profile row for an identity (tenant_id is None for platform superadmins)."""

    user_id: str
    role: UserRole
    first_name: str
    last_name: str
    tenant_id: str | None = None
    phone_number: str | None = None
    position: str | None = None


# Identity service interface
class IIdentityService(Protocol):
    """Protocol for the external identity/authentication service."""

    async def create_user(
        self,
        email: str,
        password: str,
        *,
        email_confirmed: bool,
        metadata: dict[str, Any],
    ) -> IdentityUser:
        """Create an account. Raises IdentityConflictError for duplicate email,
        IdentityServiceError for any other failure."""


# Email transport interface
class IEmailTransport(Protocol):
    """Protocol for the outbound email transport."""

    async def send(self, message: EmailMessage) -> str | None:
        """Send the message; return the provider message id when known.

        Raises EmailDeliveryError when the provider rejects or cannot be reached.
        """


# Activation email renderer interface
class IActivationEmailRenderer(Protocol):
    """Protocol for rendering the admin activation email."""

    def render(self, context: ActivationEmailContext) -> RenderedEmail:
        """Render subject, HTML and plain-text bodies."""
