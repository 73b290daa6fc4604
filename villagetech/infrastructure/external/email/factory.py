"""Email transport factory: Resend when an API key is configured, otherwise unconfigured."""

import httpx

from villagetech.application.interfaces.services import IEmailTransport
from villagetech.core.config import Settings
from villagetech.infrastructure.external.email.resend import (
    ResendEmailTransport,
    UnconfiguredEmailTransport,
)


def build_email_transport(
    settings: Settings, *, http_client: httpx.AsyncClient | None = None
) -> IEmailTransport:
    """Return the transport for settings (shared http_client reused when given)."""
    api_key = settings.resend_api_key.get_secret_value() if settings.resend_api_key else ""
    if not api_key:
        return UnconfiguredEmailTransport()
    return ResendEmailTransport(
        api_key,
        api_url=settings.resend_api_url,
        default_from=settings.default_from_email,
        timeout=settings.email_timeout_seconds,
        http_client=http_client,
    )
