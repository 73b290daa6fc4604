"""Email integration: outbound transports and transport factory."""

from villagetech.infrastructure.external.email.factory import build_email_transport
from villagetech.infrastructure.external.email.resend import (
    ResendEmailTransport,
    UnconfiguredEmailTransport,
)

__all__ = [
    "ResendEmailTransport",
    "UnconfiguredEmailTransport",
    "build_email_transport",
]
