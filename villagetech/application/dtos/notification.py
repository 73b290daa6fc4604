"""DTOs for outbound email (activation messages)."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ActivationEmailContext:
    """Values rendered into the admin activation email."""

    admin_name: str
    admin_email: str
    tenant_name: str
    subdomain: str
    portal_url: str
    one_time_password: str = field(repr=False)


@dataclass(frozen=True)
class RenderedEmail:
    """Subject plus rich (HTML) and plain-text bodies."""

    subject: str
    html_body: str
    text_body: str = field(repr=False)


@dataclass(frozen=True)
class EmailMessage:
    """One outbound message for an email transport."""

    to: tuple[str, ...]
    subject: str
    html_body: str = field(repr=False)
    text_body: str | None = field(default=None, repr=False)
    from_email: str | None = None
    reply_to: str | None = None
