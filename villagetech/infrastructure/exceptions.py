"""Infrastructure exceptions for external collaborators (identity service, email).

Errors extend VillageTechException so presentation can map them to HTTP
responses consistently when they escape a workflow step.
"""

from villagetech.domain.exceptions import VillageTechException


class IdentityServiceError(VillageTechException):
    """Identity service rejected the request or could not be reached."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        details: dict[str, object] = {"reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            f"Identity service error: {reason}",
            "IDENTITY_SERVICE_ERROR",
            details,
        )


class IdentityConflictError(IdentityServiceError):
    """An account with this email is already registered."""

    def __init__(self, email: str) -> None:
        super().__init__(
            f"A user with email {email} has already been registered", status_code=422
        )
        self.error_code = "IDENTITY_CONFLICT"
        self.details["email"] = email


class EmailDeliveryError(VillageTechException):
    """Email transport failed to accept the message."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        details: dict[str, object] = {"reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            f"Email send failed: {reason}",
            "EMAIL_DELIVERY_ERROR",
            details,
        )


class EmailNotConfiguredError(EmailDeliveryError):
    """No email provider is configured (RESEND_API_KEY unset)."""

    def __init__(self) -> None:
        super().__init__("Email service not configured")
        self.error_code = "EMAIL_NOT_CONFIGURED"
