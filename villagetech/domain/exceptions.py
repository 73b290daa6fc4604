"""Domain exceptions for the VillageTech platform.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class VillageTechException(Exception):
    """Base exception for all VillageTech application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, tenant_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses (success flag, message, code, details)."""
        return {
            "success": False,
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ValidationException(VillageTechException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class SubdomainTakenException(VillageTechException):
    """Raised when a subdomain is already registered to another tenant.

    Raised by the advisory pre-check and, authoritatively, when the store's
    unique constraint rejects the insert.
    """

    def __init__(self, subdomain: str) -> None:
        super().__init__(
            f"Subdomain '{subdomain}' is already taken",
            "SUBDOMAIN_TAKEN",
            {"field": "subdomain", "subdomain": subdomain},
        )


class AuthenticationException(VillageTechException):
    """Raised when authentication fails (e.g. missing or invalid bearer token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(VillageTechException):
    """Raised when the caller lacks the role required for the operation."""

    def __init__(
        self,
        required_role: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional required role and message.

        Args:
            required_role: Role the caller would need (e.g. 'superadmin').
            message: Human-readable message; replaced when required_role is given.
        """
        details: dict[str, Any] = {}
        if required_role:
            message = f"Forbidden: {required_role} access required"
            details["required_role"] = required_role
        super().__init__(message, "PERMISSION_DENIED", details)


class TenantNotFoundException(VillageTechException):
    """Raised when a requested tenant is not found."""

    def __init__(self, tenant_id: str) -> None:
        """Initialize with the missing tenant identifier.

        Args:
            tenant_id: The tenant ID that was not found.
        """
        super().__init__(
            f"Tenant not found: {tenant_id}",
            "TENANT_NOT_FOUND",
            {"tenant_id": tenant_id},
        )


class AdminAlreadyExistsException(VillageTechException):
    """Raised when re-provisioning an admin head for a tenant that already has one."""

    def __init__(self, tenant_id: str, admin_user_id: str) -> None:
        super().__init__(
            f"Tenant {tenant_id} already has an admin head",
            "ADMIN_ALREADY_EXISTS",
            {"tenant_id": tenant_id, "admin_user_id": admin_user_id},
        )


class TenantRegistrationException(VillageTechException):
    """Raised when the tenant row cannot be written. Nothing has been persisted."""

    def __init__(self, subdomain: str, reason: str) -> None:
        super().__init__(
            "Failed to create tenant",
            "TENANT_REGISTRATION_FAILED",
            {"subdomain": subdomain, "reason": reason},
        )


class IdentityProvisioningException(VillageTechException):
    """Raised when the identity service cannot create an administrator account."""

    def __init__(self, email: str, reason: str) -> None:
        super().__init__(
            "Failed to create admin user",
            "IDENTITY_PROVISIONING_FAILED",
            {"email": email, "reason": reason},
        )


class OrphanedTenantException(VillageTechException):
    """Raised when the tenant was committed but its admin head could not be created.

    The tenant (and any properties/gates) remain in the store without an
    administrator. Do not resubmit the whole request: re-attempt only the
    admin head creation against ``tenant_id``.
    """

    def __init__(
        self,
        tenant_id: str,
        subdomain: str,
        reason: str,
        *,
        properties_created: int = 0,
        gates_created: int = 0,
    ) -> None:
        super().__init__(
            f"Tenant created but admin user creation failed: tenant {tenant_id} "
            f"('{subdomain}') exists without an admin. Re-attempt admin creation "
            "for this tenant instead of resubmitting the request.",
            "TENANT_ORPHANED",
            {
                "tenant_id": tenant_id,
                "subdomain": subdomain,
                "properties_created": properties_created,
                "gates_created": gates_created,
                "reason": reason,
            },
        )
        self.tenant_id = tenant_id
        self.subdomain = subdomain

    def to_dict(self) -> dict[str, Any]:
        """Include tenant_id/subdomain/counts at top level so consoles can offer the remedy."""
        body = super().to_dict()
        body.update(
            tenant_id=self.tenant_id,
            subdomain=self.subdomain,
            properties_created=self.details["properties_created"],
            gates_created=self.details["gates_created"],
        )
        return body
