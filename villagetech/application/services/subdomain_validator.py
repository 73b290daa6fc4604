"""Subdomain validation: DNS-label format, reserved words, and advisory uniqueness.

The uniqueness check is a pre-flight read only. Two concurrent requests can
both pass it; the unique constraint on tenant.subdomain decides the winner.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError

from villagetech.application.interfaces.repositories import ITenantRepository

logger = logging.getLogger(__name__)

MIN_SUBDOMAIN_LENGTH = 3
MAX_SUBDOMAIN_LENGTH = 63

SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?$")

RESERVED_SUBDOMAINS: frozenset[str] = frozenset(
    {
        "www",
        "api",
        "admin",
        "app",
        "platform",
        "dashboard",
        "portal",
        "support",
        "help",
        "docs",
        "blog",
        "mail",
        "email",
        "status",
        "staging",
        "test",
        "dev",
        "demo",
        "sandbox",
        "localhost",
    }
)


@dataclass(frozen=True)
class SubdomainCheck:
    """Outcome of a subdomain check.

    subdomain is the normalized (lowercase, trimmed) value when it could be
    computed. taken and store_error distinguish the two uniqueness failures
    from format errors.
    """

    valid: bool
    subdomain: str | None = None
    error: str | None = None
    taken: bool = False
    store_error: bool = False


def validate_format(raw: str | None) -> SubdomainCheck:
    """Normalize and check format. Pure; no I/O."""
    if not raw or not isinstance(raw, str):
        return SubdomainCheck(False, error="Subdomain is required")

    cleaned = raw.lower().strip()
    if len(cleaned) < MIN_SUBDOMAIN_LENGTH:
        return SubdomainCheck(
            False, cleaned, "Subdomain must be at least 3 characters long"
        )
    if len(cleaned) > MAX_SUBDOMAIN_LENGTH:
        return SubdomainCheck(False, cleaned, "Subdomain must be 63 characters or less")
    if not SUBDOMAIN_PATTERN.match(cleaned):
        return SubdomainCheck(
            False,
            cleaned,
            "Subdomain must start and end with a letter or number, "
            "and can only contain letters, numbers, and hyphens",
        )
    if "--" in cleaned:
        return SubdomainCheck(False, cleaned, "Subdomain cannot contain consecutive hyphens")
    if cleaned in RESERVED_SUBDOMAINS:
        return SubdomainCheck(
            False, cleaned, f"Subdomain '{cleaned}' is reserved and cannot be used"
        )
    return SubdomainCheck(True, cleaned)


class SubdomainValidator:
    """Format plus registry lookup. Stateless apart from the repository."""

    def __init__(self, tenant_repo: ITenantRepository) -> None:
        self.tenant_repo = tenant_repo

    @staticmethod
    def validate_format(raw: str | None) -> SubdomainCheck:
        return validate_format(raw)

    async def check_uniqueness(self, normalized: str) -> SubdomainCheck:
        """One read against the tenant registry (case-insensitive)."""
        subdomain = normalized.lower()
        try:
            existing = await self.tenant_repo.get_by_subdomain(subdomain)
        except SQLAlchemyError as e:
            logger.error("Subdomain lookup failed for %s: %s", subdomain, e)
            return SubdomainCheck(
                False, subdomain, f"Database error: {e!s}", store_error=True
            )
        if existing is not None:
            return SubdomainCheck(
                False, subdomain, f"Subdomain '{subdomain}' is already taken", taken=True
            )
        return SubdomainCheck(True, subdomain)

    async def validate(self, raw: str | None) -> SubdomainCheck:
        """validate_format then check_uniqueness, stopping at the first failure."""
        check = validate_format(raw)
        if not check.valid:
            return check
        assert check.subdomain is not None
        return await self.check_uniqueness(check.subdomain)
