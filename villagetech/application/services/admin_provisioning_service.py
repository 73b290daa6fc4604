"""Admin Head provisioning: one-time password plus identity account and profile."""

from __future__ import annotations

import logging
import secrets
import string
from typing import Any

from villagetech.application.dtos.provisioning import AdminIdentity, StepOutcome
from villagetech.application.dtos.tenant import DEFAULT_ADMIN_POSITION, AdminSpec
from villagetech.application.interfaces.repositories import IUserProfileRepository
from villagetech.application.interfaces.services import IIdentityService, UserProfileSpec
from villagetech.domain.enums import UserRole
from villagetech.domain.exceptions import VillageTechException

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 16
# No '&', '<', '>' or quotes: the password must render verbatim in the HTML email.
PASSWORD_SYMBOLS = "!@#$%^*-_=+"


def generate_one_time_password(length: int = MIN_PASSWORD_LENGTH) -> str:
    """Generate a cryptographically secure password with guaranteed complexity.

    Length is clamped to at least 16. Ensures at least one lowercase, one
    uppercase, one digit, and one symbol; remaining positions are filled from
    the full alphabet, then shuffled.
    """
    length = max(length, MIN_PASSWORD_LENGTH)
    alphabet = string.ascii_letters + string.digits + PASSWORD_SYMBOLS
    rng = secrets.SystemRandom()
    chars = [
        rng.choice(string.ascii_lowercase),
        rng.choice(string.ascii_uppercase),
        rng.choice(string.digits),
        rng.choice(PASSWORD_SYMBOLS),
    ]
    chars.extend(rng.choice(alphabet) for _ in range(length - len(chars)))
    rng.shuffle(chars)
    return "".join(chars)


class AdminProvisioningService:
    """Creates the tenant's Admin Head in the identity service, auto-confirmed."""

    def __init__(
        self,
        identity_service: IIdentityService,
        profile_repo: IUserProfileRepository,
    ) -> None:
        self.identity_service = identity_service
        self.profile_repo = profile_repo

    async def provision_admin(self, tenant_id: str, admin: AdminSpec) -> StepOutcome[AdminIdentity]:
        """Create identity + profile. Ok(AdminIdentity) or HardFail(reason).

        The one-time password lives only in the returned AdminIdentity.
        """
        password = generate_one_time_password()
        position = admin.position or DEFAULT_ADMIN_POSITION
        metadata: dict[str, Any] = {
            "tenant_id": tenant_id,
            "role": UserRole.ADMIN_HEAD.value,
            "first_name": admin.first_name,
            "last_name": admin.last_name,
            "phone_number": admin.phone,
            "position": position,
        }
        try:
            user = await self.identity_service.create_user(
                admin.email, password, email_confirmed=True, metadata=metadata
            )
        except VillageTechException as e:
            logger.error("Admin identity creation failed for tenant %s: %s", tenant_id, e.message)
            return StepOutcome.hard_fail(e.message)
        except Exception as e:
            logger.exception("Admin identity creation failed for tenant %s", tenant_id)
            return StepOutcome.hard_fail(str(e) or e.__class__.__name__)

        try:
            await self.profile_repo.create_profile(
                UserProfileSpec(
                    user_id=user.id,
                    role=UserRole.ADMIN_HEAD,
                    first_name=admin.first_name,
                    last_name=admin.last_name,
                    tenant_id=tenant_id,
                    phone_number=admin.phone,
                    position=position,
                )
            )
        except Exception as e:
            logger.exception(
                "Profile creation failed for admin %s of tenant %s", user.id, tenant_id
            )
            return StepOutcome.hard_fail(f"Admin profile could not be saved: {e!s}")

        logger.info("Provisioned admin head %s for tenant %s", user.id, tenant_id)
        return StepOutcome.ok(
            AdminIdentity(user_id=user.id, email=user.email, one_time_password=password)
        )
