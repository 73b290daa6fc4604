"""Local identity service: accounts in the identity_user table with bcrypt hashes."""

from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from villagetech.application.interfaces.services import IdentityUser
from villagetech.infrastructure.exceptions import IdentityConflictError, IdentityServiceError
from villagetech.infrastructure.persistence.repositories.user_repo import IdentityUserRepository
from villagetech.infrastructure.security.password import hash_password_async
from villagetech.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class LocalIdentityService:
    """IIdentityService backed by the application's own database."""

    def __init__(self, identity_repo: IdentityUserRepository) -> None:
        self.identity_repo = identity_repo

    async def create_user(
        self,
        email: str,
        password: str,
        *,
        email_confirmed: bool,
        metadata: dict[str, Any],
    ) -> IdentityUser:
        hashed = await hash_password_async(password)
        try:
            user = await self.identity_repo.create_identity(
                email, hashed, email_confirmed=email_confirmed, metadata=metadata
            )
        except IdentityConflictError:
            logger.warning("Identity already exists for %s", email)
            raise
        except SQLAlchemyError as e:
            logger.error("Local identity insert failed for %s: %s", email, e)
            raise IdentityServiceError(str(e)) from e
        logger.info("Created local identity %s for %s", user.id, email)
        return user
