"""Create a platform superadmin in the local identity store and print a bearer token.

Usage:
    uv run python -m scripts.create_superadmin <email> <first_name> <last_name> [password]
If password is omitted, a random one is printed. SQLite databases get their
tables created first; other backends must be migrated with Alembic.
"""

import asyncio
import sys

from villagetech.application.interfaces.services import UserProfileSpec
from villagetech.application.services.admin_provisioning_service import (
    generate_one_time_password,
)
from villagetech.core.config import get_settings
from villagetech.domain.enums import UserRole
from villagetech.infrastructure.exceptions import IdentityServiceError
from villagetech.infrastructure.external.identity import LocalIdentityService
from villagetech.infrastructure.persistence import database
from villagetech.infrastructure.persistence.repositories import (
    IdentityUserRepository,
    UserProfileRepository,
)
from villagetech.infrastructure.security.jwt import create_access_token


async def main() -> None:
    """Create the superadmin identity and profile (tenant_id is NULL)."""
    if len(sys.argv) < 4:
        print(
            "Usage: uv run python -m scripts.create_superadmin "
            "<email> <first_name> <last_name> [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    email, first_name, last_name = sys.argv[1], sys.argv[2], sys.argv[3]
    password = sys.argv[4] if len(sys.argv) > 4 else generate_one_time_password()

    settings = get_settings()
    if settings.database_url.startswith("sqlite"):
        await database.init_models()
    session_factory = database.get_session_factory()

    identity_service = LocalIdentityService(IdentityUserRepository(session_factory))
    try:
        user = await identity_service.create_user(
            email,
            password,
            email_confirmed=True,
            metadata={"role": UserRole.SUPERADMIN.value},
        )
        await UserProfileRepository(session_factory).create_profile(
            UserProfileSpec(
                user_id=user.id,
                role=UserRole.SUPERADMIN,
                first_name=first_name,
                last_name=last_name,
            )
        )
    except IdentityServiceError as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)
    finally:
        await database.dispose_engine()

    print(f"Created superadmin: {user.id} ({user.email})")
    if len(sys.argv) <= 4:
        print(f"Password: {password}")
    print(f"Bearer token: {create_access_token(user.id)}")


if __name__ == "__main__":
    asyncio.run(main())
