"""Pytest configuration and fixtures for the VillageTech platform API.

Environment is set before villagetech.main is imported because the app is
created at import time. Each test gets its own SQLite database file; the
app's session factory and email transport are overridden per test.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["IDENTITY_BACKEND"] = "local"
os.environ.pop("RESEND_API_KEY", None)

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402

from villagetech.api.v1.dependencies import (  # noqa: E402
    get_email_transport,
    get_session_factory,
)
from villagetech.application.dtos.notification import EmailMessage  # noqa: E402
from villagetech.application.interfaces.services import UserProfileSpec  # noqa: E402
from villagetech.domain.enums import UserRole  # noqa: E402
from villagetech.infrastructure.exceptions import EmailDeliveryError  # noqa: E402
from villagetech.infrastructure.persistence.database import (  # noqa: E402
    build_engine,
    build_session_factory,
    init_models,
)
from villagetech.infrastructure.persistence.repositories import (  # noqa: E402
    IdentityUserRepository,
    UserProfileRepository,
)
from villagetech.infrastructure.security.jwt import create_access_token  # noqa: E402
from villagetech.main import app as fastapi_app  # noqa: E402


class RecordingEmailTransport:
    """IEmailTransport that keeps sent messages in memory (or fails on demand)."""

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []
        self.fail = False

    async def send(self, message: EmailMessage) -> str | None:
        if self.fail:
            raise EmailDeliveryError("mailbox unavailable", status_code=503)
        self.sent.append(message)
        return f"msg-{len(self.sent)}"


async def _create_platform_user(
    session_factory: async_sessionmaker[AsyncSession], email: str, role: UserRole
) -> str:
    """Insert an identity and profile directly (no password hashing needed for bearer auth)."""
    identity = await IdentityUserRepository(session_factory).create_identity(
        email, "unused-hash", email_confirmed=True
    )
    await UserProfileRepository(session_factory).create_profile(
        UserProfileSpec(
            user_id=identity.id, role=role, first_name="Platform", last_name="User"
        )
    )
    return identity.id


@pytest.fixture
async def session_factory(tmp_path) -> async_sessionmaker[AsyncSession]:
    """Session factory over a fresh SQLite file with all tables created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'villagetech-test.db'}")
    await init_models(bind=engine)
    yield build_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def email_transport() -> RecordingEmailTransport:
    return RecordingEmailTransport()


@pytest.fixture
async def superadmin_headers(session_factory) -> dict[str, str]:
    """Bearer headers for a platform superadmin."""
    user_id = await _create_platform_user(
        session_factory, "root@villagetech.com", UserRole.SUPERADMIN
    )
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
async def officer_headers(session_factory) -> dict[str, str]:
    """Bearer headers for an authenticated caller who is not a superadmin."""
    user_id = await _create_platform_user(
        session_factory, "officer@villagetech.com", UserRole.ADMIN_OFFICER
    )
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def app(session_factory, email_transport):
    """The FastAPI app wired to the per-test database and recording transport."""
    fastapi_app.dependency_overrides[get_session_factory] = lambda: session_factory
    fastapi_app.dependency_overrides[get_email_transport] = lambda: email_transport
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
