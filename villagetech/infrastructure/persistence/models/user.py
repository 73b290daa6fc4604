"""Identity ORM models: local identity accounts and tenant-scoped user profiles."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from villagetech.domain.enums import UserRole
from villagetech.infrastructure.persistence.database import Base
from villagetech.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from villagetech.infrastructure.persistence.models.tenant import _in_list


class IdentityUser(CuidMixin, TimestampMixin, Base):
    """Account in the local identity store. Table: identity_user.

    email is stored lowercase and is globally unique. Only the bcrypt hash
    of the password is kept.
    """

    __tablename__ = "identity_user"

    email: Mapped[str] = mapped_column(String, unique=True, nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    email_confirmed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    user_metadata: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)


class UserProfile(TimestampMixin, Base):
    """Profile row for an identity (local or external). Table: user_profile.

    id equals the identity-service account id. tenant_id is NULL for
    platform superadmins.
    """

    __tablename__ = "user_profile"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    tenant_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("tenant.id", ondelete="CASCADE"), nullable=True, index=True
    )
    role: Mapped[str] = mapped_column(String, nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String, nullable=True)
    position: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        CheckConstraint(_in_list("role", UserRole.values()), name="user_profile_role_check"),
        # At most one admin head per tenant
        Index(
            "uq_user_profile_tenant_admin_head",
            "tenant_id",
            unique=True,
            postgresql_where=text("role = 'admin_head'"),
            sqlite_where=text("role = 'admin_head'"),
        ),
    )
