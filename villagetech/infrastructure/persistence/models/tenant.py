"""Tenant ORM model. Root entity for multi-tenant hierarchy (no tenant_id)."""

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from villagetech.domain.enums import CommunityType
from villagetech.infrastructure.persistence.database import Base
from villagetech.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


def _in_list(column: str, values: list[str]) -> str:
    return "{} IN ({})".format(
        column, ", ".join("'{}'".format(v.replace("'", "''")) for v in values)
    )


class Tenant(CuidMixin, TimestampMixin, Base):
    """Root tenant (community) entity. Table: tenant.

    subdomain is stored lowercase and is unique; the constraint is the
    authoritative guard against concurrent provisioning of the same subdomain.
    """

    __tablename__ = "tenant"

    name: Mapped[str] = mapped_column(String, nullable=False)
    legal_name: Mapped[str] = mapped_column(String, nullable=False)
    subdomain: Mapped[str] = mapped_column(String(63), unique=True, nullable=False, index=True)
    community_type: Mapped[str] = mapped_column(String, nullable=False)
    year_established: Mapped[int | None] = mapped_column(Integer, nullable=True)
    timezone: Mapped[str] = mapped_column(String, nullable=False, default="UTC")
    language: Mapped[str] = mapped_column(String, nullable=False, default="en")
    total_residences: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_residences: Mapped[int] = mapped_column(Integer, nullable=False)
    max_admin_users: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    max_security_users: Mapped[int] = mapped_column(Integer, nullable=False, default=20)
    storage_quota_gb: Mapped[int] = mapped_column(Integer, nullable=False, default=10)

    __table_args__ = (
        CheckConstraint("subdomain = lower(subdomain)", name="tenant_subdomain_lowercase"),
        CheckConstraint(
            _in_list("community_type", CommunityType.values()),
            name="tenant_community_type_check",
        ),
    )
