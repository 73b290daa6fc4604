"""Property ORM model (tenant-scoped residence or lot)."""

from sqlalchemy import CheckConstraint, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from villagetech.domain.enums import PropertyStatus, PropertyType
from villagetech.infrastructure.persistence.database import Base
from villagetech.infrastructure.persistence.models.mixins import TenantResourceModel
from villagetech.infrastructure.persistence.models.tenant import _in_list


class Property(TenantResourceModel, Base):
    """Property within a community. Table: property. Status defaults to vacant."""

    __tablename__ = "property"

    address: Mapped[str] = mapped_column(String, nullable=False)
    phase: Mapped[str | None] = mapped_column(String, nullable=True)
    block: Mapped[str | None] = mapped_column(String, nullable=True)
    lot: Mapped[str | None] = mapped_column(String, nullable=True)
    unit: Mapped[str | None] = mapped_column(String, nullable=True)
    property_type: Mapped[str] = mapped_column(String, nullable=False)
    property_size_sqm: Mapped[float | None] = mapped_column(Float, nullable=True)
    lot_size_sqm: Mapped[float | None] = mapped_column(Float, nullable=True)
    bedrooms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    bathrooms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    parking_slots: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=PropertyStatus.VACANT.value, index=True
    )

    __table_args__ = (
        CheckConstraint(
            _in_list("property_type", PropertyType.values()),
            name="property_type_check",
        ),
        CheckConstraint(
            _in_list("status", PropertyStatus.values()),
            name="property_status_check",
        ),
    )
