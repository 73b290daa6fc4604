"""Gate ORM model (tenant-scoped access point)."""

from sqlalchemy import CheckConstraint, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from villagetech.domain.enums import GateStatus, GateType
from villagetech.infrastructure.persistence.database import Base
from villagetech.infrastructure.persistence.models.mixins import TenantResourceModel
from villagetech.infrastructure.persistence.models.tenant import _in_list


class Gate(TenantResourceModel, Base):
    """Access gate. Table: gate. Operating hours are HH:MM strings; status defaults to active."""

    __tablename__ = "gate"

    name: Mapped[str] = mapped_column(String, nullable=False)
    gate_type: Mapped[str] = mapped_column(String, nullable=False)
    operating_hours_start: Mapped[str | None] = mapped_column(String(5), nullable=True)
    operating_hours_end: Mapped[str | None] = mapped_column(String(5), nullable=True)
    gps_lat: Mapped[float | None] = mapped_column(Float, nullable=True)
    gps_lng: Mapped[float | None] = mapped_column(Float, nullable=True)
    rfid_reader_serial: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=GateStatus.ACTIVE.value
    )

    __table_args__ = (
        CheckConstraint(_in_list("gate_type", GateType.values()), name="gate_type_check"),
        CheckConstraint(_in_list("status", GateStatus.values()), name="gate_status_check"),
    )
