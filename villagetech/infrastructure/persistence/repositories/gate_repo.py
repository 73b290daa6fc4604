"""Gate repository: batched inserts for a tenant's access points."""

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from villagetech.application.dtos.tenant import GateSpec
from villagetech.domain.enums import GateStatus
from villagetech.infrastructure.persistence.models.gate import Gate
from villagetech.infrastructure.persistence.repositories.base import BaseRepository


class GateRepository(BaseRepository[Gate]):
    """Inserts gates in caller-sized batches, one commit per batch. New gates are active."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory, Gate)

    async def create_gates(self, tenant_id: str, specs: Sequence[GateSpec]) -> int:
        rows = [
            Gate(
                tenant_id=tenant_id,
                name=s.name,
                gate_type=s.gate_type.value,
                operating_hours_start=s.operating_hours_start,
                operating_hours_end=s.operating_hours_end,
                gps_lat=s.gps_lat,
                gps_lng=s.gps_lng,
                rfid_reader_serial=s.rfid_reader_serial,
                status=GateStatus.ACTIVE.value,
            )
            for s in specs
        ]
        return await self._add_all(rows)
