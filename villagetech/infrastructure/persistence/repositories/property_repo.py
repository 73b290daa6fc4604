"""Property repository: batched inserts for a tenant's property inventory."""

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from villagetech.application.dtos.tenant import PropertySpec
from villagetech.domain.enums import PropertyStatus
from villagetech.infrastructure.persistence.models.property import Property
from villagetech.infrastructure.persistence.repositories.base import BaseRepository


class PropertyRepository(BaseRepository[Property]):
    """Inserts properties in caller-sized batches, one commit per batch."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory, Property)

    async def create_properties(self, tenant_id: str, specs: Sequence[PropertySpec]) -> int:
        rows = [
            Property(
                tenant_id=tenant_id,
                address=s.address,
                phase=s.phase,
                block=s.block,
                lot=s.lot,
                unit=s.unit,
                property_type=s.property_type.value,
                property_size_sqm=s.property_size_sqm,
                lot_size_sqm=s.lot_size_sqm,
                bedrooms=s.bedrooms,
                bathrooms=s.bathrooms,
                parking_slots=s.parking_slots,
                status=PropertyStatus.VACANT.value,
            )
            for s in specs
        ]
        return await self._add_all(rows)
