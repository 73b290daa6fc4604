"""Base repository: per-call unit of work over a session factory.

Provisioning steps must be durable as soon as each returns, so repositories
open a short-lived session per operation and commit it themselves instead of
sharing a request-scoped session.
"""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from villagetech.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the driver reports a unique-constraint failure (not a CHECK/FK error)."""
    orig = getattr(exc, "orig", None)
    if getattr(orig, "sqlstate", None) == "23505" or getattr(orig, "pgcode", None) == "23505":
        return True
    text = str(orig or exc).lower()
    return "unique" in text or "duplicate key" in text


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, count_by_tenant and committed inserts.

    Subclasses map ORM rows to application DTOs; ORM instances never leave
    the repository.
    """

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession], model: type[ModelType]
    ) -> None:
        self.session_factory = session_factory
        self.model = model

    async def _get(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        async with self.session_factory() as session:
            result = await session.execute(select(self.model).where(model.id == entity_id))
            return result.scalar_one_or_none()

    async def _add(self, obj: ModelType) -> ModelType:
        """Insert one record and commit; returns the refreshed instance."""
        async with self.session_factory() as session:
            session.add(obj)
            await session.commit()
            await session.refresh(obj)
            return obj

    async def _add_all(self, objs: Sequence[ModelType]) -> int:
        """Insert a batch in one transaction and commit; returns rows written."""
        if not objs:
            return 0
        async with self.session_factory() as session:
            session.add_all(objs)
            await session.commit()
        return len(objs)

    async def count_by_tenant(self, tenant_id: str) -> int:
        """Return the number of rows scoped to tenant_id."""
        model: Any = self.model
        async with self.session_factory() as session:
            result = await session.execute(
                select(func.count()).select_from(self.model).where(model.tenant_id == tenant_id)
            )
            return int(result.scalar_one())
