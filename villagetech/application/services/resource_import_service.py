"""Bulk import of a new tenant's properties and gates.

Failures here are non-fatal: rows can be added later through ordinary CRUD,
so a failed chunk is logged and reported as a soft failure carrying the
number of rows that did land.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from villagetech.application.dtos.provisioning import StepOutcome
from villagetech.application.dtos.tenant import GateSpec, PropertySpec
from villagetech.application.interfaces.repositories import (
    IGateRepository,
    IPropertyRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 500

S = TypeVar("S")


async def _insert_in_chunks(
    kind: str,
    tenant_id: str,
    specs: Sequence[S],
    insert: Callable[[str, Sequence[S]], Awaitable[int]],
    batch_size: int,
) -> StepOutcome[int]:
    """Insert specs in chunks of batch_size, each committed on its own.

    Every chunk is attempted even after a failure. Returns Ok(count) when all
    chunks landed, else SoftFail(reason, value=rows_landed).
    """
    if not specs:
        return StepOutcome.ok(0)

    landed = 0
    failures: list[str] = []
    for start in range(0, len(specs), batch_size):
        chunk = specs[start : start + batch_size]
        try:
            landed += await insert(tenant_id, chunk)
        except Exception as e:
            logger.exception(
                "%s chunk %d-%d failed for tenant %s",
                kind,
                start,
                start + len(chunk) - 1,
                tenant_id,
            )
            last = start + len(chunk) - 1
            failures.append(f"rows {start}-{last}: {str(e) or e.__class__.__name__}")

    if failures:
        reason = f"{kind} import incomplete ({landed}/{len(specs)} created); " + "; ".join(
            failures
        )
        return StepOutcome.soft_fail(reason, value=landed)
    logger.info("Imported %d %s rows for tenant %s", landed, kind, tenant_id)
    return StepOutcome.ok(landed)


class PropertyImportService:
    """Creates a tenant's initial property inventory (status vacant)."""

    def __init__(
        self, property_repo: IPropertyRepository, batch_size: int = DEFAULT_BATCH_SIZE
    ) -> None:
        self.property_repo = property_repo
        self.batch_size = batch_size

    async def import_properties(
        self, tenant_id: str, specs: Sequence[PropertySpec]
    ) -> StepOutcome[int]:
        return await _insert_in_chunks(
            "property", tenant_id, specs, self.property_repo.create_properties, self.batch_size
        )


class GateConfigurationService:
    """Creates a tenant's access gates (status active)."""

    def __init__(self, gate_repo: IGateRepository, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        self.gate_repo = gate_repo
        self.batch_size = batch_size

    async def configure_gates(self, tenant_id: str, specs: Sequence[GateSpec]) -> StepOutcome[int]:
        return await _insert_in_chunks(
            "gate", tenant_id, specs, self.gate_repo.create_gates, self.batch_size
        )
