"""Tests for chunked property and gate imports."""

from unittest.mock import AsyncMock

from villagetech.application.dtos.tenant import GateSpec, PropertySpec
from villagetech.application.services import GateConfigurationService, PropertyImportService
from villagetech.domain.enums import GateType, PropertyType


def _properties(count: int) -> list[PropertySpec]:
    return [
        PropertySpec(address=f"{n} Ridge Way", property_type=PropertyType.CONDO)
        for n in range(count)
    ]


async def test_empty_import_is_ok_without_writes() -> None:
    repo = AsyncMock()
    outcome = await PropertyImportService(repo).import_properties("tenant-1", [])
    assert outcome.is_ok
    assert outcome.value == 0
    repo.create_properties.assert_not_awaited()


async def test_import_is_chunked() -> None:
    repo = AsyncMock()
    repo.create_properties.side_effect = lambda tenant_id, chunk: len(chunk)
    outcome = await PropertyImportService(repo, batch_size=2).import_properties(
        "tenant-1", _properties(5)
    )
    assert outcome.is_ok
    assert outcome.value == 5
    sizes = [len(call.args[1]) for call in repo.create_properties.await_args_list]
    assert sizes == [2, 2, 1]


async def test_failed_chunk_is_soft_failure_with_landed_count() -> None:
    """Every chunk is attempted; the outcome reports rows that did land."""
    calls = 0

    async def insert(tenant_id, chunk):
        nonlocal calls
        calls += 1
        if calls == 2:
            raise RuntimeError("deadlock detected")
        return len(chunk)

    repo = AsyncMock()
    repo.create_properties.side_effect = insert
    outcome = await PropertyImportService(repo, batch_size=2).import_properties(
        "tenant-1", _properties(5)
    )
    assert not outcome.is_ok
    assert outcome.value == 3
    assert "property import incomplete (3/5 created)" in outcome.reason
    assert "rows 2-3: deadlock detected" in outcome.reason
    assert calls == 3


async def test_unexpected_error_is_soft_failure() -> None:
    """Any error after the tenant exists is reported, never raised."""
    repo = AsyncMock()
    repo.create_properties.side_effect = TypeError("unexpected payload shape")
    outcome = await PropertyImportService(repo).import_properties("tenant-1", _properties(1))
    assert not outcome.is_ok
    assert outcome.value == 0
    assert "rows 0-0: unexpected payload shape" in (outcome.reason or "")


async def test_gate_configuration() -> None:
    repo = AsyncMock()
    repo.create_gates.return_value = 2
    outcome = await GateConfigurationService(repo).configure_gates(
        "tenant-1",
        [
            GateSpec(name="Main Gate", gate_type=GateType.PRIMARY),
            GateSpec(name="Fire Exit", gate_type=GateType.EMERGENCY),
        ],
    )
    assert outcome.is_ok
    assert outcome.value == 2
    repo.create_gates.assert_awaited_once()
