from __future__ import annotations

import pytest
from pydantic import ValidationError

from healthwatch.application.use_cases import (
    ExecuteCheckUseCase,
    GetCheckStatusUseCase,
    GetHealthSummaryUseCase,
    GetMetricsUseCase,
    ListChecksUseCase,
    RegisterCheckUseCase,
    ToggleCheckUseCase,
    UnregisterCheckUseCase,
)
from healthwatch.domain.entities.errors import CheckNotFoundError, DuplicateCheckError
from healthwatch.domain.entities.health import HealthStatus
from tests.conftest import ScriptedChecker, outcome

PAYLOAD = {"id": "job", "name": "Job", "type": "custom", "tags": ["batch"]}


@pytest.fixture()
def orchestrator(make_orchestrator):
    return make_orchestrator(custom=ScriptedChecker([outcome(HealthStatus.HEALTHY)]))


@pytest.mark.asyncio
async def test_register_and_list(orchestrator) -> None:
    config = await RegisterCheckUseCase(orchestrator).execute(dict(PAYLOAD))
    listing = await ListChecksUseCase(orchestrator).execute()

    assert config.id == "job"
    assert listing.total == 1
    assert listing.checks[0].tags == ["batch"]


@pytest.mark.asyncio
async def test_register_duplicate_and_invalid(orchestrator) -> None:
    use_case = RegisterCheckUseCase(orchestrator)
    await use_case.execute(dict(PAYLOAD))

    with pytest.raises(DuplicateCheckError):
        await use_case.execute(dict(PAYLOAD))
    with pytest.raises(ValidationError):
        await use_case.execute({"id": "x", "name": "X", "type": "nope"})


@pytest.mark.asyncio
async def test_execute_status_history_and_metrics(orchestrator) -> None:
    await RegisterCheckUseCase(orchestrator).execute(dict(PAYLOAD))
    status_use_case = GetCheckStatusUseCase(orchestrator)

    assert await status_use_case.execute("job") is None

    executed = await ExecuteCheckUseCase(orchestrator).execute("job")
    latest = await status_use_case.execute("job")
    history = await status_use_case.history("job")
    metrics = await GetMetricsUseCase(orchestrator).execute_one("job")
    all_metrics = await GetMetricsUseCase(orchestrator).execute_all()

    assert executed.status is HealthStatus.HEALTHY
    assert latest == executed
    assert history == [executed]
    assert metrics.total_executions == 1
    assert list(all_metrics) == ["job"]


@pytest.mark.asyncio
async def test_summary_toggle_and_unregister(orchestrator) -> None:
    await RegisterCheckUseCase(orchestrator).execute(dict(PAYLOAD))

    summary = await GetHealthSummaryUseCase(orchestrator).execute()
    toggled = await ToggleCheckUseCase(orchestrator).execute("job", False)
    await UnregisterCheckUseCase(orchestrator).execute("job")

    assert summary.total_checks == 1
    assert summary.status is HealthStatus.HEALTHY
    assert toggled.enabled is False
    with pytest.raises(CheckNotFoundError):
        await GetMetricsUseCase(orchestrator).execute_one("job")


@pytest.mark.asyncio
async def test_overview_reports_counts(orchestrator) -> None:
    await RegisterCheckUseCase(orchestrator).execute(dict(PAYLOAD))

    overview = await GetHealthSummaryUseCase(orchestrator).overview()

    assert overview.status is HealthStatus.HEALTHY
    assert overview.checks.total == 1
    assert overview.checks.healthy == 1
    assert overview.checks.unhealthy == 0
