"""
Dependency container injection module - Main Layer

This module implements the dependency injection container that wires the
checkers, the engine services and the use cases of the application.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

from dependency_injector import containers, providers

from healthwatch.application.dtos.health_dto import check_config_list_adapter
from healthwatch.application.models import ExecutionDefaults
from healthwatch.application.services import (
    ExecutionController,
    HealthCheckOrchestrator,
    MetricsAggregator,
    ResultStore,
)
from healthwatch.application.use_cases.health_check_use_cases import (
    ExecuteCheckUseCase,
    GetCheckStatusUseCase,
    GetHealthSummaryUseCase,
    GetMetricsUseCase,
    ListChecksUseCase,
    RegisterCheckUseCase,
    ToggleCheckUseCase,
    UnregisterCheckUseCase,
)
from healthwatch.domain.entities.health import CheckConfig, CheckType
from healthwatch.infrastructure.checkers import (
    DatabaseChecker,
    HttpChecker,
    SystemChecker,
)
from healthwatch.infrastructure.services import StructlogHealthEventSink
from healthwatch.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Infrastructure
    http_checker = providers.Singleton(HttpChecker)
    database_checker = providers.Singleton(DatabaseChecker)
    system_checker = providers.Singleton(SystemChecker)

    checkers = providers.Dict(
        {
            CheckType.HTTP: http_checker,
            CheckType.DATABASE: database_checker,
            CheckType.SYSTEM: system_checker,
        }
    )

    event_sink = providers.Singleton(StructlogHealthEventSink)

    # Engine
    execution_defaults = providers.Singleton(
        ExecutionDefaults,
        timeout_ms=config.engine.default_timeout_ms,
        retries=config.engine.default_retries,
        retry_delay_ms=config.engine.default_retry_delay_ms,
    )

    execution_controller = providers.Singleton(
        ExecutionController,
        defaults=execution_defaults,
    )

    result_store = providers.Singleton(
        ResultStore,
        capacity=config.engine.history_capacity,
    )

    metrics_aggregator = providers.Singleton(MetricsAggregator)

    orchestrator = providers.Singleton(
        HealthCheckOrchestrator,
        checkers=checkers,
        execution_controller=execution_controller,
        result_store=result_store,
        metrics=metrics_aggregator,
        event_sink=event_sink,
    )

    # Application (use cases)
    get_health_summary_use_case = providers.Factory(
        GetHealthSummaryUseCase, orchestrator=orchestrator
    )
    list_checks_use_case = providers.Factory(
        ListChecksUseCase, orchestrator=orchestrator
    )
    register_check_use_case = providers.Factory(
        RegisterCheckUseCase, orchestrator=orchestrator
    )
    unregister_check_use_case = providers.Factory(
        UnregisterCheckUseCase, orchestrator=orchestrator
    )
    toggle_check_use_case = providers.Factory(
        ToggleCheckUseCase, orchestrator=orchestrator
    )
    execute_check_use_case = providers.Factory(
        ExecuteCheckUseCase, orchestrator=orchestrator
    )
    get_check_status_use_case = providers.Factory(
        GetCheckStatusUseCase, orchestrator=orchestrator
    )
    get_metrics_use_case = providers.Factory(
        GetMetricsUseCase, orchestrator=orchestrator
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


def load_bootstrap_checks(path: Optional[str]) -> List[CheckConfig]:
    """
    Read the check configurations listed in a JSON bootstrap file.

    Raises:
        OSError: If the file cannot be read.
        pydantic.ValidationError: If an entry is not a valid check.
    """
    if not path:
        return []
    raw = Path(path).read_text(encoding="utf-8")
    return [dto.to_domain() for dto in check_config_list_adapter.validate_json(raw)]


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for the health-check engine.

    Registers the bootstrap checks on startup (which starts their timers
    on the running loop) and cancels every timer on exit. Ticks already in
    flight are left to finish.
    """
    container = get_container()
    orchestrator = container.orchestrator()

    try:
        bootstrap_file = container.config.engine.bootstrap_file()
        for config in load_bootstrap_checks(bootstrap_file):
            orchestrator.register(config)
        logger.info(
            "container.bootstrap.loaded",
            path=bootstrap_file,
            checks=len(orchestrator.list_configs()),
        )
        yield container

    finally:
        logger.info("container.orchestrator.shutdown")
        orchestrator.shutdown()
        logger.info("container.resources.shutdown")
