from __future__ import annotations

import re
from datetime import timezone

from healthwatch.domain.entities.health import (
    CheckConfig,
    CheckMetrics,
    CheckType,
    DatabaseCheckConfig,
    DatabaseType,
    HealthStatus,
    HttpCheckConfig,
    SystemCheckConfig,
)


def test_http_config_defaults() -> None:
    config = HttpCheckConfig(id="api", name="API", url="https://example.com")
    assert config.type is CheckType.HTTP
    assert config.expected_status_codes == [200]
    assert config.enabled is True
    assert config.timeout is None
    assert config.retries is None
    assert config.follow_redirects is True


def test_variant_configs_carry_their_type() -> None:
    database = DatabaseCheckConfig(
        id="db",
        name="DB",
        connection_string="postgresql://localhost/app",
        database_type=DatabaseType.POSTGRESQL,
    )
    system = SystemCheckConfig(id="sys", name="System")
    assert database.type is CheckType.DATABASE
    assert system.type is CheckType.SYSTEM
    assert system.checks == []


def test_is_schedulable_requires_enabled_and_interval() -> None:
    assert CheckConfig(id="a", name="A", interval=1000).is_schedulable
    assert not CheckConfig(id="b", name="B", interval=0).is_schedulable
    assert not CheckConfig(id="c", name="C", interval=1000, enabled=False).is_schedulable


def test_body_matches_substring_and_pattern() -> None:
    plain = HttpCheckConfig(id="a", name="A", url="http://x", expected_body="ok")
    pattern = HttpCheckConfig(
        id="b", name="B", url="http://x", expected_body=re.compile(r"v\d+")
    )
    unchecked = HttpCheckConfig(id="c", name="C", url="http://x")

    assert plain.body_matches("all ok")
    assert not plain.body_matches("down")
    assert pattern.body_matches("version v12")
    assert not pattern.body_matches("version none")
    assert unchecked.body_matches("")


def test_health_status_success_flags() -> None:
    assert HealthStatus.HEALTHY.is_success
    assert HealthStatus.DEGRADED.is_success
    assert not HealthStatus.UNHEALTHY.is_success
    assert not HealthStatus.UNKNOWN.is_success


def test_check_metrics_defaults() -> None:
    metrics = CheckMetrics()
    assert metrics.total_executions == 0
    assert metrics.uptime == 100.0
    assert metrics.last_execution_time.tzinfo == timezone.utc
