from __future__ import annotations

import logging

from healthwatch.domain.entities.health import HealthStatus, HealthSummary
from healthwatch.infrastructure.services import StructlogHealthEventSink
from tests.conftest import make_result


class _FakeLogger:
    def __init__(self) -> None:
        self.events = []

    def log(self, level, event, **fields) -> None:
        self.events.append((level, event, fields))


def test_healthy_result_logged_at_info() -> None:
    logger = _FakeLogger()
    sink = StructlogHealthEventSink(logger)

    sink.result_recorded(make_result("api", HealthStatus.HEALTHY, message="fine"))

    level, event, fields = logger.events[0]
    assert level == logging.INFO
    assert event == "health.check.executed"
    assert fields["check_id"] == "api"
    assert fields["status"] == "healthy"
    assert fields["detail"] == "fine"
    assert "error" not in fields


def test_unhealthy_result_logged_at_warning_with_error() -> None:
    logger = _FakeLogger()
    sink = StructlogHealthEventSink(logger)

    sink.result_recorded(
        make_result("db", HealthStatus.UNHEALTHY, error="Connection refused")
    )

    level, _, fields = logger.events[0]
    assert level == logging.WARNING
    assert fields["error"] == "Connection refused"


def test_summary_event_levels() -> None:
    logger = _FakeLogger()
    sink = StructlogHealthEventSink(logger)

    sink.summary_generated(HealthSummary(status=HealthStatus.DEGRADED, total_checks=2))
    sink.summary_generated(HealthSummary(status=HealthStatus.UNKNOWN, total_checks=1))

    assert [entry[0] for entry in logger.events] == [logging.INFO, logging.WARNING]
    assert logger.events[0][1] == "health.summary"
    assert logger.events[0][2]["overall_status"] == "degraded"


def test_default_logger_is_structlog() -> None:
    sink = StructlogHealthEventSink()
    sink.result_recorded(make_result())
