from __future__ import annotations

import httpx
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from healthwatch.application.models import ExecutionDefaults
from healthwatch.domain.entities.health import CheckType, HealthStatus
from healthwatch.infrastructure.checkers import CallableChecker, HttpChecker
from healthwatch.main.app import create_app
from healthwatch.main.container import get_container
from tests.conftest import outcome


def _upstream(request: httpx.Request) -> httpx.Response:
    if request.url.host == "down.local":
        return httpx.Response(500)
    return httpx.Response(200, json={"status": "up"})


async def _custom_probe(config, timeout_ms):
    status = HealthStatus(config.metadata.get("status", "healthy"))
    return outcome(status, f"custom {status.value}")


@pytest.fixture()
def client():
    app = create_app()
    container = get_container()
    container.http_checker.override(
        providers.Object(HttpChecker(transport=httpx.MockTransport(_upstream)))
    )
    container.execution_defaults.override(
        providers.Object(ExecutionDefaults(retry_delay_ms=0))
    )
    container.orchestrator().register_checker(
        CheckType.CUSTOM, CallableChecker(_custom_probe)
    )

    with TestClient(app) as test_client:
        yield test_client

    container.http_checker.reset_override()
    container.execution_defaults.reset_override()


def _register(client: TestClient, **payload) -> httpx.Response:
    return client.post("/api/health/checks", json=payload)


def test_root_lists_endpoints(client):
    response = client.get("/")
    assert response.status_code == 200
    body = response.json()
    assert body["endpoints"]["health"] == "/api/health"
    assert body["version"]


def test_register_list_and_execute(client):
    created = _register(
        client, id="web", name="Web", type="http", url="http://up.local/health"
    )
    assert created.status_code == 201
    assert created.json()["id"] == "web"

    listing = client.get("/api/health/checks").json()
    assert listing["total"] == 1
    assert listing["checks"][0]["type"] == "http"

    executed = client.post("/api/health/checks/web/execute")
    assert executed.status_code == 200
    assert executed.json()["status"] == "healthy"
    assert executed.json()["metadata"]["status_code"] == 200

    latest = client.get("/api/health/checks/web")
    assert latest.status_code == 200
    assert latest.json()["timestamp"] == executed.json()["timestamp"]

    history = client.get("/api/health/checks/web/history").json()
    assert len(history) == 1

    metrics = client.get("/api/health/metrics/web").json()
    assert metrics["total_executions"] == 1
    assert metrics["uptime"] == 100.0


def test_register_errors(client):
    assert _register(client, id="x", name="X").status_code == 400
    assert _register(client, id="x", name="X", type="ftp").status_code == 400
    assert (
        _register(
            client,
            id="re",
            name="Re",
            type="http",
            url="http://up.local",
            expected_body="(",
            expected_body_regex=True,
        ).status_code
        == 400
    )
    assert _register(client, id="x", name="X", type="custom").status_code == 201
    assert _register(client, id="x", name="X", type="custom").status_code == 409


def test_failing_check_returns_service_unavailable(client):
    _register(
        client,
        id="down",
        name="Down",
        type="http",
        url="http://down.local/health",
        retries=1,
    )

    response = client.post("/api/health/checks/down/execute")

    assert response.status_code == 503
    assert response.json()["error"] == "Unexpected status code: 500"
    assert response.json()["retry_count"] == 1


def test_overall_health_status_codes(client):
    _register(client, id="ok", name="OK", type="custom")
    assert client.get("/api/health").status_code == 200

    _register(
        client, id="slow", name="Slow", type="custom", metadata={"status": "degraded"}
    )
    degraded = client.get("/api/health")
    assert degraded.status_code == 206
    assert degraded.json()["checks"]["degraded"] == 1

    _register(
        client, id="bad", name="Bad", type="custom", metadata={"status": "unhealthy"}
    )
    detailed = client.get("/api/health/detailed")
    assert detailed.status_code == 503
    assert detailed.json()["total_checks"] == 3
    assert len(detailed.json()["checks"]) == 3


def test_toggle_excludes_check_from_batch(client):
    _register(client, id="a", name="A", type="custom")
    _register(
        client, id="b", name="B", type="custom", metadata={"status": "unhealthy"}
    )

    toggled = client.put("/api/health/checks/b/toggle", json={"enabled": False})
    assert toggled.status_code == 200
    assert toggled.json()["enabled"] is False

    summary = client.get("/api/health/detailed")
    assert summary.status_code == 200
    assert [check["id"] for check in summary.json()["checks"]] == ["a"]


def test_unregister_and_not_found(client):
    _register(client, id="gone", name="Gone", type="custom")

    assert client.delete("/api/health/checks/gone").status_code == 200
    assert client.delete("/api/health/checks/gone").status_code == 404
    assert client.get("/api/health/checks/gone").status_code == 404
    assert client.get("/api/health/metrics/gone").status_code == 404
    assert client.post("/api/health/checks/gone/execute").status_code == 404
    assert (
        client.put("/api/health/checks/gone/toggle", json={"enabled": True}).status_code
        == 404
    )
    assert client.get("/api/health/metrics").json() == {}


def test_custom_check_without_probe_is_unprocessable():
    app = create_app()

    with TestClient(app) as bare_client:
        _register(bare_client, id="job", name="Job", type="custom")
        response = bare_client.post("/api/health/checks/job/execute")

    assert response.status_code == 422
    assert "custom" in response.json()["detail"]
