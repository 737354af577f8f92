"""
Name: Observability Tests

Responsibilities:
  - X-Request-Id propagation / generation
  - /healthz reports store connectivity
  - /metrics exposes Prometheus series with normalized endpoints
  - Unexpected failures -> generic 500 (no internals leaked)
"""

from uuid import UUID, uuid4

import pytest
from employee_api.container import (
    get_employee_repository,
    get_list_employees_use_case,
)
from employee_api.crosscutting.exceptions import DatabaseError

pytestmark = pytest.mark.unit


class _ExplodingUseCase:
    def __init__(self, exc: Exception):
        self._exc = exc

    def execute(self):
        raise self._exc


def test_request_id_is_echoed(client):
    response = client.get("/healthz", headers={"X-Request-Id": "req-123"})

    assert response.headers["X-Request-Id"] == "req-123"
    assert response.json()["request_id"] == "req-123"


def test_request_id_is_generated_when_missing(client):
    response = client.get("/healthz")

    assert UUID(response.headers["X-Request-Id"])


def test_oversized_request_id_is_replaced(client):
    response = client.get("/healthz", headers={"X-Request-Id": "x" * 500})

    assert response.headers["X-Request-Id"] != "x" * 500


def test_error_payload_carries_request_id(client):
    response = client.get("/api/employees", headers={"X-Request-Id": "req-err"})

    assert response.status_code == 401
    assert response.headers["content-type"].startswith("application/problem+json")
    assert {"request_id": "req-err"} in response.json()["errors"]


def test_healthz_reports_connected_store(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json()["ok"] is True
    assert response.json()["db"] == "connected"


def test_healthz_reports_disconnected_store(app, client):
    class _DownRepo:
        def ping(self) -> bool:
            return False

    app.app.dependency_overrides[get_employee_repository] = lambda: _DownRepo()

    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.json() == {
        "ok": False,
        "db": "disconnected",
        "request_id": response.headers["X-Request-Id"],
    }


def test_metrics_endpoint_exposes_series(client, auth_headers):
    client.get(f"/api/employees/{uuid4()}", headers=auth_headers)
    client.get("/api/employees/not-a-uuid", headers=auth_headers)

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    text = response.text
    assert "employee_api_requests_total" in text
    assert 'endpoint="/api/employees/{id}"' in text
    assert "not-a-uuid" not in text


def test_auth_rejections_are_counted(client):
    client.get("/api/employees")

    text = client.get("/metrics").text

    assert 'employee_api_auth_rejections_total{reason="missing_token"}' in text


def test_unhandled_error_is_generic_500(app, lenient_client, auth_headers):
    app.app.dependency_overrides[get_list_employees_use_case] = lambda: (
        _ExplodingUseCase(RuntimeError("secret internals: password=hunter2"))
    )

    response = lenient_client.get("/api/employees", headers=auth_headers)

    assert response.status_code == 500
    body = response.json()
    assert body["code"] == "INTERNAL_ERROR"
    assert body["detail"] == "Server error"
    assert "hunter2" not in response.text


def test_store_error_is_generic_500_with_error_id(app, lenient_client, auth_headers):
    error = DatabaseError("connection refused to db-host:5432")
    app.app.dependency_overrides[get_list_employees_use_case] = lambda: (
        _ExplodingUseCase(error)
    )

    response = lenient_client.get("/api/employees", headers=auth_headers)

    assert response.status_code == 500
    body = response.json()
    assert body["detail"] == "Server error"
    assert {"error_id": error.error_id} in body["errors"]
    assert "db-host" not in response.text


def test_unknown_route_is_404_problem(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"
