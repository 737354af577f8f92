"""
Name: Hardening Tests (body limit, CORS)

Responsibilities:
  - Oversized bodies -> 413 before the route runs
  - CORS preflight answered for configured origins only
"""

import pytest
from employee_api.crosscutting.middleware import BodyLimitMiddleware
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

pytestmark = pytest.mark.unit


def _echo_app(max_bytes: int) -> FastAPI:
    app = FastAPI()
    app.add_middleware(BodyLimitMiddleware, max_bytes=max_bytes)

    @app.post("/echo")
    async def echo(request: Request):
        body = await request.body()
        return {"size": len(body)}

    return app


class TestBodyLimit:
    def test_small_body_passes(self):
        client = TestClient(_echo_app(max_bytes=64))

        response = client.post("/echo", content=b"x" * 10)

        assert response.status_code == 200
        assert response.json() == {"size": 10}

    def test_large_body_is_rejected(self):
        client = TestClient(_echo_app(max_bytes=64))

        response = client.post("/echo", content=b"x" * 100)

        assert response.status_code == 413
        body = response.json()
        assert body["code"] == "PAYLOAD_TOO_LARGE"
        assert "64" in body["detail"]

    def test_streamed_body_is_rejected(self):
        client = TestClient(_echo_app(max_bytes=64))

        def chunks():
            for _ in range(10):
                yield b"x" * 16

        response = client.post("/echo", content=chunks())

        assert response.status_code == 413

    def test_app_uses_configured_limit(self, monkeypatch, signup_payload):
        monkeypatch.setenv("MAX_BODY_BYTES", "50")
        from employee_api.api.main import create_app
        from employee_api.crosscutting.config import get_settings

        get_settings.cache_clear()
        with TestClient(create_app()) as client:
            response = client.post("/api/users/signup", json=signup_payload())

        assert response.status_code == 413


class TestCors:
    def test_preflight_from_allowed_origin(self, client):
        response = client.options(
            "/api/employees",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization, Content-Type",
            },
        )

        assert response.status_code == 200
        assert (
            response.headers["access-control-allow-origin"] == "http://localhost:3000"
        )
        assert "POST" in response.headers["access-control-allow-methods"]

    def test_preflight_from_unknown_origin_is_refused(self, client):
        response = client.options(
            "/api/employees",
            headers={
                "Origin": "http://evil.example",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    def test_simple_request_gets_cors_header(self, client):
        response = client.get(
            "/healthz", headers={"Origin": "http://localhost:3000"}
        )

        assert (
            response.headers["access-control-allow-origin"] == "http://localhost:3000"
        )
