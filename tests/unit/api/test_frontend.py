"""
Name: Frontend Static Serving Tests

Responsibilities:
  - Production serves the SPA build with index.html fallback
  - API paths never fall back to the SPA
  - Paths outside the build directory are not served
"""

import pytest
from employee_api.api.frontend import mount_frontend, resolve_asset
from employee_api.crosscutting.config import Settings
from fastapi import FastAPI
from fastapi.testclient import TestClient

pytestmark = pytest.mark.unit


@pytest.fixture
def build_dir(tmp_path):
    build = tmp_path / "build"
    (build / "static").mkdir(parents=True)
    (build / "index.html").write_text("<html>spa</html>")
    (build / "static" / "app.js").write_text("console.log('app')")
    (tmp_path / "secret.txt").write_text("do not serve")
    return build


def _settings(build_dir, app_env="production") -> Settings:
    return Settings(
        database_url="postgresql://x:x@localhost/x",
        app_env=app_env,
        jwt_secret="s" * 40,
        frontend_build_dir=str(build_dir),
    )


def test_resolve_asset_returns_existing_file(build_dir):
    assert resolve_asset(build_dir, "static/app.js").name == "app.js"


@pytest.mark.parametrize("requested", ["", "missing/route", "../secret.txt", "static"])
def test_resolve_asset_falls_back_to_index(build_dir, requested):
    assert resolve_asset(build_dir, requested).name == "index.html"


def test_not_mounted_outside_production(build_dir):
    app = FastAPI()

    assert mount_frontend(app, _settings(build_dir, app_env="development")) is False


def test_not_mounted_without_build(tmp_path):
    app = FastAPI()

    assert mount_frontend(app, _settings(tmp_path / "missing")) is False


def test_serves_spa_in_production(build_dir):
    app = FastAPI()
    assert mount_frontend(app, _settings(build_dir)) is True
    client = TestClient(app)

    asset = client.get("/static/app.js")
    deep_link = client.get("/employees/123/edit")
    api = client.get("/api/unknown")

    assert asset.status_code == 200
    assert "console.log" in asset.text
    assert deep_link.status_code == 200
    assert "spa" in deep_link.text
    assert api.status_code == 404
