"""
Name: Integration Test DB Setup

Responsibilities:
  - Ensure database schema exists before integration tests run
  - Run Alembic migrations once per test session
  - Give each test empty tables and a dedicated connection pool

Notes:
  - Only runs when RUN_INTEGRATION=1
  - Uses DATABASE_URL from environment (see alembic/env.py)
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from psycopg import connect
from psycopg_pool import ConnectionPool

RUN_INTEGRATION = os.getenv("RUN_INTEGRATION") == "1"
ROOT_DIR = Path(__file__).resolve().parents[2]


def _database_url() -> str:
    return os.environ["DATABASE_URL"]


@pytest.fixture(scope="session")
def migrated_db() -> str:
    if not RUN_INTEGRATION:
        pytest.skip("integration tests disabled")

    url = _database_url()
    try:
        with connect(url, autocommit=True, connect_timeout=2) as conn:
            conn.execute("SELECT 1")
    except Exception as exc:
        pytest.fail(f"DATABASE_URL is not reachable: {exc}")

    config = Config(str(ROOT_DIR / "alembic.ini"))
    config.set_main_option("script_location", str(ROOT_DIR / "alembic"))
    command.upgrade(config, "head")
    return url


@pytest.fixture
def clean_db(migrated_db: str) -> str:
    with connect(migrated_db, autocommit=True) as conn:
        conn.execute("TRUNCATE TABLE employees, users")
    return migrated_db


@pytest.fixture
def db_pool(clean_db: str):
    pool = ConnectionPool(conninfo=clean_db, min_size=1, max_size=2, open=True)
    try:
        yield pool
    finally:
        pool.close()
