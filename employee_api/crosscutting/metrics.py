"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus)

Responsabilidades:
    - Definir métricas HTTP y de autenticación en un registry propio.
    - Proveer funciones pequeñas y estables para registrar eventos.
    - Cuidar cardinalidad (NO user_id, NO ids de empleados en labels).
    - Generar la respuesta de /metrics.

Colaboradores:
    - crosscutting.middleware: latencia y conteo HTTP.
    - identity.auth_gate / identity.role_gate: rechazos 401/403 por motivo.
    - application.usecases.accounts: intentos de login.
===============================================================================
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

_requests_total = Counter(
    "employee_api_requests_total",
    "Total de requests HTTP",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "employee_api_request_latency_seconds",
    "Latencia de requests HTTP (segundos)",
    ["endpoint", "method"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
    registry=_registry,
)

_auth_rejections_total = Counter(
    "employee_api_auth_rejections_total",
    "Requests rechazados por los gates de auth",
    ["reason"],
    registry=_registry,
)

_login_attempts_total = Counter(
    "employee_api_login_attempts_total",
    "Intentos de login por resultado",
    ["outcome"],
    registry=_registry,
)

_UUID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def _normalize_endpoint(path: str) -> str:
    """
    Normaliza paths para evitar cardinalidad alta.

    /api/employees/<cualquier id> -> /api/employees/{id} (incluye ids mal formados,
    que igual generan un 404 y no deben crear series nuevas).
    """
    path = _UUID_RE.sub("{id}", path)
    return re.sub(r"^/api/employees/(?!search$)[^/]+", "/api/employees/{id}", path)


def _status_bucket(code: int) -> str:
    """Agrupa status code para baja cardinalidad."""
    if 200 <= code < 300:
        return "2xx"
    if 300 <= code < 400:
        return "3xx"
    if 400 <= code < 500:
        return "4xx"
    if 500 <= code < 600:
        return "5xx"
    return "other"


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized, method=method, status=_status_bucket(status_code)
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_auth_rejection(reason: str) -> None:
    """reason: missing_token | malformed_header | invalid_token | forbidden."""
    _auth_rejections_total.labels(reason=reason).inc()


def record_login_attempt(outcome: str) -> None:
    """outcome: success | failure."""
    _login_attempts_total.labels(outcome=outcome).inc()


def get_metrics_response() -> tuple[bytes, str]:
    """Genera el body y content-type para /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
