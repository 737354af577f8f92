"""
===============================================================================
MÓDULO: Middlewares HTTP (contexto + límite de payload)
===============================================================================

Objetivo
--------
1) RequestContextMiddleware:
   - Generar/propagar X-Request-Id
   - Setear contextvars (method/path) para correlación de logs
   - Access log (una línea por request) y métricas

2) BodyLimitMiddleware:
   - Rechazar payloads gigantes con 413 (Content-Length o chunked)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componentes:
  - RequestContextMiddleware
  - BodyLimitMiddleware

Colaboradores:
  - employee_api/context.py
  - crosscutting/metrics.py
  - crosscutting/error_responses.py
===============================================================================
"""

from __future__ import annotations

import json
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .error_responses import PROBLEM_JSON_MEDIA_TYPE, ErrorCode, build_problem
from .logger import logger
from .metrics import record_request_metrics

_MAX_REQUEST_ID_LEN = 128


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      RequestContextMiddleware

    Responsabilidades:
      - Aceptar X-Request-Id válido o generar uno nuevo
      - Devolver X-Request-Id en la respuesta
      - Emitir access log (si está habilitado) y métricas por request
      - Garantizar clear_context() para evitar leaks

    Colaboradores:
      - crosscutting.metrics.record_request_metrics
      - crosscutting.config (access_log_enabled)
    ----------------------------------------------------------------------------
    """

    _QUIET_PATHS = {"/healthz", "/metrics"}

    def __init__(self, app, access_log: bool | None = None):
        super().__init__(app)
        if access_log is None:
            from .config import get_settings

            access_log = get_settings().access_log_enabled()
        self._access_log = access_log

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = (request.headers.get("x-request-id") or "").strip()
        request_id = (
            incoming
            if incoming and len(incoming) <= _MAX_REQUEST_ID_LEN
            else str(uuid.uuid4())
        )

        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )
        request.state.request_id = request_id

        start = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-Id"] = request_id
            return response
        except Exception:
            logger.exception("request failed", extra={"status_code": 500})
            raise
        finally:
            latency = time.perf_counter() - start
            record_request_metrics(
                endpoint=request.url.path,
                method=request.method,
                status_code=status_code,
                latency_seconds=latency,
            )

            if self._access_log and request.url.path not in self._QUIET_PATHS:
                logger.info(
                    "request completed",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round(latency * 1000, 2),
                        "client": request.client.host if request.client else None,
                    },
                )

            clear_context()


class _BodyTooLarge(Exception):
    pass


class BodyLimitMiddleware:
    """
    ASGI middleware: rechaza requests cuyo body exceda max_body_bytes.

    Funciona tanto con Content-Length como con transferencia chunked.
    """

    def __init__(self, app, max_bytes: int | None = None):
        if max_bytes is None:
            from .config import get_settings

            max_bytes = get_settings().max_body_bytes
        self.app = app
        self._max_bytes = max_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        headers = {k.decode().lower(): v.decode() for k, v in scope.get("headers", [])}

        content_length = headers.get("content-length")
        if content_length and content_length.isdigit():
            if int(content_length) > self._max_bytes:
                logger.warning(
                    "payload too large (content-length)",
                    extra={"content_length": content_length, "path": path},
                )
                await self._send_413(send, path=path)
                return

        started = False
        received = 0

        async def send_wrapper(message):
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        async def receive_limited():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b"") or b"")
                if received > self._max_bytes:
                    raise _BodyTooLarge()
            return message

        try:
            await self.app(scope, receive_limited, send_wrapper)
        except _BodyTooLarge:
            # Si ya arrancó la respuesta no se puede enviar otra.
            if started:
                raise
            logger.warning(
                "payload too large (streaming)",
                extra={"received_bytes": received, "path": path},
            )
            await self._send_413(send, path=path)

    async def _send_413(self, send, *, path: str) -> None:
        problem = build_problem(
            status=413,
            code=ErrorCode.PAYLOAD_TOO_LARGE,
            detail=f"Request body too large. Maximum allowed: {self._max_bytes} bytes",
            instance=path,
        )
        body = json.dumps(problem, ensure_ascii=False).encode("utf-8")

        await send(
            {
                "type": "http.response.start",
                "status": 413,
                "headers": [
                    (b"content-type", PROBLEM_JSON_MEDIA_TYPE.encode()),
                    (b"content-length", str(len(body)).encode()),
                ],
            }
        )
        await send({"type": "http.response.body", "body": body})
