"""
===============================================================================
TARJETA CRC — employee_api/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones de la aplicación a respuestas HTTP RFC7807.
  - Validación de request (body/query/path) -> 400 con errors[{field, msg}].
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos: todo 500 lleva el mismo mensaje genérico.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> INTERNAL_ERROR (con logging).
  - Observabilidad: correlación por request_id y error_id.

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - crosscutting.exceptions: EmployeeApiError y derivadas (DatabaseError)
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.exceptions import EmployeeApiError
from ..crosscutting.logger import logger

_MSG_SERVER_ERROR = "Server error"
_LOC_PREFIXES = {"body", "query", "path", "header", "cookie"}
_VALUE_ERROR_PREFIX = "Value error, "

_STATUS_CODES = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
    413: ErrorCode.PAYLOAD_TOO_LARGE,
    429: ErrorCode.RATE_LIMITED,
}


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def _to_field_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Pydantic errors -> [{field, msg}] con nombres de campo del JSON (camelCase)."""
    out: list[dict[str, str]] = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _LOC_PREFIXES:
            loc = loc[1:]
        msg = str(err.get("msg", "Invalid value"))
        if msg.startswith(_VALUE_ERROR_PREFIX):
            msg = msg[len(_VALUE_ERROR_PREFIX) :]
        out.append({"field": ".".join(loc) or "body", "msg": msg})
    return out


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = _to_field_errors(list(exc.errors()))
    # R: nunca se loguean los valores (pueden incluir passwords).
    logger.info(
        "Request validation failed",
        extra={"fields": [e["field"] for e in errors]},
    )
    app_exc = AppHTTPException(
        status_code=400,
        code=ErrorCode.VALIDATION_ERROR,
        detail=errors[0]["msg"] if errors else "Invalid request",
        errors=errors,
    )
    return await app_exception_handler(request, app_exc)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """404 de ruta inexistente, 405, etc. emitidos por Starlette."""
    code = _STATUS_CODES.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
    app_exc = AppHTTPException(
        status_code=exc.status_code,
        code=code,
        detail=str(exc.detail),
        headers=getattr(exc, "headers", None),
    )
    return await app_exception_handler(request, app_exc)


async def employee_api_error_handler(
    request: Request, exc: EmployeeApiError
) -> JSONResponse:
    """Errores de store/servicio: detalle solo en logs, 500 genérico al cliente."""
    request_id = _request_id_from(request)

    logger.error(
        "Error de servicio",
        extra={
            "code": exc.error_code,
            "error_id": exc.error_id,
            "message": exc.message,
            "request_id": request_id,
        },
    )

    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=_MSG_SERVER_ERROR,
        errors=[{"error_id": exc.error_id}],
    )
    return await app_exception_handler(request, app_exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica (no filtra internos en ningún ambiente).
    """
    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": _request_id_from(request), "error": str(exc)},
    )

    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=_MSG_SERVER_ERROR,
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - AppHTTPException se registra aparte de StarletteHTTPException
        (Starlette elige el handler más específico por MRO).
      - Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(EmployeeApiError, employee_api_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
