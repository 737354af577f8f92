"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir códigos de error de casos de uso a HTTP Exceptions RFC7807.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el dominio libre de HTTP.

Reglas:
  - NUNCA se propagan excepciones de infraestructura hacia la API.
  - Los use cases devuelven errores tipados (code + message).
  - La API traduce a RFC7807 (crosscutting.error_responses).

Colaboradores:
  - application.usecases (AccountErrorCode, EmployeeErrorCode)
  - crosscutting.error_responses (duplicate, not_found, etc.)
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from employee_api.application.usecases import (
    AccountError,
    AccountErrorCode,
    EmployeeError,
    EmployeeErrorCode,
)
from employee_api.crosscutting.error_responses import (
    duplicate,
    internal_error,
    invalid_credentials,
    not_found,
    validation_error,
)


def raise_account_error(error: AccountError) -> NoReturn:
    """Traduce AccountErrorCode -> HTTP (ambos códigos son 400)."""
    if error.code == AccountErrorCode.DUPLICATE:
        raise duplicate(error.message)
    if error.code == AccountErrorCode.INVALID_CREDENTIALS:
        raise invalid_credentials(error.message)
    raise internal_error()


def raise_employee_error(error: EmployeeError) -> NoReturn:
    """Traduce EmployeeErrorCode -> HTTP."""
    if error.code == EmployeeErrorCode.NOT_FOUND:
        raise not_found(error.message)
    if error.code == EmployeeErrorCode.DUPLICATE:
        raise duplicate(error.message)
    if error.code == EmployeeErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message)
    raise internal_error()
