"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Errores internos coherentes con:
- error_code estable
- error_id para correlación con logs
- message humana (sin secretos ni SQL)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  EmployeeApiError + subclases

Responsabilidades:
  - Estandarizar errores de infraestructura antes de mapearlos a HTTP
  - Distinguir violaciones de unicidad (DuplicateRecordError) del resto

Colaboradores:
  - infrastructure/repositories/* (las lanzan)
  - application/usecases/* (capturan DuplicateRecordError)
  - api/exception_handlers.py (mapea el resto a 500)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class EmployeeApiError(Exception):
    """Base para errores internos del sistema."""

    error_code: str = "EMPLOYEE_API_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(EmployeeApiError):
    """Errores de DB (conexión, query, timeout, pool)."""

    error_code: str = "DATABASE_ERROR"


class DuplicateRecordError(DatabaseError):
    """
    El store rechazó una escritura por constraint UNIQUE.

    Es la garantía real de unicidad: el chequeo previo en los casos de uso
    es solo un early-exit.
    """

    error_code: str = "DUPLICATE_RECORD"

    def __init__(
        self,
        message: str,
        *,
        constraint: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.constraint = constraint
