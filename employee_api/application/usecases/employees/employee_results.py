"""
===============================================================================
EMPLOYEE USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Employee Use Case Results

Business Goal:
    Tipos consistentes de resultado y error para el CRUD + búsqueda de legajos.

Why (Context / Intención):
    - Los use cases devuelven resultados tipados; el router mapea a HTTP.
    - "Not found" e "id malformado" comparten código (NOT_FOUND): el cliente
      no puede distinguirlos.

-------------------------------------------------------------------------------
CRC CARD (Module-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    employee_results models (module)

Responsibilities:
    - Definir EmployeeErrorCode / EmployeeError.
    - Definir DTOs de resultado por operación.

Collaborators:
    - domain.entities: Employee, EmployeeView
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import Employee, EmployeeView


class EmployeeErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: input inválido que el schema no pudo detectar
        (ej. campo no actualizable).
      - NOT_FOUND: legajo inexistente o id malformado.
      - DUPLICATE: employee_id o email ya usados por otro legajo.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE = "DUPLICATE"


@dataclass(frozen=True)
class EmployeeError:
    code: EmployeeErrorCode
    message: str


@dataclass
class EmployeeResult:
    """
    Resultado de create / update (manager sin expandir).

    Contrato:
      - Éxito: employee != None y error == None
      - Falla: employee == None y error != None
    """

    employee: Employee | None = None
    error: EmployeeError | None = None


@dataclass
class EmployeeViewResult:
    """Resultado de get (manager expandido)."""

    view: EmployeeView | None = None
    error: EmployeeError | None = None


@dataclass
class EmployeeViewListResult:
    """Resultado de list (manager expandido por legajo)."""

    views: List[EmployeeView] = field(default_factory=list)
    error: EmployeeError | None = None


@dataclass
class EmployeeListResult:
    """Resultado de search (manager como id crudo)."""

    employees: List[Employee] = field(default_factory=list)
    error: EmployeeError | None = None


@dataclass
class DeleteEmployeeResult:
    deleted: bool
    error: EmployeeError | None = None
