"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del dominio (cuentas de usuario y legajos de empleados)

Responsabilidades:
    - Definir UserAccount (Credential Record) y Employee (Employee Record).
    - Definir enums cerrados: Department, EmployeeStatus.
    - Centralizar las reglas de campo (longitudes, patrones, mínimos) para que
      schemas HTTP, repositorios y tests usen las mismas constantes.
    - Definir proyecciones de lectura (ManagerSummary, EmployeeView).

Colaboradores:
    - application/usecases/*: construyen y devuelven estas entidades.
    - infrastructure/repositories/*: persisten / mapean filas.
    - interfaces/api/http/schemas/*: validan input con las constantes de acá.

Reglas:
    - Sin IO, sin FastAPI, sin SQL.
    - password_hash nunca sale de la capa de aplicación hacia HTTP.
===============================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from uuid import UUID

# -----------------------------------------------------------------------------
# Reglas de campo
# -----------------------------------------------------------------------------
NAME_MAX_LENGTH = 50
USERNAME_MIN_LENGTH = 4
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 6
MIN_SALARY = 30_000

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
PHONE_PATTERN = re.compile(r"^\d{10}$")

DEFAULT_ROLE = "user"


class Department(str, Enum):
    ENGINEERING = "Engineering"
    SALES = "Sales"
    MARKETING = "Marketing"
    HR = "HR"
    FINANCE = "Finance"


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    ON_LEAVE = "On Leave"
    RESIGNED = "Resigned"


@dataclass
class UserAccount:
    """
    Registro de credenciales.

    Invariantes (garantizadas por el store):
      - username único
      - email único (se persiste en minúsculas)
    """

    id: UUID
    first_name: str
    last_name: str
    username: str
    email: str
    password_hash: str
    roles: list[str] = field(default_factory=lambda: [DEFAULT_ROLE])
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Employee:
    """
    Legajo de empleado.

    manager_id referencia a otro Employee.id; no hay FK: si el manager se
    borra, la referencia queda colgando y simplemente no se expande.
    """

    id: UUID
    employee_id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    department: Department
    position: str
    salary: float
    date_of_hire: date
    manager_id: UUID | None = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Campos que un update parcial puede tocar (id y timestamps son del servidor).
EMPLOYEE_MUTABLE_FIELDS: frozenset[str] = frozenset(
    {
        "employee_id",
        "first_name",
        "last_name",
        "email",
        "phone",
        "department",
        "position",
        "salary",
        "date_of_hire",
        "manager_id",
        "status",
    }
)


@dataclass(frozen=True, slots=True)
class ManagerSummary:
    """Proyección del manager embebida en listados/detalle."""

    first_name: str
    last_name: str
    employee_id: str


@dataclass(frozen=True, slots=True)
class EmployeeView:
    """Employee + manager expandido (None si no tiene o si quedó colgando)."""

    employee: Employee
    manager: ManagerSummary | None = None
