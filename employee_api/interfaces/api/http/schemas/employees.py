"""
===============================================================================
TARJETA CRC — schemas/employees.py
===============================================================================

Módulo:
    Schemas HTTP para legajos de empleados

Responsabilidades:
    - Validar alta (todos los campos) y update parcial (solo los enviados)
      con las mismas reglas de campo.
    - Exponer `to_changes()` para el update: sólo campos presentes en el body.
    - Definir respuestas: manager expandido (list/get) o id crudo (create/update/search).

Colaboradores:
    - schemas.base (CamelModel + validadores)
    - domain.entities (enums, MIN_SALARY, PHONE_PATTERN)

Notas:
    - En el update, `null` explícito sólo es válido para `manager`.
    - El campo JSON `manager` mapea a `manager_id` en Python.
===============================================================================
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any
from uuid import UUID

from employee_api.domain.entities import (
    MIN_SALARY,
    PHONE_PATTERN,
    Department,
    EmployeeStatus,
)
from pydantic import Field, field_validator

from .base import CamelModel, email_text, name_text, required_text

_MSG_SALARY = "Salary must be at least 30,000"


def _phone_text(value: str | None) -> str:
    cleaned = (value or "").strip()
    if not PHONE_PATTERN.fullmatch(cleaned):
        raise ValueError("Phone number must be 10 digits")
    return cleaned


def _salary_value(value: float | None) -> float:
    # R: NaN e Infinity pasan cualquier comparación contra el piso.
    if value is None or not math.isfinite(value) or value < MIN_SALARY:
        raise ValueError(_MSG_SALARY)
    return value


def _not_null(value: Any, label: str) -> Any:
    if value is None:
        raise ValueError(f"{label} cannot be null")
    return value


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateEmployeeReq(CamelModel):
    employee_id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    department: Department
    position: str
    salary: float
    date_of_hire: date
    manager_id: UUID | None = Field(default=None, alias="manager")
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    @field_validator("employee_id")
    @classmethod
    def check_employee_id(cls, v: str) -> str:
        return required_text(v, "Employee ID is required")

    @field_validator("first_name")
    @classmethod
    def check_first_name(cls, v: str) -> str:
        return name_text(v, "First name")

    @field_validator("last_name")
    @classmethod
    def check_last_name(cls, v: str) -> str:
        return name_text(v, "Last name")

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return email_text(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str) -> str:
        return _phone_text(v)

    @field_validator("position")
    @classmethod
    def check_position(cls, v: str) -> str:
        return required_text(v, "Position is required")

    @field_validator("salary")
    @classmethod
    def check_salary(cls, v: float) -> float:
        return _salary_value(v)


class UpdateEmployeeReq(CamelModel):
    """Patch: cada campo es opcional; los ausentes no se tocan."""

    employee_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    department: Department | None = None
    position: str | None = None
    salary: float | None = None
    date_of_hire: date | None = None
    manager_id: UUID | None = Field(default=None, alias="manager")
    status: EmployeeStatus | None = None

    @field_validator("employee_id")
    @classmethod
    def check_employee_id(cls, v: str | None) -> str:
        return required_text(v, "Employee ID is required")

    @field_validator("first_name")
    @classmethod
    def check_first_name(cls, v: str | None) -> str:
        return name_text(v, "First name")

    @field_validator("last_name")
    @classmethod
    def check_last_name(cls, v: str | None) -> str:
        return name_text(v, "Last name")

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str | None) -> str:
        return email_text(v)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, v: str | None) -> str:
        return _phone_text(v)

    @field_validator("position")
    @classmethod
    def check_position(cls, v: str | None) -> str:
        return required_text(v, "Position is required")

    @field_validator("salary")
    @classmethod
    def check_salary(cls, v: float | None) -> float:
        return _salary_value(v)

    @field_validator("department")
    @classmethod
    def check_department(cls, v: Department | None) -> Department:
        return _not_null(v, "Department")

    @field_validator("date_of_hire")
    @classmethod
    def check_date_of_hire(cls, v: date | None) -> date:
        return _not_null(v, "Date of hire")

    @field_validator("status")
    @classmethod
    def check_status(cls, v: EmployeeStatus | None) -> EmployeeStatus:
        return _not_null(v, "Status")

    def to_changes(self) -> dict[str, Any]:
        """Solo los campos presentes en el body (snake_case)."""
        return {name: getattr(self, name) for name in self.model_fields_set}


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class ManagerRes(CamelModel):
    first_name: str
    last_name: str
    employee_id: str


class EmployeeRes(CamelModel):
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
    manager: ManagerRes | UUID | None = None
    status: EmployeeStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EmployeeEnvelopeRes(CamelModel):
    employee: EmployeeRes


class EmployeesListRes(CamelModel):
    employees: list[EmployeeRes]


class MessageRes(CamelModel):
    msg: str
