"""
===============================================================================
USE CASE: Create Employee
===============================================================================

Business Goal:
    Dar de alta un legajo con employee_id y email únicos.

Flujo:
    1) Normalizar email (minúsculas).
    2) Existencia combinada (employee_id OR email) -> DUPLICATE temprano.
    3) Persistir; UNIQUE del store (carrera) -> DUPLICATE.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CreateEmployeeUseCase

Collaborators:
    - EmployeeRepository: find_by_employee_id_or_email, create_employee
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID, uuid4

from ....crosscutting.exceptions import DuplicateRecordError
from ....crosscutting.logger import logger
from ....domain.entities import Department, Employee, EmployeeStatus
from ....domain.repositories import EmployeeRepository
from .employee_lookup import duplicate
from .employee_results import EmployeeResult


@dataclass
class CreateEmployeeInput:
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


class CreateEmployeeUseCase:
    """Use Case (Command): alta de legajo."""

    def __init__(self, repository: EmployeeRepository) -> None:
        self._repository = repository

    def execute(self, input_data: CreateEmployeeInput) -> EmployeeResult:
        email = input_data.email.strip().lower()
        employee_id = input_data.employee_id.strip()

        existing = self._repository.find_by_employee_id_or_email(
            employee_id=employee_id, email=email
        )
        if existing is not None:
            return EmployeeResult(error=duplicate())

        employee = Employee(
            id=uuid4(),
            employee_id=employee_id,
            first_name=input_data.first_name,
            last_name=input_data.last_name,
            email=email,
            phone=input_data.phone,
            department=input_data.department,
            position=input_data.position,
            salary=float(input_data.salary),
            date_of_hire=input_data.date_of_hire,
            manager_id=input_data.manager_id,
            status=input_data.status,
        )

        try:
            created = self._repository.create_employee(employee)
        except DuplicateRecordError as exc:
            logger.info(
                "Create employee: unique constraint hit after existence check",
                extra={"constraint": exc.constraint},
            )
            return EmployeeResult(error=duplicate())

        logger.info("Employee created", extra={"record_id": str(created.id)})
        return EmployeeResult(employee=created)
