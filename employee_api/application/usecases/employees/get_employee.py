"""
===============================================================================
USE CASE: Get Employee (manager expanded)
===============================================================================

Reglas:
    - id inexistente o malformado -> NOT_FOUND (mismo error, nunca 500).

Collaborators:
    - EmployeeRepository: get_employee, get_employees_by_ids
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import EmployeeRepository
from .employee_lookup import expand_managers, not_found, parse_record_id
from .employee_results import EmployeeViewResult


class GetEmployeeUseCase:
    def __init__(self, repository: EmployeeRepository) -> None:
        self._repository = repository

    def execute(self, record_id: str | UUID) -> EmployeeViewResult:
        parsed = parse_record_id(record_id)
        if parsed is None:
            return EmployeeViewResult(error=not_found())

        employee = self._repository.get_employee(parsed)
        if employee is None:
            return EmployeeViewResult(error=not_found())

        (view,) = expand_managers([employee], self._repository)
        return EmployeeViewResult(view=view)
