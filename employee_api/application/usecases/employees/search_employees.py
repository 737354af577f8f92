"""
===============================================================================
USE CASE: Search Employees
===============================================================================

Reglas:
    - department / position opcionales; igualdad exacta, case-sensitive, AND.
    - Sin filtros (o vacíos) -> todos los legajos.
    - El manager NO se expande (se devuelve el id crudo).

Collaborators:
    - EmployeeRepository: search_employees
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....domain.repositories import EmployeeRepository
from .employee_results import EmployeeListResult


@dataclass
class SearchEmployeesInput:
    department: str | None = None
    position: str | None = None


class SearchEmployeesUseCase:
    def __init__(self, repository: EmployeeRepository) -> None:
        self._repository = repository

    def execute(self, input_data: SearchEmployeesInput) -> EmployeeListResult:
        employees = self._repository.search_employees(
            department=input_data.department or None,
            position=input_data.position or None,
        )
        return EmployeeListResult(employees=employees)
