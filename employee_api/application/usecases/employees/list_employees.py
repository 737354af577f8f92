"""
===============================================================================
USE CASE: List Employees (manager expanded)
===============================================================================

Responsibilities:
    - Devolver todos los legajos con el manager expandido a
      {firstName, lastName, employeeId} (ausente si no tiene o quedó colgando).

Collaborators:
    - EmployeeRepository: list_employees, get_employees_by_ids
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import EmployeeRepository
from .employee_lookup import expand_managers
from .employee_results import EmployeeViewListResult


class ListEmployeesUseCase:
    def __init__(self, repository: EmployeeRepository) -> None:
        self._repository = repository

    def execute(self) -> EmployeeViewListResult:
        employees = self._repository.list_employees()
        return EmployeeViewListResult(views=expand_managers(employees, self._repository))
