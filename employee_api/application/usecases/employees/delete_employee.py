"""
===============================================================================
USE CASE: Delete Employee
===============================================================================

Reglas:
    - id inexistente o malformado -> NOT_FOUND.
    - Sin cascada: legajos que lo tenían como manager quedan con la referencia
      colgando (y dejan de expandirlo).

Collaborators:
    - EmployeeRepository: delete_employee
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.repositories import EmployeeRepository
from .employee_lookup import not_found, parse_record_id
from .employee_results import DeleteEmployeeResult


class DeleteEmployeeUseCase:
    def __init__(self, repository: EmployeeRepository) -> None:
        self._repository = repository

    def execute(self, record_id: str | UUID) -> DeleteEmployeeResult:
        parsed = parse_record_id(record_id)
        if parsed is None or not self._repository.delete_employee(parsed):
            return DeleteEmployeeResult(deleted=False, error=not_found())

        logger.info("Employee removed", extra={"record_id": str(parsed)})
        return DeleteEmployeeResult(deleted=True)
