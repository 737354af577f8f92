"""
===============================================================================
USE CASE: Update Employee (partial patch)
===============================================================================

Business Goal:
    Aplicar SOLO los campos enviados; el resto del legajo queda intacto.

Flujo:
    1) id malformado -> NOT_FOUND.
    2) Campos fuera de EMPLOYEE_MUTABLE_FIELDS -> VALIDATION_ERROR.
    3) Legajo inexistente -> NOT_FOUND (antes de mirar colisiones).
    4) Si cambia employee_id o email: existencia contra OTROS legajos -> DUPLICATE.
    5) Persistir (updated_at lo refresca el store); None -> NOT_FOUND;
       UNIQUE del store -> DUPLICATE.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    UpdateEmployeeUseCase

Collaborators:
    - EmployeeRepository: get_employee, find_by_employee_id_or_email, update_employee
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict
from uuid import UUID

from ....crosscutting.exceptions import DuplicateRecordError
from ....crosscutting.logger import logger
from ....domain.entities import EMPLOYEE_MUTABLE_FIELDS
from ....domain.repositories import EmployeeRepository
from .employee_lookup import duplicate, not_found, parse_record_id
from .employee_results import EmployeeError, EmployeeErrorCode, EmployeeResult


@dataclass
class UpdateEmployeeInput:
    """changes: snake_case -> valor ya validado (sólo los campos enviados)."""

    record_id: str | UUID
    changes: Dict[str, Any] = field(default_factory=dict)


class UpdateEmployeeUseCase:
    def __init__(self, repository: EmployeeRepository) -> None:
        self._repository = repository

    def execute(self, input_data: UpdateEmployeeInput) -> EmployeeResult:
        record_id = parse_record_id(input_data.record_id)
        if record_id is None:
            return EmployeeResult(error=not_found())

        unknown = set(input_data.changes) - EMPLOYEE_MUTABLE_FIELDS
        if unknown:
            return EmployeeResult(
                error=EmployeeError(
                    code=EmployeeErrorCode.VALIDATION_ERROR,
                    message=f"Fields cannot be updated: {', '.join(sorted(unknown))}",
                )
            )

        if self._repository.get_employee(record_id) is None:
            return EmployeeResult(error=not_found())

        changes = dict(input_data.changes)
        if "email" in changes:
            changes["email"] = str(changes["email"]).strip().lower()
        if "employee_id" in changes:
            changes["employee_id"] = str(changes["employee_id"]).strip()

        if "employee_id" in changes or "email" in changes:
            conflict = self._repository.find_by_employee_id_or_email(
                employee_id=changes.get("employee_id"),
                email=changes.get("email"),
                exclude_id=record_id,
            )
            if conflict is not None:
                return EmployeeResult(error=duplicate())

        try:
            updated = self._repository.update_employee(record_id, changes)
        except DuplicateRecordError as exc:
            logger.info(
                "Update employee: unique constraint hit",
                extra={"constraint": exc.constraint},
            )
            return EmployeeResult(error=duplicate())

        if updated is None:
            return EmployeeResult(error=not_found())

        logger.info(
            "Employee updated",
            extra={"record_id": str(record_id), "fields": sorted(changes)},
        )
        return EmployeeResult(employee=updated)
