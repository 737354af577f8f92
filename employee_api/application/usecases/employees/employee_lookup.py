"""
===============================================================================
EMPLOYEE LOOKUP HELPERS (shared by get / update / delete / list)
===============================================================================

Responsibilities:
    - parse_record_id: id de path -> UUID o None (malformado == inexistente).
    - expand_managers: Employee -> EmployeeView con ManagerSummary, resolviendo
      todos los managers en UNA consulta batch.
    - not_found: error NOT_FOUND consistente.

Notas:
    - Un manager_id colgando (manager borrado) deja manager=None en la vista.
===============================================================================
"""

from __future__ import annotations

from typing import Final, Iterable, List
from uuid import UUID

from ....domain.entities import Employee, EmployeeView, ManagerSummary
from ....domain.repositories import EmployeeRepository
from .employee_results import EmployeeError, EmployeeErrorCode

MSG_EMPLOYEE_NOT_FOUND: Final[str] = "Employee not found"
MSG_EMPLOYEE_EXISTS: Final[str] = "Employee already exists"


def parse_record_id(raw: str | UUID) -> UUID | None:
    if isinstance(raw, UUID):
        return raw
    try:
        return UUID(str(raw))
    except ValueError:
        return None


def not_found() -> EmployeeError:
    return EmployeeError(code=EmployeeErrorCode.NOT_FOUND, message=MSG_EMPLOYEE_NOT_FOUND)


def duplicate() -> EmployeeError:
    return EmployeeError(code=EmployeeErrorCode.DUPLICATE, message=MSG_EMPLOYEE_EXISTS)


def expand_managers(
    employees: Iterable[Employee], repository: EmployeeRepository
) -> List[EmployeeView]:
    employees = list(employees)
    manager_ids = list(
        dict.fromkeys(e.manager_id for e in employees if e.manager_id is not None)
    )
    managers = repository.get_employees_by_ids(manager_ids) if manager_ids else {}

    views: List[EmployeeView] = []
    for employee in employees:
        manager = managers.get(employee.manager_id) if employee.manager_id else None
        summary = (
            ManagerSummary(
                first_name=manager.first_name,
                last_name=manager.last_name,
                employee_id=manager.employee_id,
            )
            if manager is not None
            else None
        )
        views.append(EmployeeView(employee=employee, manager=summary))
    return views
