"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/employee.py
============================================================
Class: InMemoryEmployeeRepository

Responsibilities:
  - Almacenar legajos en memoria (tests / APP_ENV=test).
  - Replicar unicidad de employee_id y email bajo lock (como UNIQUE en Postgres).
  - Replicar ordering del repo Postgres: created_at ASC (orden de inserción).

Collaborators:
  - domain.entities.Employee
  - crosscutting.exceptions.DuplicateRecordError

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Sin cascada: borrar un manager deja referencias colgando.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Mapping, Optional
from uuid import UUID

from ....crosscutting.exceptions import DuplicateRecordError
from ....domain.entities import EMPLOYEE_MUTABLE_FIELDS, Employee


class InMemoryEmployeeRepository:
    """
    Repositorio in-memory, thread-safe, para legajos.

    dict preserva orden de inserción: equivale a ORDER BY created_at ASC.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._employees: Dict[UUID, Employee] = {}

    # =========================================================
    # Helpers internos
    # =========================================================
    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _find_conflict(
        self,
        *,
        employee_id: str | None,
        email: str | None,
        exclude_id: UUID | None,
    ) -> Optional[Employee]:
        # R: llamar con el lock tomado.
        for employee in self._employees.values():
            if exclude_id is not None and employee.id == exclude_id:
                continue
            if employee_id is not None and employee.employee_id == employee_id:
                return employee
            if email is not None and employee.email == email:
                return employee
        return None

    def _check_unique(self, candidate: Employee) -> None:
        conflict = self._find_conflict(
            employee_id=candidate.employee_id,
            email=candidate.email,
            exclude_id=candidate.id,
        )
        if conflict is None:
            return
        constraint = (
            "uq_employees_employee_id"
            if conflict.employee_id == candidate.employee_id
            else "uq_employees_email"
        )
        raise DuplicateRecordError("employee already exists", constraint=constraint)

    # =========================================================
    # Lecturas
    # =========================================================
    def find_by_employee_id_or_email(
        self,
        *,
        employee_id: str | None,
        email: str | None,
        exclude_id: UUID | None = None,
    ) -> Optional[Employee]:
        with self._lock:
            conflict = self._find_conflict(
                employee_id=employee_id, email=email, exclude_id=exclude_id
            )
            return replace(conflict) if conflict else None

    def list_employees(self) -> List[Employee]:
        with self._lock:
            return [replace(employee) for employee in self._employees.values()]

    def get_employee(self, record_id: UUID) -> Optional[Employee]:
        with self._lock:
            employee = self._employees.get(record_id)
            return replace(employee) if employee else None

    def get_employees_by_ids(self, record_ids: List[UUID]) -> dict[UUID, Employee]:
        with self._lock:
            return {
                record_id: replace(self._employees[record_id])
                for record_id in record_ids
                if record_id in self._employees
            }

    def search_employees(
        self, *, department: str | None = None, position: str | None = None
    ) -> List[Employee]:
        with self._lock:
            return [
                replace(employee)
                for employee in self._employees.values()
                if (not department or employee.department.value == department)
                and (not position or employee.position == position)
            ]

    def ping(self) -> bool:
        return True

    # =========================================================
    # Escrituras
    # =========================================================
    def create_employee(self, employee: Employee) -> Employee:
        now = self._now()
        with self._lock:
            self._check_unique(employee)
            stored = replace(employee, created_at=now, updated_at=now)
            self._employees[stored.id] = stored
            return replace(stored)

    def update_employee(
        self, record_id: UUID, changes: Mapping[str, object]
    ) -> Optional[Employee]:
        unknown = set(changes) - EMPLOYEE_MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Campos no actualizables: {sorted(unknown)}")

        with self._lock:
            current = self._employees.get(record_id)
            if current is None:
                return None
            if not changes:
                return replace(current)

            updated = replace(current, **changes, updated_at=self._now())
            self._check_unique(updated)
            self._employees[record_id] = updated
            return replace(updated)

    def delete_employee(self, record_id: UUID) -> bool:
        with self._lock:
            return self._employees.pop(record_id, None) is not None
