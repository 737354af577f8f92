"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/employee.py
============================================================
Class: PostgresEmployeeRepository

Responsibilities:
  - Persistir legajos en la tabla `employees` (CRUD + búsqueda por igualdad).
  - Update parcial: construir el SET sólo con columnas permitidas y refrescar
    updated_at en la misma sentencia.
  - Batch lookup por ids para expandir managers sin N+1.
  - Traducir UniqueViolation (uq_employees_employee_id / uq_employees_email)
    a DuplicateRecordError; cualquier otro fallo a DatabaseError.

Collaborators:
  - psycopg_pool.ConnectionPool (vía infrastructure.db.pool.get_pool)
  - domain.entities.Employee / Department / EmployeeStatus
  - crosscutting.exceptions / crosscutting.logger

Constraints / Notes:
  - manager_id NO tiene FK: borrar un manager deja referencias colgando.
  - Los nombres de columna del UPDATE salen de un whitelist fijo; los valores
    siempre van como parámetros.
  - Ordering: created_at ASC, id ASC (determinístico para la UI).
============================================================
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional
from uuid import UUID

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError, DuplicateRecordError
from ....crosscutting.logger import logger
from ....domain.entities import (
    EMPLOYEE_MUTABLE_FIELDS,
    Department,
    Employee,
    EmployeeStatus,
)

_EMPLOYEE_COLUMNS = (
    "id, employee_id, first_name, last_name, email, phone, department, "
    "position, salary, date_of_hire, manager_id, status, created_at, updated_at"
)

_ORDER_BY = "ORDER BY created_at ASC, id ASC"


def _get_pool() -> ConnectionPool:
    from ...db.pool import get_pool

    return get_pool()


def _row_to_employee(row: tuple) -> Employee:
    return Employee(
        id=row[0],
        employee_id=row[1],
        first_name=row[2],
        last_name=row[3],
        email=row[4],
        phone=row[5],
        department=Department(row[6]),
        position=row[7],
        salary=float(row[8]),
        date_of_hire=row[9],
        manager_id=row[10],
        status=EmployeeStatus(row[11]),
        created_at=row[12],
        updated_at=row[13],
    )


def _to_db_value(value: object) -> object:
    # R: los enums viajan como su valor textual (columnas TEXT + CHECK).
    if isinstance(value, (Department, EmployeeStatus)):
        return value.value
    return value


def _execute(
    *,
    query: str,
    params: Iterable[object],
    log_msg: str,
    log_extra: dict[str, object],
    pool: ConnectionPool | None,
    fetch: str,
):
    """
    Ejecuta una sentencia con manejo de errores uniforme.

    fetch:
      - "one"   -> fetchone()
      - "all"   -> fetchall()
      - "count" -> rowcount
    """
    try:
        with (pool or _get_pool()).connection() as conn:
            cur = conn.execute(query, tuple(params))
            if fetch == "one":
                return cur.fetchone()
            if fetch == "all":
                return cur.fetchall()
            return cur.rowcount
    except pg_errors.UniqueViolation as exc:
        constraint = getattr(getattr(exc, "diag", None), "constraint_name", None)
        logger.warning(log_msg, extra={**log_extra, "constraint": constraint})
        raise DuplicateRecordError(
            f"{log_msg}: unique violation", constraint=constraint, original_error=exc
        ) from exc
    except Exception as exc:
        logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
        raise DatabaseError(f"{log_msg}: {exc}", original_error=exc) from exc


class PostgresEmployeeRepository:
    """Repositorio de legajos sobre PostgreSQL (pool inyectable para tests)."""

    def __init__(self, pool: ConnectionPool | None = None) -> None:
        self._pool = pool

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
        if employee_id is None and email is None:
            return None

        row = _execute(
            query=f"""
                SELECT {_EMPLOYEE_COLUMNS}
                FROM employees
                WHERE (employee_id = %s OR email = %s)
                  AND (%s::uuid IS NULL OR id <> %s::uuid)
                LIMIT 1
            """,
            params=(employee_id, email, exclude_id, exclude_id),
            log_msg="PostgresEmployeeRepository: find_by_employee_id_or_email failed",
            log_extra={"employee_id": employee_id},
            pool=self._pool,
            fetch="one",
        )
        return _row_to_employee(row) if row else None

    def list_employees(self) -> List[Employee]:
        rows = _execute(
            query=f"SELECT {_EMPLOYEE_COLUMNS} FROM employees {_ORDER_BY}",
            params=(),
            log_msg="PostgresEmployeeRepository: list_employees failed",
            log_extra={},
            pool=self._pool,
            fetch="all",
        )
        return [_row_to_employee(row) for row in rows]

    def get_employee(self, record_id: UUID) -> Optional[Employee]:
        row = _execute(
            query=f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE id = %s",
            params=(record_id,),
            log_msg="PostgresEmployeeRepository: get_employee failed",
            log_extra={"record_id": str(record_id)},
            pool=self._pool,
            fetch="one",
        )
        return _row_to_employee(row) if row else None

    def get_employees_by_ids(self, record_ids: List[UUID]) -> dict[UUID, Employee]:
        if not record_ids:
            return {}

        rows = _execute(
            query=f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE id = ANY(%s)",
            params=(list(record_ids),),
            log_msg="PostgresEmployeeRepository: get_employees_by_ids failed",
            log_extra={"count": len(record_ids)},
            pool=self._pool,
            fetch="all",
        )
        employees = [_row_to_employee(row) for row in rows]
        return {employee.id: employee for employee in employees}

    def search_employees(
        self, *, department: str | None = None, position: str | None = None
    ) -> List[Employee]:
        clauses: list[str] = []
        params: list[object] = []
        if department:
            clauses.append("department = %s")
            params.append(department)
        if position:
            clauses.append("position = %s")
            params.append(position)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        rows = _execute(
            query=f"SELECT {_EMPLOYEE_COLUMNS} FROM employees {where} {_ORDER_BY}",
            params=params,
            log_msg="PostgresEmployeeRepository: search_employees failed",
            log_extra={"department": department, "position": position},
            pool=self._pool,
            fetch="all",
        )
        return [_row_to_employee(row) for row in rows]

    def ping(self) -> bool:
        try:
            with (self._pool or _get_pool()).connection() as conn:
                conn.execute("SELECT 1")
            return True
        except Exception as exc:
            logger.warning(
                "PostgresEmployeeRepository: ping failed", extra={"error": str(exc)}
            )
            return False

    # =========================================================
    # Escrituras
    # =========================================================
    def create_employee(self, employee: Employee) -> Employee:
        row = _execute(
            query=f"""
                INSERT INTO employees
                    (id, employee_id, first_name, last_name, email, phone,
                     department, position, salary, date_of_hire, manager_id, status)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING {_EMPLOYEE_COLUMNS}
            """,
            params=(
                employee.id,
                employee.employee_id,
                employee.first_name,
                employee.last_name,
                employee.email,
                employee.phone,
                _to_db_value(employee.department),
                employee.position,
                employee.salary,
                employee.date_of_hire,
                employee.manager_id,
                _to_db_value(employee.status),
            ),
            log_msg="PostgresEmployeeRepository: create_employee failed",
            log_extra={"employee_id": employee.employee_id},
            pool=self._pool,
            fetch="one",
        )
        if not row:
            raise DatabaseError(
                "PostgresEmployeeRepository: create_employee failed (no row returned)"
            )
        return _row_to_employee(row)

    def update_employee(
        self, record_id: UUID, changes: Mapping[str, object]
    ) -> Optional[Employee]:
        unknown = set(changes) - EMPLOYEE_MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Campos no actualizables: {sorted(unknown)}")

        if not changes:
            return self.get_employee(record_id)

        # R: orden estable de columnas para que el SQL generado sea reproducible.
        columns = sorted(changes)
        assignments = ", ".join(f"{column} = %s" for column in columns)
        params = [_to_db_value(changes[column]) for column in columns]

        row = _execute(
            query=f"""
                UPDATE employees
                SET {assignments}, updated_at = now()
                WHERE id = %s
                RETURNING {_EMPLOYEE_COLUMNS}
            """,
            params=(*params, record_id),
            log_msg="PostgresEmployeeRepository: update_employee failed",
            log_extra={"record_id": str(record_id), "fields": columns},
            pool=self._pool,
            fetch="one",
        )
        return _row_to_employee(row) if row else None

    def delete_employee(self, record_id: UUID) -> bool:
        count = _execute(
            query="DELETE FROM employees WHERE id = %s",
            params=(record_id,),
            log_msg="PostgresEmployeeRepository: delete_employee failed",
            log_extra={"record_id": str(record_id)},
            pool=self._pool,
            fetch="count",
        )
        return count > 0
