"""
Name: PostgreSQL Repository Tests (offline)

Responsibilities:
  - SQL shape: parameterized values, column whitelist for partial updates
  - Row mapping to domain entities
  - UniqueViolation -> DuplicateRecordError, other failures -> DatabaseError

Notes:
  - The connection pool is a MagicMock; no database is touched.
"""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from employee_api.crosscutting.exceptions import DatabaseError, DuplicateRecordError
from employee_api.domain.entities import Department, Employee, EmployeeStatus, UserAccount
from employee_api.infrastructure.repositories import (
    PostgresEmployeeRepository,
    PostgresUserRepository,
)
from psycopg import errors as pg_errors

pytestmark = pytest.mark.unit

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _pool_with(conn: MagicMock) -> MagicMock:
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    return pool


def _conn_returning(*, one=None, all_rows=None, rowcount=0) -> MagicMock:
    conn = MagicMock()
    cursor = conn.execute.return_value
    cursor.fetchone.return_value = one
    cursor.fetchall.return_value = all_rows or []
    cursor.rowcount = rowcount
    return conn


def _user_row(user_id=None):
    return (
        user_id or uuid4(),
        "Ada",
        "Lovelace",
        "adalove",
        "ada@example.com",
        "hash",
        ["user"],
        NOW,
        NOW,
    )


def _employee_row(record_id=None, manager_id=None):
    return (
        record_id or uuid4(),
        "E001",
        "Grace",
        "Hopper",
        "grace@example.com",
        "5551234567",
        "Engineering",
        "Engineer",
        90000,
        date(2020, 1, 15),
        manager_id,
        "On Leave",
        NOW,
        NOW,
    )


def _sql(conn: MagicMock) -> str:
    return " ".join(conn.execute.call_args.args[0].split())


def _params(conn: MagicMock) -> tuple:
    return conn.execute.call_args.args[1]


class TestPostgresUserRepository:
    def test_find_by_login_prefers_username_and_lowercases_email(self):
        conn = _conn_returning(one=_user_row())
        repo = PostgresUserRepository(pool=_pool_with(conn))

        user = repo.find_by_login("Ada@Example.com")

        assert user.username == "adalove"
        assert _params(conn) == ("Ada@Example.com", "ada@example.com", "Ada@Example.com")
        assert "ORDER BY (username = %s) DESC" in _sql(conn)

    def test_find_by_login_returns_none_when_missing(self):
        repo = PostgresUserRepository(pool=_pool_with(_conn_returning(one=None)))

        assert repo.find_by_login("nobody") is None

    def test_create_user_maps_returned_row(self):
        user_id = uuid4()
        conn = _conn_returning(one=_user_row(user_id))
        repo = PostgresUserRepository(pool=_pool_with(conn))

        created = repo.create_user(
            UserAccount(
                id=user_id,
                first_name="Ada",
                last_name="Lovelace",
                username="adalove",
                email="ada@example.com",
                password_hash="hash",
            )
        )

        assert created.id == user_id
        assert created.roles == ["user"]
        assert created.created_at == NOW
        assert "RETURNING" in _sql(conn)

    def test_unique_violation_becomes_duplicate(self):
        conn = MagicMock()
        conn.execute.side_effect = pg_errors.UniqueViolation("duplicate key")
        repo = PostgresUserRepository(pool=_pool_with(conn))

        with pytest.raises(DuplicateRecordError):
            repo.create_user(
                UserAccount(
                    id=uuid4(),
                    first_name="Ada",
                    last_name="Lovelace",
                    username="adalove",
                    email="ada@example.com",
                    password_hash="hash",
                )
            )

    def test_other_failures_become_database_error(self):
        conn = MagicMock()
        conn.execute.side_effect = RuntimeError("connection lost")
        repo = PostgresUserRepository(pool=_pool_with(conn))

        with pytest.raises(DatabaseError) as exc_info:
            repo.get_user(uuid4())

        assert not isinstance(exc_info.value, DuplicateRecordError)


class TestPostgresEmployeeRepository:
    def test_row_mapping_converts_enums_and_salary(self):
        record_id = uuid4()
        conn = _conn_returning(one=_employee_row(record_id))
        repo = PostgresEmployeeRepository(pool=_pool_with(conn))

        employee = repo.get_employee(record_id)

        assert employee.department == Department.ENGINEERING
        assert employee.status == EmployeeStatus.ON_LEAVE
        assert employee.salary == 90000.0
        assert isinstance(employee.salary, float)

    def test_list_orders_by_creation(self):
        conn = _conn_returning(all_rows=[_employee_row(), _employee_row()])
        repo = PostgresEmployeeRepository(pool=_pool_with(conn))

        assert len(repo.list_employees()) == 2
        assert _sql(conn).endswith("ORDER BY created_at ASC, id ASC")

    def test_create_sends_enum_values(self):
        conn = _conn_returning(one=_employee_row())
        repo = PostgresEmployeeRepository(pool=_pool_with(conn))

        repo.create_employee(
            Employee(
                id=uuid4(),
                employee_id="E001",
                first_name="Grace",
                last_name="Hopper",
                email="grace@example.com",
                phone="5551234567",
                department=Department.SALES,
                position="Engineer",
                salary=90000.0,
                date_of_hire=date(2020, 1, 15),
                status=EmployeeStatus.RESIGNED,
            )
        )

        params = _params(conn)
        assert "Sales" in params
        assert "Resigned" in params
        assert not any(isinstance(p, (Department, EmployeeStatus)) for p in params)

    def test_search_builds_and_clauses(self):
        conn = _conn_returning(all_rows=[])
        repo = PostgresEmployeeRepository(pool=_pool_with(conn))

        repo.search_employees(department="Sales", position="Lead")

        assert "WHERE department = %s AND position = %s" in _sql(conn)
        assert _params(conn) == ("Sales", "Lead")

    def test_search_without_filters_has_no_where(self):
        conn = _conn_returning(all_rows=[])
        repo = PostgresEmployeeRepository(pool=_pool_with(conn))

        repo.search_employees()

        assert "WHERE" not in _sql(conn)
        assert _params(conn) == ()

    def test_update_sets_only_given_columns(self):
        record_id = uuid4()
        conn = _conn_returning(one=_employee_row(record_id))
        repo = PostgresEmployeeRepository(pool=_pool_with(conn))

        repo.update_employee(
            record_id, {"salary": 95000, "department": Department.HR}
        )

        sql = _sql(conn)
        assert "SET department = %s, salary = %s, updated_at = now()" in sql
        assert _params(conn) == ("HR", 95000, record_id)

    def test_update_missing_record_returns_none(self):
        repo = PostgresEmployeeRepository(pool=_pool_with(_conn_returning(one=None)))

        assert repo.update_employee(uuid4(), {"salary": 50000}) is None

    def test_update_rejects_unknown_columns(self):
        conn = MagicMock()
        repo = PostgresEmployeeRepository(pool=_pool_with(conn))

        with pytest.raises(ValueError):
            repo.update_employee(uuid4(), {"salary = 0; --": 1})

        conn.execute.assert_not_called()

    def test_empty_update_reads_current_row(self):
        record_id = uuid4()
        conn = _conn_returning(one=_employee_row(record_id))
        repo = PostgresEmployeeRepository(pool=_pool_with(conn))

        employee = repo.update_employee(record_id, {})

        assert employee.id == record_id
        assert not _sql(conn).startswith("UPDATE")

    def test_update_unique_violation_becomes_duplicate(self):
        conn = MagicMock()
        conn.execute.side_effect = pg_errors.UniqueViolation("duplicate key")
        repo = PostgresEmployeeRepository(pool=_pool_with(conn))

        with pytest.raises(DuplicateRecordError):
            repo.update_employee(uuid4(), {"email": "taken@example.com"})

    @pytest.mark.parametrize("rowcount, expected", [(1, True), (0, False)])
    def test_delete_uses_rowcount(self, rowcount, expected):
        conn = _conn_returning(rowcount=rowcount)
        repo = PostgresEmployeeRepository(pool=_pool_with(conn))

        assert repo.delete_employee(uuid4()) is expected

    def test_get_employees_by_ids_skips_query_for_empty_input(self):
        conn = MagicMock()
        repo = PostgresEmployeeRepository(pool=_pool_with(conn))

        assert repo.get_employees_by_ids([]) == {}
        conn.execute.assert_not_called()

    def test_get_employees_by_ids_indexes_by_id(self):
        first, second = uuid4(), uuid4()
        conn = _conn_returning(all_rows=[_employee_row(first), _employee_row(second)])
        repo = PostgresEmployeeRepository(pool=_pool_with(conn))

        found = repo.get_employees_by_ids([first, second])

        assert set(found) == {first, second}
        assert "id = ANY(%s)" in _sql(conn)

    def test_find_conflict_short_circuits_without_keys(self):
        conn = MagicMock()
        repo = PostgresEmployeeRepository(pool=_pool_with(conn))

        assert repo.find_by_employee_id_or_email(employee_id=None, email=None) is None
        conn.execute.assert_not_called()

    def test_ping(self):
        healthy = PostgresEmployeeRepository(pool=_pool_with(_conn_returning()))
        broken_conn = MagicMock()
        broken_conn.execute.side_effect = RuntimeError("down")
        broken = PostgresEmployeeRepository(pool=_pool_with(broken_conn))

        assert healthy.ping() is True
        assert broken.ping() is False
