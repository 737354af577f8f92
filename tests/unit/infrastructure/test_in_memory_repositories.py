"""
Name: In-Memory Repository Tests

Responsibilities:
  - Uniqueness contracts (DuplicateRecordError with constraint name)
  - Insertion ordering, defensive copies, partial updates
"""

from datetime import date
from uuid import uuid4

import pytest
from employee_api.crosscutting.exceptions import DuplicateRecordError
from employee_api.domain.entities import Department, Employee, UserAccount
from employee_api.infrastructure.repositories import (
    InMemoryEmployeeRepository,
    InMemoryUserRepository,
)

pytestmark = pytest.mark.unit


def _user(**overrides) -> UserAccount:
    values = {
        "id": uuid4(),
        "first_name": "Ada",
        "last_name": "Lovelace",
        "username": "adalove",
        "email": "ada@example.com",
        "password_hash": "hash",
    }
    values.update(overrides)
    return UserAccount(**values)


def _employee(**overrides) -> Employee:
    values = {
        "id": uuid4(),
        "employee_id": "E001",
        "first_name": "Grace",
        "last_name": "Hopper",
        "email": "grace@example.com",
        "phone": "5551234567",
        "department": Department.ENGINEERING,
        "position": "Engineer",
        "salary": 90000.0,
        "date_of_hire": date(2020, 1, 15),
    }
    values.update(overrides)
    return Employee(**values)


class TestInMemoryUserRepository:
    def test_create_sets_timestamps_and_default_role(self):
        repo = InMemoryUserRepository()

        created = repo.create_user(_user())

        assert created.roles == ["user"]
        assert created.created_at is not None
        assert repo.get_user(created.id).username == "adalove"

    @pytest.mark.parametrize(
        "overrides, constraint",
        [
            ({"email": "other@example.com"}, "uq_users_username"),
            ({"username": "other"}, "uq_users_email"),
        ],
    )
    def test_duplicates_raise_with_constraint(self, overrides, constraint):
        repo = InMemoryUserRepository()
        repo.create_user(_user())

        with pytest.raises(DuplicateRecordError) as exc_info:
            repo.create_user(_user(**overrides))

        assert exc_info.value.constraint == constraint

    def test_find_by_username_or_email(self):
        repo = InMemoryUserRepository()
        repo.create_user(_user())

        assert repo.find_by_username_or_email(username="adalove", email="x@y.z")
        assert repo.find_by_username_or_email(username="x", email="ada@example.com")
        assert repo.find_by_username_or_email(username="x", email="x@y.z") is None

    def test_returned_accounts_are_copies(self):
        repo = InMemoryUserRepository()
        created = repo.create_user(_user())

        created.roles.append("admin")

        assert repo.get_user(created.id).roles == ["user"]


class TestInMemoryEmployeeRepository:
    def test_list_keeps_insertion_order(self):
        repo = InMemoryEmployeeRepository()
        first = repo.create_employee(_employee())
        second = repo.create_employee(
            _employee(employee_id="E002", email="e2@example.com")
        )

        assert [e.id for e in repo.list_employees()] == [first.id, second.id]

    @pytest.mark.parametrize(
        "overrides, constraint",
        [
            ({"email": "other@example.com"}, "uq_employees_employee_id"),
            ({"employee_id": "E999"}, "uq_employees_email"),
        ],
    )
    def test_duplicates_raise_with_constraint(self, overrides, constraint):
        repo = InMemoryEmployeeRepository()
        repo.create_employee(_employee())

        with pytest.raises(DuplicateRecordError) as exc_info:
            repo.create_employee(_employee(**overrides))

        assert exc_info.value.constraint == constraint

    def test_update_applies_only_given_fields(self):
        repo = InMemoryEmployeeRepository()
        created = repo.create_employee(_employee())

        updated = repo.update_employee(created.id, {"position": "Lead"})

        assert updated.position == "Lead"
        assert updated.email == created.email
        assert updated.created_at == created.created_at

    def test_update_collision_raises(self):
        repo = InMemoryEmployeeRepository()
        repo.create_employee(_employee())
        other = repo.create_employee(
            _employee(employee_id="E002", email="e2@example.com")
        )

        with pytest.raises(DuplicateRecordError):
            repo.update_employee(other.id, {"employee_id": "E001"})

        assert repo.get_employee(other.id).employee_id == "E002"

    def test_update_rejects_unknown_fields(self):
        repo = InMemoryEmployeeRepository()
        created = repo.create_employee(_employee())

        with pytest.raises(ValueError):
            repo.update_employee(created.id, {"id": uuid4()})

    def test_update_missing_record_returns_none(self):
        assert InMemoryEmployeeRepository().update_employee(uuid4(), {}) is None

    def test_get_employees_by_ids_skips_missing(self):
        repo = InMemoryEmployeeRepository()
        created = repo.create_employee(_employee())

        found = repo.get_employees_by_ids([created.id, uuid4()])

        assert list(found) == [created.id]

    def test_find_conflict_can_exclude_a_record(self):
        repo = InMemoryEmployeeRepository()
        created = repo.create_employee(_employee())

        assert (
            repo.find_by_employee_id_or_email(
                employee_id="E001", email=None, exclude_id=created.id
            )
            is None
        )
        assert repo.find_by_employee_id_or_email(employee_id="E001", email=None)

    def test_delete_reports_whether_a_row_was_removed(self):
        repo = InMemoryEmployeeRepository()
        created = repo.create_employee(_employee())

        assert repo.delete_employee(created.id) is True
        assert repo.delete_employee(created.id) is False
