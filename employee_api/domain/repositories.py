"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for user accounts and employee records (ports).
- Keep the application layer independent from PostgreSQL / in-memory stores.
- Make the uniqueness contract explicit: writes that collide on a UNIQUE key
  raise DuplicateRecordError; everything else store-related raises DatabaseError.

Collaborators
- domain.entities: UserAccount, Employee
- crosscutting.exceptions: DatabaseError, DuplicateRecordError
- infrastructure.repositories: postgres / in_memory implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- "Not found" is None / False, never an exception.
"""

from typing import List, Mapping, Optional, Protocol
from uuid import UUID

from .entities import Employee, UserAccount


class UserRepository(Protocol):
    """R: Interface for credential record persistence."""

    def find_by_username_or_email(
        self, *, username: str, email: str
    ) -> Optional[UserAccount]:
        """R: Single combined existence query (username = ? OR email = ?)."""
        ...

    def find_by_login(self, identifier: str) -> Optional[UserAccount]:
        """
        R: Lookup for login: username equals identifier OR email equals the
        lower-cased identifier.
        """
        ...

    def get_user(self, user_id: UUID) -> Optional[UserAccount]:
        ...

    def create_user(self, user: UserAccount) -> UserAccount:
        """
        R: Persist a new account (password already hashed).

        Raises:
            DuplicateRecordError: username or email already taken.
        """
        ...


class EmployeeRepository(Protocol):
    """R: Interface for employee record persistence."""

    def find_by_employee_id_or_email(
        self,
        *,
        employee_id: str | None,
        email: str | None,
        exclude_id: UUID | None = None,
    ) -> Optional[Employee]:
        """R: Existence check over the two unique keys (optionally ignoring one row)."""
        ...

    def create_employee(self, employee: Employee) -> Employee:
        """
        Raises:
            DuplicateRecordError: employee_id or email already taken.
        """
        ...

    def list_employees(self) -> List[Employee]:
        ...

    def get_employee(self, record_id: UUID) -> Optional[Employee]:
        ...

    def get_employees_by_ids(self, record_ids: List[UUID]) -> dict[UUID, Employee]:
        """R: Batch lookup for manager expansion (missing ids are simply absent)."""
        ...

    def update_employee(
        self, record_id: UUID, changes: Mapping[str, object]
    ) -> Optional[Employee]:
        """
        R: Apply only the given fields and refresh updated_at.

        Returns None if the record does not exist.

        Raises:
            DuplicateRecordError: change collides with another record.
        """
        ...

    def delete_employee(self, record_id: UUID) -> bool:
        """R: True if a row was removed. No cascade over manager references."""
        ...

    def search_employees(
        self, *, department: str | None = None, position: str | None = None
    ) -> List[Employee]:
        """R: Exact, case-sensitive equality filters combined with AND."""
        ...

    def ping(self) -> bool:
        """R: Cheap connectivity check for /healthz."""
        ...
