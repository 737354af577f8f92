"""
Employee use cases (CRUD + search) and their result models.
"""

from __future__ import annotations

from .create_employee import CreateEmployeeInput, CreateEmployeeUseCase
from .delete_employee import DeleteEmployeeUseCase
from .employee_results import (
    DeleteEmployeeResult,
    EmployeeError,
    EmployeeErrorCode,
    EmployeeListResult,
    EmployeeResult,
    EmployeeViewListResult,
    EmployeeViewResult,
)
from .get_employee import GetEmployeeUseCase
from .list_employees import ListEmployeesUseCase
from .search_employees import SearchEmployeesInput, SearchEmployeesUseCase
from .update_employee import UpdateEmployeeInput, UpdateEmployeeUseCase

__all__ = [
    "CreateEmployeeUseCase",
    "CreateEmployeeInput",
    "ListEmployeesUseCase",
    "GetEmployeeUseCase",
    "UpdateEmployeeUseCase",
    "UpdateEmployeeInput",
    "DeleteEmployeeUseCase",
    "SearchEmployeesUseCase",
    "SearchEmployeesInput",
    "EmployeeResult",
    "EmployeeViewResult",
    "EmployeeViewListResult",
    "EmployeeListResult",
    "DeleteEmployeeResult",
    "EmployeeError",
    "EmployeeErrorCode",
]
