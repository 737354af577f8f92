"""
Use Cases Layer (Business Operations)

This package exposes entry points for business logic, organized by feature/domain.

Structure
---------
usecases/
├── accounts/       # Signup and login (credential records + tokens)
└── employees/      # Employee records CRUD and search

Usage
-----
Import from subpackages for clarity:

    from employee_api.application.usecases.accounts import SignupUseCase
    from employee_api.application.usecases.employees import GetEmployeeUseCase

Or use the barrel exports from this module:

    from employee_api.application.usecases import SignupUseCase, GetEmployeeUseCase
"""

# Accounts
from .accounts import (
    AccountError,
    AccountErrorCode,
    AuthResult,
    LoginInput,
    LoginUseCase,
    PublicProfile,
    SignupInput,
    SignupUseCase,
)

# Employees
from .employees import (
    CreateEmployeeInput,
    CreateEmployeeUseCase,
    DeleteEmployeeResult,
    DeleteEmployeeUseCase,
    EmployeeError,
    EmployeeErrorCode,
    EmployeeListResult,
    EmployeeResult,
    EmployeeViewListResult,
    EmployeeViewResult,
    GetEmployeeUseCase,
    ListEmployeesUseCase,
    SearchEmployeesInput,
    SearchEmployeesUseCase,
    UpdateEmployeeInput,
    UpdateEmployeeUseCase,
)

__all__ = [
    # Accounts
    "SignupInput",
    "SignupUseCase",
    "LoginInput",
    "LoginUseCase",
    "AuthResult",
    "PublicProfile",
    "AccountError",
    "AccountErrorCode",
    # Employees
    "CreateEmployeeInput",
    "CreateEmployeeUseCase",
    "ListEmployeesUseCase",
    "GetEmployeeUseCase",
    "UpdateEmployeeInput",
    "UpdateEmployeeUseCase",
    "DeleteEmployeeUseCase",
    "SearchEmployeesInput",
    "SearchEmployeesUseCase",
    "EmployeeResult",
    "EmployeeViewResult",
    "EmployeeViewListResult",
    "EmployeeListResult",
    "DeleteEmployeeResult",
    "EmployeeError",
    "EmployeeErrorCode",
]
