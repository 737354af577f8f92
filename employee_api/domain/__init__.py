"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Evitar imports profundos y acoplamientos innecesarios.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import (
    EMPLOYEE_MUTABLE_FIELDS,
    Department,
    Employee,
    EmployeeStatus,
    EmployeeView,
    ManagerSummary,
    UserAccount,
)
from .repositories import EmployeeRepository, UserRepository

__all__ = [
    # Entities
    "UserAccount",
    "Employee",
    "EmployeeView",
    "ManagerSummary",
    "Department",
    "EmployeeStatus",
    "EMPLOYEE_MUTABLE_FIELDS",
    # Ports
    "UserRepository",
    "EmployeeRepository",
]
