"""
PostgreSQL Repository Implementations.

Production implementations using raw parameterized SQL over psycopg.
"""

from .employee import PostgresEmployeeRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresEmployeeRepository",
]
