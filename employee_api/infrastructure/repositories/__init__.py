"""
============================================================
TARJETA CRC
============================================================
Class: employee_api.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer implementaciones concretas de repositorios (Postgres e InMemory)
  en un único punto de importación.
- Mantener una API estable para el composition root (container.py).

Collaborators:
- Repositorios Postgres (SQL crudo, psycopg)
- Repositorios InMemory (testing)
============================================================
"""

# ---------------------------
# In-memory implementations
# Usados para tests y APP_ENV=test.
# No persisten datos tras reiniciar la app.
# ---------------------------
from .in_memory import InMemoryEmployeeRepository, InMemoryUserRepository

# ---------------------------
# Postgres implementations
# Implementaciones de producción; unicidad garantizada por constraints.
# ---------------------------
from .postgres import PostgresEmployeeRepository, PostgresUserRepository

__all__ = [
    # Postgres
    "PostgresUserRepository",
    "PostgresEmployeeRepository",
    # In-memory
    "InMemoryUserRepository",
    "InMemoryEmployeeRepository",
]
