"""
===============================================================================
TARJETA CRC — employee_api/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, token service, casos de uso) siguiendo DIP.
  - Exponer factories para FastAPI (Depends) y para scripts.
  - Mantener singletons con caching (lru_cache) para recursos compartidos.
  - Centralizar decisiones runtime basadas en Settings (config).

Colaboradores:
  - employee_api.crosscutting.config.get_settings
  - employee_api.domain.repositories.* (puertos)
  - employee_api.infrastructure.repositories.* (implementaciones)
  - employee_api.identity.tokens.TokenService
  - employee_api.application.usecases.* (casos de uso)

Patrones aplicados:
  - Composition Root
  - Dependency Inversion (use cases dependen de puertos)
  - Lazy singletons con lru_cache

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO debe depender de FastAPI (solo expone factories).
  - Tests: limpiar caches con `cache_clear()` entre casos (ver tests/conftest.py).
===============================================================================
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from .application.usecases import (
    CreateEmployeeUseCase,
    DeleteEmployeeUseCase,
    GetEmployeeUseCase,
    ListEmployeesUseCase,
    LoginUseCase,
    SearchEmployeesUseCase,
    SignupUseCase,
    UpdateEmployeeUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import EmployeeRepository, UserRepository
from .identity.tokens import TokenService
from .infrastructure.repositories import (
    InMemoryEmployeeRepository,
    InMemoryUserRepository,
    PostgresEmployeeRepository,
    PostgresUserRepository,
)

# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de cuentas (in-memory en test; Postgres en runtime)."""
    if get_settings().is_test():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_employee_repository() -> EmployeeRepository:
    """Repositorio de legajos (in-memory en test; Postgres en runtime)."""
    if get_settings().is_test():
        return InMemoryEmployeeRepository()
    return PostgresEmployeeRepository()


# =============================================================================
# Servicios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    """Token service con el secreto y TTL de Settings (inyectados, no globales)."""
    settings = get_settings()
    return TokenService(
        settings.jwt_secret,
        ttl=timedelta(minutes=settings.jwt_access_ttl_minutes),
    )


# =============================================================================
# Casos de uso (factory por request)
# =============================================================================


def get_signup_use_case() -> SignupUseCase:
    """Caso de uso: alta de cuenta + token."""
    return SignupUseCase(
        user_repository=get_user_repository(),
        token_service=get_token_service(),
    )


def get_login_use_case() -> LoginUseCase:
    """Caso de uso: login por username o email."""
    return LoginUseCase(
        user_repository=get_user_repository(),
        token_service=get_token_service(),
    )


def get_create_employee_use_case() -> CreateEmployeeUseCase:
    return CreateEmployeeUseCase(repository=get_employee_repository())


def get_list_employees_use_case() -> ListEmployeesUseCase:
    return ListEmployeesUseCase(repository=get_employee_repository())


def get_get_employee_use_case() -> GetEmployeeUseCase:
    return GetEmployeeUseCase(repository=get_employee_repository())


def get_update_employee_use_case() -> UpdateEmployeeUseCase:
    return UpdateEmployeeUseCase(repository=get_employee_repository())


def get_delete_employee_use_case() -> DeleteEmployeeUseCase:
    return DeleteEmployeeUseCase(repository=get_employee_repository())


def get_search_employees_use_case() -> SearchEmployeesUseCase:
    return SearchEmployeesUseCase(repository=get_employee_repository())


def clear_container_caches() -> None:
    """Descarta singletons cacheados (tests / recarga de Settings)."""
    get_user_repository.cache_clear()
    get_employee_repository.cache_clear()
    get_token_service.cache_clear()
