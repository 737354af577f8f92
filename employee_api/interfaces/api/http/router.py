"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por bounded context (users/employees).

Patrones aplicados:
  - Composition over inheritance: router raíz compone sub-routers.
  - Feature-based modular routing.
  - Factory: build_router() para testear composición y evitar side-effects al importar.

Colaboradores:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.* (sub-routers por feature; cada uno trae su prefix /api/...)
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.employees import router as employees_router
from .routers.users import router as users_router


def build_router() -> APIRouter:
    """
    Construye el router raíz.

    Motivo:
      - Facilita tests (se puede invocar build_router() y verificar que incluye todo).
      - Reduce efectos colaterales al importar módulos (import-time side effects).
    """
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(users_router)
    api_router.include_router(employees_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
