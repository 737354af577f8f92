"""
===============================================================================
TARJETA CRC — identity/role_gate.py
===============================================================================

Módulo:
    Role Gate (dependencia FastAPI)

Responsabilidades:
    - Comparar el rol PRIMARIO (roles[0]) de la Identity contra la allow-list
      declarada por la ruta.
    - Rechazar con 403 si no hay Identity, si no tiene roles o si el rol
      primario no está permitido.

Colaboradores:
    - identity.auth_gate (debe correr antes y setear request.state.identity)
    - crosscutting.error_responses.forbidden
    - crosscutting.metrics.record_auth_rejection

Notas:
    - Chequeo por posición 0, NO intersección de conjuntos: una cuenta con
      roles ["user", "admin"] no pasa una ruta solo-admin. Es el comportamiento
      observado y se mantiene tal cual (ver DESIGN.md).
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Request

from ..crosscutting.error_responses import forbidden
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_auth_rejection
from .users import Identity, UserRole

MSG_FORBIDDEN = "Access denied: insufficient permissions"


def is_role_allowed(identity: Identity | None, allowed_roles: tuple[str, ...]) -> bool:
    """Policy pura: identity presente y roles[0] ∈ allowed_roles."""
    if identity is None or not identity.roles:
        return False
    return identity.roles[0] in allowed_roles


def authorize_roles(*allowed_roles: UserRole | str) -> Callable:
    """Dependency FastAPI: requiere que el rol primario esté en allowed_roles."""
    allowed = tuple(UserRole(role).value for role in allowed_roles)

    async def dependency(request: Request) -> Identity:
        identity = getattr(request.state, "identity", None)
        if not is_role_allowed(identity, allowed):
            logger.warning(
                "Role gate: access denied",
                extra={
                    "allowed_roles": list(allowed),
                    "primary_role": identity.primary_role if identity else None,
                },
            )
            record_auth_rejection("forbidden")
            raise forbidden(MSG_FORBIDDEN)
        return identity

    return dependency
