"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Roles e identidad autenticada

Responsabilidades:
    - Definir el enum de roles (user / admin).
    - Definir Identity: la proyección {id, roles} que viaja en el token y que
      el gate de autenticación adjunta a request.state.identity.

Colaboradores:
    - identity/tokens.py: emite/verifica tokens con estos datos.
    - identity/auth_gate.py: construye Identity por request.
    - identity/role_gate.py: decide sobre Identity.roles[0].

Notas:
    - Identity NO se persiste: vive lo que dura el request.
    - roles es una tupla ordenada; la posición 0 es el rol primario.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    """Roles soportados."""

    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True, slots=True)
class Identity:
    """Proyección mínima de la cuenta autenticada (id + roles)."""

    user_id: str
    roles: tuple[str, ...]

    @property
    def primary_role(self) -> str | None:
        return self.roles[0] if self.roles else None
