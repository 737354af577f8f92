"""
===============================================================================
TARJETA CRC — schemas/users.py
===============================================================================

Módulo:
    Schemas HTTP para cuentas (signup / login)

Responsabilidades:
    - Validar input de signup/login con mensajes estables.
    - Definir la respuesta {token, user} (perfil público, sin hash).

Colaboradores:
    - schemas.base (CamelModel + validadores)
    - domain.entities (longitudes de username/password)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from employee_api.domain.entities import (
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)
from pydantic import field_validator

from .base import CamelModel, email_text, name_text, required_text


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class SignupReq(CamelModel):
    first_name: str
    last_name: str
    username: str
    email: str
    password: str

    @field_validator("first_name")
    @classmethod
    def check_first_name(cls, v: str) -> str:
        return name_text(v, "First name")

    @field_validator("last_name")
    @classmethod
    def check_last_name(cls, v: str) -> str:
        return name_text(v, "Last name")

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        message = (
            f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters"
        )
        cleaned = required_text(v, message)
        if not USERNAME_MIN_LENGTH <= len(cleaned) <= USERNAME_MAX_LENGTH:
            raise ValueError(message)
        return cleaned

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return email_text(v)

    # R: el password no se sanitiza ni se recorta.
    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if len(v) < PASSWORD_MIN_LENGTH:
            raise ValueError(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
            )
        return v


class LoginReq(CamelModel):
    """`username` acepta username o email."""

    username: str
    password: str

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return required_text(v, "Username or email is required")


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class ProfileRes(CamelModel):
    id: UUID
    username: str
    email: str
    roles: list[str]


class AuthRes(CamelModel):
    token: str
    user: ProfileRes
