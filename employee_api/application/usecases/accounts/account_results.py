"""
===============================================================================
ACCOUNT USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Account Use Case Results

Business Goal:
    Tipos consistentes de resultado y error para signup / login.

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de propagar excepciones.
    - El router mapea AccountErrorCode -> HTTP en un solo lugar.
    - PublicProfile es la ÚNICA proyección de la cuenta que sale hacia HTTP:
      nunca incluye password ni hash.

-------------------------------------------------------------------------------
CRC CARD (Module-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    account_results models (module)

Responsibilities:
    - Definir AccountErrorCode / AccountError.
    - Definir PublicProfile y AuthResult.

Collaborators:
    - domain.entities.UserAccount
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from ....domain.entities import UserAccount


class AccountErrorCode(str, Enum):
    """
    Códigos:
      - DUPLICATE: username o email ya registrados.
      - INVALID_CREDENTIALS: login fallido (sin distinguir el motivo).
    """

    DUPLICATE = "DUPLICATE"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"


@dataclass(frozen=True)
class AccountError:
    code: AccountErrorCode
    message: str


@dataclass(frozen=True)
class PublicProfile:
    """Proyección pública de la cuenta: {id, username, email, roles}."""

    id: UUID
    username: str
    email: str
    roles: list[str]

    @classmethod
    def from_account(cls, user: UserAccount) -> "PublicProfile":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            roles=list(user.roles),
        )


@dataclass
class AuthResult:
    """
    Resultado de signup / login.

    Contrato:
      - Éxito: token y user != None, error == None
      - Falla: token y user == None, error != None
    """

    token: str | None = None
    user: PublicProfile | None = None
    error: AccountError | None = None
